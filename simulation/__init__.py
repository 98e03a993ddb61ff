"""Simulation running."""

from simulation.runner import (
    GameLog,
    GameResult,
    GameRunner,
    MoveRecord,
    run_batch,
    state_to_dict,
)

__all__ = [
    "GameResult",
    "GameLog",
    "GameRunner",
    "MoveRecord",
    "run_batch",
    "state_to_dict",
]
