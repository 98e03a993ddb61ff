"""Game runner for Crazy Eights simulations."""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from eights_engine.executor import execute_move, init_game, take_ai_turn
from eights_engine.move_generator import generate_legal_moves
from eights_engine.state import Side

if TYPE_CHECKING:
    from eights_engine.state import GameState
    from strategies.base import Strategy

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a completed game."""

    game_id: str
    winner: str | None  # "player", "ai", "tie", or None if the move cap was hit
    move_count: int
    final_hand_sizes: tuple[int, int]
    deck_remaining: int
    player_strategies: tuple[str, str]
    seed: int | None
    duration_ms: float


@dataclass
class MoveRecord:
    """Record of a single transition."""

    side: str
    action: str
    state_after: dict


@dataclass
class GameLog:
    """Complete log of a game."""

    game_id: str
    timestamp: str
    seed: int | None
    player_strategies: tuple[str, str]
    initial_state: dict
    moves: list[MoveRecord] = field(default_factory=list)
    result: GameResult | None = None


class GameRunner:
    """Runs Crazy Eights games between two strategies.

    The first strategy sits in the human seat and goes through the same
    ``execute_move`` path the presentation layer uses; the second one is
    the computer and is driven tick by tick through ``take_ai_turn``.
    """

    def __init__(
        self,
        player_strategy: Strategy,
        ai_strategy: Strategy,
        max_moves: int = 2000,
        log_moves: bool = True,
    ):
        """Initialize the game runner.

        Args:
            player_strategy: Strategy for the human seat.
            ai_strategy: Strategy for the computer seat.
            max_moves: Transitions allowed before the game is abandoned.
            log_moves: Whether to log individual moves.
        """
        self.strategies = (player_strategy, ai_strategy)
        self.max_moves = max_moves
        self.log_moves = log_moves

    def run_game(self, seed: int | None = None) -> tuple[GameResult, GameLog | None]:
        """Run a single game.

        Args:
            seed: Random seed for reproducibility.

        Returns:
            Tuple of (result, log). Log is None if log_moves is False.
        """
        start_time = time.perf_counter()
        game_id = str(uuid.uuid4())
        player_strategy, ai_strategy = self.strategies

        state = init_game(seed=seed)
        player_strategy.on_game_start(state, Side.PLAYER)
        ai_strategy.on_game_start(state, Side.AI)

        game_log = None
        if self.log_moves:
            game_log = GameLog(
                game_id=game_id,
                timestamp=datetime.now().isoformat(),
                seed=seed,
                player_strategies=(player_strategy.name, ai_strategy.name),
                initial_state=state_to_dict(state),
            )

        move_count = 0

        while not state.is_game_over and move_count < self.max_moves:
            side = state.current_player

            if side is Side.AI:
                new_state = take_ai_turn(state, ai_strategy)
            else:
                legal_moves = generate_legal_moves(state)
                if not legal_moves:
                    # Shouldn't happen in a valid game
                    break
                move = player_strategy.select_move(state, legal_moves)
                new_state = execute_move(state, move)

            if new_state is state:
                logger.warning("Game %s stalled on %s's turn", game_id, side.value)
                break

            move_count += 1
            if game_log:
                game_log.moves.append(
                    MoveRecord(
                        side=side.value,
                        action=new_state.last_action,
                        state_after=state_to_dict(new_state),
                    )
                )
            state = new_state

        duration_ms = (time.perf_counter() - start_time) * 1000

        result = GameResult(
            game_id=game_id,
            winner=state.winner.value if state.winner else None,
            move_count=move_count,
            final_hand_sizes=(len(state.player_hand), len(state.ai_hand)),
            deck_remaining=len(state.deck),
            player_strategies=(player_strategy.name, ai_strategy.name),
            seed=seed,
            duration_ms=duration_ms,
        )

        if game_log:
            game_log.result = result

        for strategy in self.strategies:
            strategy.on_game_end(state, state.winner)

        return result, game_log


def state_to_dict(state: GameState) -> dict:
    """Convert game state to a dictionary for logging."""
    return {
        "status": state.status.value,
        "current_player": state.current_player.value,
        "current_suit": state.current_suit.value,
        "top_card": str(state.top_card) if state.top_card else None,
        "deck_size": len(state.deck),
        "discard_size": len(state.discard_pile),
        "player_hand": [str(c) for c in state.player_hand],
        "ai_hand": [str(c) for c in state.ai_hand],
        "winner": state.winner.value if state.winner else None,
    }


def run_batch(
    player_strategy: Strategy,
    ai_strategy: Strategy,
    num_games: int,
    start_seed: int = 0,
    log_moves: bool = False,
) -> list[GameResult]:
    """Run multiple games.

    Args:
        player_strategy: Strategy for the human seat.
        ai_strategy: Strategy for the computer seat.
        num_games: Number of games to run.
        start_seed: Starting seed (incremented for each game).
        log_moves: Whether to log moves (slower).

    Returns:
        List of game results.
    """
    runner = GameRunner(player_strategy, ai_strategy, log_moves=log_moves)
    results = []

    for i in range(num_games):
        result, _ = runner.run_game(seed=start_seed + i)
        results.append(result)

    return results
