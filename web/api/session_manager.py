"""Game session management for the web API."""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable

from eights_engine.cards import Card, Suit, is_valid_move
from eights_engine.executor import (
    draw_card,
    handle_suit_select,
    init_game,
    play_card,
    take_ai_turn,
)
from eights_engine.state import GameStatus, Side

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from eights_engine.state import GameState
    from strategies.base import Strategy

DEFAULT_THINK_DELAY = 1.5
MAX_AI_RETRIES = 3


@dataclass
class GameSession:
    """One human playing the computer.

    All transitions go through ``_commit`` so that the AI tick is scheduled
    (or cancelled) in exactly one place. The tick is an asyncio task: it
    waits ``think_delay`` seconds, then applies ``take_ai_turn`` only if the
    state it was scheduled for is still the committed one.
    """

    id: str
    state: GameState
    strategy: Strategy
    created_at: datetime
    think_delay: float = DEFAULT_THINK_DELAY
    seed: int | None = None
    move_history: list[dict] = field(default_factory=list)

    _state_listeners: list[Callable[[dict], None]] = field(default_factory=list)
    _ai_task: asyncio.Task | None = None
    _ai_failures: int = 0

    @property
    def is_ai_turn(self) -> bool:
        """Whether the computer is due to act."""
        return self.state.status == GameStatus.PLAYING and self.state.current_player is Side.AI

    @property
    def ai_pending(self) -> bool:
        """Whether an AI tick is scheduled and has not run yet."""
        return self._ai_task is not None and not self._ai_task.done()

    def add_listener(self, callback: Callable[[dict], None]) -> None:
        """Add a state change listener."""
        self._state_listeners.append(callback)

    def remove_listener(self, callback: Callable[[dict], None]) -> None:
        """Remove a state change listener."""
        if callback in self._state_listeners:
            self._state_listeners.remove(callback)

    def _notify_listeners(self, event: dict) -> None:
        """Notify all listeners of a state change."""
        for listener in self._state_listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("State listener failed for session %s", self.id)

    # Player actions. Each returns True if the state changed.

    def play_card(self, card_id: str) -> bool:
        """Play the player's card with ``card_id``."""
        card = self.find_player_card(card_id)
        if card is None:
            return False
        return self._commit(play_card(self.state, card), Side.PLAYER)

    def draw_card(self) -> bool:
        """Draw for the player (or skip if the deck is empty)."""
        return self._commit(draw_card(self.state), Side.PLAYER)

    def select_suit(self, suit: Suit) -> bool:
        """Resolve the player's wild."""
        return self._commit(handle_suit_select(self.state, suit), Side.PLAYER)

    def restart(self, seed: int | None = None) -> None:
        """Deal a new game, dropping any AI tick still waiting."""
        self.cancel_ai_turn()
        self._ai_failures = 0
        self.seed = seed
        self.move_history.clear()
        new_state = init_game(seed=seed)
        self.strategy.on_game_start(new_state, Side.AI)
        self._commit(new_state, None)

    def find_player_card(self, card_id: str) -> Card | None:
        """Look up a card in the player's hand by id."""
        return next((c for c in self.state.player_hand if c.id == card_id), None)

    # AI scheduling

    def schedule_ai_turn(self) -> None:
        """Start the think-delay task if it is the computer's move.

        Must be called from inside a running event loop.
        """
        if not self.is_ai_turn or self.ai_pending:
            return
        loop = asyncio.get_running_loop()
        self._ai_task = loop.create_task(self._ai_tick(self.state))
        logger.debug("Session %s: AI tick scheduled in %.2fs", self.id, self.think_delay)

    def cancel_ai_turn(self) -> None:
        """Cancel a scheduled AI tick, if any."""
        task = self._ai_task
        self._ai_task = None
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()
            logger.debug("Session %s: AI tick cancelled", self.id)

    async def _ai_tick(self, scheduled_for: GameState) -> None:
        await asyncio.sleep(self.think_delay)

        # Another transition got in first; it will have rescheduled if needed
        if self.state is not scheduled_for:
            logger.debug("Session %s: stale AI tick dropped", self.id)
            return

        self._ai_task = None
        try:
            new_state = take_ai_turn(self.state, self.strategy)
        except Exception:
            logger.exception("Session %s: AI turn failed", self.id)
            self._handle_ai_failure()
            return

        self._ai_failures = 0
        logger.info("Session %s: %s", self.id, new_state.last_action)
        self._commit(new_state, Side.AI)

    def _handle_ai_failure(self) -> None:
        """Retry a failed AI tick, then give up and tell the listeners."""
        self._ai_failures += 1
        if self._ai_failures <= MAX_AI_RETRIES:
            logger.warning(
                "Session %s: retrying AI turn (%d/%d)", self.id, self._ai_failures, MAX_AI_RETRIES
            )
            self.schedule_ai_turn()
            return

        logger.error("Session %s: AI turn failed %d times, giving up", self.id, self._ai_failures)
        self._notify_listeners({
            "type": "error",
            "message": "The computer could not make a move. Restart the game to continue.",
            "state": self.to_client_state(),
        })

    async def wait_for_ai(self) -> None:
        """Wait until the computer has finished all of its consecutive ticks."""
        while self.ai_pending:
            await asyncio.wait({self._ai_task})

    def _commit(self, new_state: GameState, actor: Side | None) -> bool:
        """Install ``new_state`` as the committed state.

        A rejected action (same state object) changes nothing and notifies
        nobody.
        """
        if new_state is self.state:
            return False

        old_state = self.state
        self.state = new_state
        self.cancel_ai_turn()

        record = {
            "actor": actor.value if actor else None,
            "action": new_state.last_action,
            "timestamp": datetime.now().isoformat(),
            "hand_sizes_before": [len(old_state.player_hand), len(old_state.ai_hand)],
            "hand_sizes_after": [len(new_state.player_hand), len(new_state.ai_hand)],
        }
        self.move_history.append(record)

        if new_state.is_game_over:
            logger.info("Session %s finished: winner=%s", self.id, new_state.winner.value)
            self.strategy.on_game_end(new_state, new_state.winner)

        self.schedule_ai_turn()
        self._notify_listeners({
            "type": "game_state",
            "move": record,
            "state": self.to_client_state(),
        })
        return True

    def to_client_state(self) -> dict:
        """Convert game state to a client-friendly format.

        The computer's cards are hidden; the player's carry ``playable``
        flags so the UI can highlight them.
        """
        state = self.state
        top_card = state.top_card
        player_can_act = state.status == GameStatus.PLAYING and state.current_player is Side.PLAYER

        return {
            "game_id": self.id,
            "status": state.status.value,
            "current_player": state.current_player.value,
            "current_suit": state.current_suit.value,
            "current_suit_symbol": state.current_suit.symbol,
            "current_suit_color": _suit_color(state.current_suit),
            "winner": state.winner.value if state.winner else None,
            "last_action": state.last_action,
            "deck_count": len(state.deck),
            "top_card": _card_to_dict(top_card) if top_card else None,
            "discard_count": len(state.discard_pile),
            "player_hand": [
                {
                    **_card_to_dict(c),
                    "playable": player_can_act
                    and is_valid_move(c, top_card, state.current_suit),
                }
                for c in state.player_hand
            ],
            "ai_hand_count": len(state.ai_hand),
            "ai_thinking": self.ai_pending,
        }


def _suit_color(suit: Suit) -> str:
    return "red" if suit.is_red else "black"


def _card_to_dict(card: Card) -> dict:
    """Convert a Card to a dictionary."""
    return {
        "id": card.id,
        "rank": card.rank.value,
        "rank_symbol": card.rank.symbol,
        "suit": card.suit.value,
        "suit_symbol": card.suit.symbol,
        "color": _suit_color(card.suit),
        "display": str(card),
        "is_wild": card.is_wild,
    }


class GameSessionManager:
    """Manages all active game sessions."""

    def __init__(self, think_delay: float = DEFAULT_THINK_DELAY, strategy_name: str = "first-match"):
        self._sessions: dict[str, GameSession] = {}
        self._strategy_factory = StrategyFactory()
        self.think_delay = think_delay
        self.strategy_name = strategy_name

    def create_session(
        self,
        seed: int | None = None,
        think_delay: float | None = None,
        strategy_name: str | None = None,
        strategy_params: dict[str, Any] | None = None,
    ) -> GameSession:
        """Create a session and deal its first game."""
        session_id = str(uuid.uuid4())
        strategy = self._strategy_factory.create(
            strategy_name or self.strategy_name, strategy_params
        )
        state = init_game(seed=seed)

        session = GameSession(
            id=session_id,
            state=state,
            strategy=strategy,
            created_at=datetime.now(),
            think_delay=self.think_delay if think_delay is None else think_delay,
            seed=seed,
        )
        strategy.on_game_start(state, Side.AI)

        self._sessions[session_id] = session
        logger.info("Session %s created (strategy=%s)", session_id, strategy.name)
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def delete_session(self, session_id: str) -> bool:
        """Delete a session, cancelling its pending AI tick."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.cancel_ai_turn()
        return True

    def shutdown(self) -> None:
        """Cancel every pending AI tick."""
        for session in self._sessions.values():
            session.cancel_ai_turn()

    def list_sessions(self) -> list[dict]:
        """List all active sessions."""
        return [
            {
                "id": s.id,
                "created_at": s.created_at.isoformat(),
                "status": s.state.status.value,
                "current_player": s.state.current_player.value,
                "winner": s.state.winner.value if s.state.winner else None,
                "strategy": s.strategy.name,
            }
            for s in self._sessions.values()
        ]


class StrategyFactory:
    """Factory for creating strategy instances."""

    AVAILABLE_STRATEGIES = {
        "first-match": "Plays the first playable card, names its most common suit",
        "random": "Random player (baseline)",
    }

    def create(self, name: str, params: dict[str, Any] | None = None) -> Strategy:
        """Create a strategy instance."""
        params = params or {}

        match name.lower():
            case "first-match":
                from strategies.first_match import FirstMatchStrategy
                return FirstMatchStrategy()

            case "random":
                from strategies.random_strategy import RandomStrategy
                return RandomStrategy(seed=params.get("seed"))

            case _:
                raise ValueError(f"Unknown strategy: {name}")

    def list_strategies(self) -> dict[str, str]:
        """List available strategies with descriptions."""
        return self.AVAILABLE_STRATEGIES.copy()


# Global session manager instance
session_manager = GameSessionManager()
