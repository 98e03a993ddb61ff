"""The computer opponent's default policy."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from eights_engine.cards import Suit
from eights_engine.moves import DrawCard, PlayCard, SelectSuit
from strategies.base import Strategy

if TYPE_CHECKING:
    from eights_engine.cards import Card
    from eights_engine.moves import Move
    from eights_engine.state import GameState

DEFAULT_SUIT = Suit.HEARTS


class FirstMatchStrategy(Strategy):
    """Plays the first playable card in hand order, otherwise draws.

    No weighing between several playable cards; wilds are not saved.
    After a wild it names the suit it holds most of.
    """

    @property
    def name(self) -> str:
        return "FirstMatch"

    def select_move(self, state: GameState, legal_moves: list[Move]) -> Move:
        """Select the first play, falling back to a draw."""
        if not legal_moves:
            raise ValueError("No legal moves available")

        # Suit picking only happens here when this policy drives the human seat
        suit_moves = [m for m in legal_moves if isinstance(m, SelectSuit)]
        if suit_moves:
            wanted = self.choose_suit(state, state.current_hand)
            return next((m for m in suit_moves if m.suit == wanted), suit_moves[0])

        for move in legal_moves:
            if isinstance(move, PlayCard):
                return move

        return next(m for m in legal_moves if isinstance(m, DrawCard))

    def choose_suit(self, state: GameState, hand: tuple[Card, ...]) -> Suit:
        """Most frequent suit in ``hand``.

        Among equally frequent suits, the one whose last card sits latest in
        the hand wins. An empty hand gets ``DEFAULT_SUIT``.
        """
        if not hand:
            return DEFAULT_SUIT

        counts = Counter(card.suit for card in hand)
        top = max(counts.values())
        for card in reversed(hand):
            if counts[card.suit] == top:
                return card.suit
        return DEFAULT_SUIT
