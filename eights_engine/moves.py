"""Move types for Crazy Eights."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from eights_engine.cards import Card, Suit


class MoveType(IntEnum):
    """Type of move."""

    PLAY_CARD = auto()
    DRAW_CARD = auto()  # Draws, or skips the turn when the deck is empty
    SELECT_SUIT = auto()  # Name the suit after a wild


@dataclass(frozen=True, slots=True)
class Move(ABC):
    """Base class for all moves."""

    @property
    @abstractmethod
    def move_type(self) -> MoveType:
        """The type of this move."""
        ...

    @abstractmethod
    def __str__(self) -> str:
        """Human-readable move description."""
        ...


@dataclass(frozen=True, slots=True)
class PlayCard(Move):
    """Play a card from hand onto the discard pile."""

    card: Card

    @property
    def move_type(self) -> MoveType:
        return MoveType.PLAY_CARD

    def __str__(self) -> str:
        return f"Play {self.card}"


@dataclass(frozen=True, slots=True)
class DrawCard(Move):
    """Draw the top card of the deck."""

    @property
    def move_type(self) -> MoveType:
        return MoveType.DRAW_CARD

    def __str__(self) -> str:
        return "Draw"


@dataclass(frozen=True, slots=True)
class SelectSuit(Move):
    """Declare the suit in effect after a wild."""

    suit: Suit

    @property
    def move_type(self) -> MoveType:
        return MoveType.SELECT_SUIT

    def __str__(self) -> str:
        return f"Choose {self.suit.value}"
