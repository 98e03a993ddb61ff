"""Card, Suit, and Rank models for Crazy Eights."""

from __future__ import annotations

import random
import uuid
from dataclasses import dataclass, field
from enum import Enum, IntEnum


class Suit(str, Enum):
    """Card suits. Values are the names the presentation layer passes around."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    def __str__(self) -> str:
        return self.symbol

    @property
    def symbol(self) -> str:
        return {
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
            Suit.SPADES: "♠",
        }[self]

    @property
    def is_red(self) -> bool:
        return self in (Suit.HEARTS, Suit.DIAMONDS)


class Rank(IntEnum):
    """Card ranks (Ace=1 through King=13)."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        return self.symbol

    @property
    def symbol(self) -> str:
        if self.value == 1:
            return "A"
        elif self.value <= 10:
            return str(self.value)
        else:
            return self.name[0]


# Playable on anything; whoever plays it declares the next suit.
WILD_RANK = Rank.EIGHT


def _new_card_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True)
class Card:
    """A playing card.

    Two cards are equal only if they share rank, suit *and* id, so every
    card dealt from a deck keeps its own identity for UI tracking.
    """

    rank: Rank
    suit: Suit
    id: str = field(default_factory=_new_card_id)

    @property
    def is_wild(self) -> bool:
        return self.rank == WILD_RANK

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    def __str__(self) -> str:
        return f"{self.rank.symbol}{self.suit.symbol}"

    def describe(self) -> str:
        """Long form used in action transcripts, e.g. ``8 of hearts``."""
        return f"{self.rank.symbol} of {self.suit.value}"


def create_deck() -> list[Card]:
    """Create a standard 52-card deck, each card with a fresh id."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def shuffle_deck(deck: list[Card], seed: int | None = None) -> list[Card]:
    """Return a shuffled copy of the deck."""
    rng = random.Random(seed)
    shuffled = deck.copy()
    rng.shuffle(shuffled)
    return shuffled


def is_valid_move(card: Card, top_card: Card | None, current_suit: Suit) -> bool:
    """Whether ``card`` may be played onto ``top_card`` with ``current_suit`` in effect.

    A card is playable if it is wild, follows the current suit, or matches
    the rank of the top card. Without a top card only the first two apply.
    """
    if card.is_wild:
        return True
    if card.suit == current_suit:
        return True
    return top_card is not None and card.rank == top_card.rank
