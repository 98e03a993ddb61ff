"""Immutable game state models for Crazy Eights."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from eights_engine.cards import Card, Suit, create_deck, shuffle_deck

INITIAL_HAND_SIZE = 8
WELCOME_MESSAGE = "Welcome to Crazy Eights!"


class Side(str, Enum):
    """One of the two seats at the table."""

    PLAYER = "player"
    AI = "ai"

    @property
    def other(self) -> Side:
        return Side.AI if self is Side.PLAYER else Side.PLAYER


class GameStatus(str, Enum):
    """Current status of the game."""

    WAITING = "waiting"  # No game dealt yet
    PLAYING = "playing"  # Current player may play or draw
    SUIT_PICKING = "suit_picking"  # A wild was played, its owner must name a suit
    GAME_OVER = "game_over"


class Winner(str, Enum):
    """Outcome of a finished game."""

    PLAYER = "player"
    AI = "ai"
    TIE = "tie"


@dataclass(frozen=True, slots=True)
class GameState:
    """Complete immutable game state.

    Attributes:
        deck: Draw pile; the top of the pile is the last element
        player_hand: Cards held by the human player
        ai_hand: Cards held by the computer
        discard_pile: Played cards; only the last one matters for legality
        current_suit: Suit that the next play must follow
        current_player: Whose turn it is
        status: Where the game is in its state machine
        winner: Set only once status is GAME_OVER
        last_action: Transcript of the most recent event, for display only
    """

    deck: tuple[Card, ...]
    player_hand: tuple[Card, ...]
    ai_hand: tuple[Card, ...]
    discard_pile: tuple[Card, ...]
    current_suit: Suit
    current_player: Side = Side.PLAYER
    status: GameStatus = GameStatus.PLAYING
    winner: Winner | None = None
    last_action: str = ""

    @property
    def top_card(self) -> Card | None:
        """Top of the discard pile.

        Only a WAITING state may lack one; anything else is a bug.
        """
        if not self.discard_pile:
            assert self.status == GameStatus.WAITING, "discard pile is empty mid-game"
            return None
        return self.discard_pile[-1]

    @property
    def is_game_over(self) -> bool:
        return self.status == GameStatus.GAME_OVER

    @property
    def current_hand(self) -> tuple[Card, ...]:
        return self.hand(self.current_player)

    def hand(self, side: Side) -> tuple[Card, ...]:
        return self.player_hand if side is Side.PLAYER else self.ai_hand

    def all_cards(self) -> tuple[Card, ...]:
        """Every card on the table, in no particular order."""
        return self.deck + self.player_hand + self.ai_hand + self.discard_pile

    def with_hand(self, side: Side, hand: tuple[Card, ...]) -> GameState:
        """Return new state with the given side's hand replaced."""
        if side is Side.PLAYER:
            return replace(self, player_hand=hand)
        return replace(self, ai_hand=hand)

    def with_deck(self, deck: tuple[Card, ...]) -> GameState:
        """Return new state with updated deck."""
        return replace(self, deck=deck)

    def with_discard_pile(self, discard_pile: tuple[Card, ...]) -> GameState:
        """Return new state with updated discard pile."""
        return replace(self, discard_pile=discard_pile)

    def with_current_suit(self, current_suit: Suit) -> GameState:
        """Return new state with updated current suit."""
        return replace(self, current_suit=current_suit)

    def with_current_player(self, current_player: Side) -> GameState:
        """Return new state with updated current player."""
        return replace(self, current_player=current_player)

    def with_status(self, status: GameStatus) -> GameState:
        """Return new state with updated status."""
        return replace(self, status=status)

    def with_winner(self, winner: Winner) -> GameState:
        """Return new state with the game finished in favour of ``winner``."""
        return replace(self, status=GameStatus.GAME_OVER, winner=winner)

    def with_last_action(self, last_action: str) -> GameState:
        """Return new state with updated action transcript."""
        return replace(self, last_action=last_action)


def create_waiting_state() -> GameState:
    """State shown before the first deal: empty table, nothing playable."""
    return GameState(
        deck=(),
        player_hand=(),
        ai_hand=(),
        discard_pile=(),
        current_suit=Suit.HEARTS,
        current_player=Side.PLAYER,
        status=GameStatus.WAITING,
        last_action=WELCOME_MESSAGE,
    )


def create_initial_state(deck: list[Card] | None = None, seed: int | None = None) -> GameState:
    """Deal a new game.

    Args:
        deck: Optional pre-ordered 52-card deck. If None, creates and shuffles a new one.
        seed: Random seed for shuffling (only used if deck is None).

    Returns:
        A PLAYING state with the player to move.
    """
    if deck is None:
        deck = shuffle_deck(create_deck(), seed)

    player_hand = tuple(deck[:INITIAL_HAND_SIZE])
    ai_hand = tuple(deck[INITIAL_HAND_SIZE : 2 * INITIAL_HAND_SIZE])
    remaining = tuple(deck[2 * INITIAL_HAND_SIZE :])

    # Seed the discard pile from the top of what is left
    first_discard = remaining[-1]

    return GameState(
        deck=remaining[:-1],
        player_hand=player_hand,
        ai_hand=ai_hand,
        discard_pile=(first_discard,),
        current_suit=first_discard.suit,
        current_player=Side.PLAYER,
        status=GameStatus.PLAYING,
        last_action="Game started! Your turn.",
    )
