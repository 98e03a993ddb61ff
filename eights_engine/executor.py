"""Move execution for Crazy Eights.

Every function here takes a state and returns the next one. Illegal
requests are not errors: they come back as the very same state object,
so callers can detect a rejection with ``new_state is state``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from eights_engine.cards import Card, Suit, is_valid_move
from eights_engine.move_generator import generate_legal_moves
from eights_engine.moves import DrawCard, Move, PlayCard, SelectSuit
from eights_engine.state import (
    GameState,
    GameStatus,
    Side,
    Winner,
    create_initial_state,
)

if TYPE_CHECKING:
    from strategies.base import Strategy

logger = logging.getLogger(__name__)


def init_game(seed: int | None = None) -> GameState:
    """Shuffle, deal, and start a new game with the player to move."""
    state = create_initial_state(seed=seed)
    logger.debug(
        "New game: top=%s suit=%s deck=%d", state.top_card, state.current_suit.value, len(state.deck)
    )
    return state


def play_card(state: GameState, card: Card) -> GameState:
    """Attempt a play by the human player."""
    if state.status != GameStatus.PLAYING or state.current_player is not Side.PLAYER:
        return _reject(state, "play out of turn")
    return _execute_play_card(state, card)


def draw_card(state: GameState) -> GameState:
    """Attempt a draw by the human player."""
    if state.status != GameStatus.PLAYING or state.current_player is not Side.PLAYER:
        return _reject(state, "draw out of turn")
    return _execute_draw_card(state)


def handle_suit_select(state: GameState, suit: Suit) -> GameState:
    """Resolve the human player's pending wild declaration."""
    if state.current_player is not Side.PLAYER:
        return _reject(state, "suit selection out of turn")
    return _execute_select_suit(state, suit)


def execute_move(state: GameState, move: Move) -> GameState:
    """Apply ``move`` for whichever side is acting.

    Args:
        state: Current game state.
        move: Move to execute.

    Returns:
        New game state, or ``state`` itself if the move is not legal.
    """
    match move:
        case PlayCard(card=card):
            if state.status != GameStatus.PLAYING:
                return _reject(state, "play outside PLAYING")
            return _execute_play_card(state, card)
        case DrawCard():
            if state.status != GameStatus.PLAYING:
                return _reject(state, "draw outside PLAYING")
            return _execute_draw_card(state)
        case SelectSuit(suit=suit):
            return _execute_select_suit(state, suit)
        case _:
            return _reject(state, f"unknown move type {type(move).__name__}")


def take_ai_turn(state: GameState, strategy: Strategy) -> GameState:
    """Run one tick of the computer's turn.

    The strategy picks between playing and drawing. A wild is played and
    its suit declared in the same transition, so the computer never leaves
    the game sitting in SUIT_PICKING. A draw keeps the turn with the
    computer; the caller is expected to tick again.
    """
    if state.status != GameStatus.PLAYING or state.current_player is not Side.AI:
        return _reject(state, "AI tick out of turn")

    move = strategy.select_move(state, generate_legal_moves(state))
    new_state = execute_move(state, move)

    if new_state.status == GameStatus.SUIT_PICKING:
        played = new_state.top_card
        suit = strategy.choose_suit(new_state, new_state.ai_hand)
        new_state = _execute_select_suit(new_state, suit)
        # The winner message from check_winner takes precedence
        if not new_state.is_game_over:
            new_state = new_state.with_last_action(
                f"AI played {played.describe()} and picked {suit.value}"
            )

    logger.debug("AI (%s) chose %s: %s", strategy.name, move, new_state.last_action)
    return new_state


def check_winner(state: GameState) -> GameState:
    """End the game if either hand is empty."""
    if len(state.player_hand) == 0:
        logger.info("Game over: player emptied their hand")
        return state.with_winner(Winner.PLAYER).with_last_action("You won!")
    if len(state.ai_hand) == 0:
        logger.info("Game over: AI emptied its hand")
        return state.with_winner(Winner.AI).with_last_action("AI won!")
    return state


def check_tie(state: GameState) -> GameState:
    """End the game in a tie if the deck is gone and nobody can play."""
    if len(state.deck) > 0:
        return state

    top_card = state.top_card
    player_has_move = any(
        is_valid_move(c, top_card, state.current_suit) for c in state.player_hand
    )
    ai_has_move = any(is_valid_move(c, top_card, state.current_suit) for c in state.ai_hand)

    if not player_has_move and not ai_has_move:
        logger.info("Game over: deck empty and no playable cards")
        return state.with_winner(Winner.TIE).with_last_action(
            "It's a tie! No more moves possible."
        )
    return state


def next_turn(state: GameState) -> GameState:
    """Hand the turn to the other side."""
    return state.with_current_player(state.current_player.other)


def _execute_play_card(state: GameState, card: Card) -> GameState:
    """Move ``card`` from the acting side's hand to the discard pile."""
    side = state.current_player
    hand = state.hand(side)
    if card not in hand:
        return _reject(state, f"{card!r} not in {side.value} hand")

    top_card = state.top_card
    if not is_valid_move(card, top_card, state.current_suit):
        return _reject(state, f"{card} does not match {top_card} / {state.current_suit.value}")

    new_hand = tuple(c for c in hand if c.id != card.id)
    actor = "You" if side is Side.PLAYER else "AI"

    new_state = (
        state.with_hand(side, new_hand)
        .with_discard_pile(state.discard_pile + (card,))
        .with_current_suit(card.suit)
        .with_last_action(f"{actor} played {card.describe()}")
    )

    if card.is_wild:
        return new_state.with_status(GameStatus.SUIT_PICKING)

    new_state = check_winner(new_state)
    if new_state.is_game_over:
        return new_state
    return next_turn(new_state)


def _execute_draw_card(state: GameState) -> GameState:
    """Draw for the acting side, or skip its turn when the deck is empty."""
    side = state.current_player

    if len(state.deck) == 0:
        message = (
            "Deck empty! Turn skipped." if side is Side.PLAYER else "AI skipped (deck empty)."
        )
        return check_tie(next_turn(state.with_last_action(message)))

    drawn_card = state.deck[-1]
    message = "You drew a card." if side is Side.PLAYER else "AI drew a card."

    # Turn stays with the drawer
    return (
        state.with_deck(state.deck[:-1])
        .with_hand(side, state.hand(side) + (drawn_card,))
        .with_last_action(message)
    )


def _execute_select_suit(state: GameState, suit: Suit) -> GameState:
    """Declare the suit after a wild and pass the turn."""
    if state.status != GameStatus.SUIT_PICKING:
        return _reject(state, "no suit to pick")

    try:
        suit = Suit(suit)
    except ValueError:
        return _reject(state, f"unknown suit {suit!r}")

    new_state = (
        state.with_current_suit(suit)
        .with_status(GameStatus.PLAYING)
        .with_last_action(_suit_message(state.current_player, suit))
    )
    new_state = check_winner(new_state)
    if new_state.is_game_over:
        return new_state
    return next_turn(new_state)


def _suit_message(side: Side, suit: Suit) -> str:
    if side is Side.PLAYER:
        return f"Suit changed to {suit.value}. AI's turn."
    return f"AI picked {suit.value}. Your turn."


def _reject(state: GameState, reason: str) -> GameState:
    logger.debug("Rejected: %s", reason)
    return state
