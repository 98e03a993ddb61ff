"""Legal move generation for Crazy Eights."""

from __future__ import annotations

from eights_engine.cards import Card, Suit, is_valid_move
from eights_engine.moves import DrawCard, Move, PlayCard, SelectSuit
from eights_engine.state import GameState, GameStatus


def generate_legal_moves(state: GameState) -> list[Move]:
    """Generate all legal moves for the side currently acting.

    Args:
        state: Current game state.

    Returns:
        Plays in hand order followed by a draw while PLAYING, one suit
        choice per suit while SUIT_PICKING, and nothing otherwise.
    """
    match state.status:
        case GameStatus.PLAYING:
            return _generate_playing_moves(state)
        case GameStatus.SUIT_PICKING:
            return [SelectSuit(suit=suit) for suit in Suit]
        case _:
            return []


def _generate_playing_moves(state: GameState) -> list[Move]:
    moves: list[Move] = [PlayCard(card=card) for card in playable_cards(state)]

    # Always available: draws, or passes the turn once the deck runs out
    moves.append(DrawCard())
    return moves


def playable_cards(state: GameState, hand: tuple[Card, ...] | None = None) -> list[Card]:
    """Cards from ``hand`` (default: the acting side's) that may be played now."""
    if hand is None:
        hand = state.current_hand
    top_card = state.top_card
    return [card for card in hand if is_valid_move(card, top_card, state.current_suit)]
