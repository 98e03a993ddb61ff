"""Crazy Eights card game engine."""

from eights_engine.cards import WILD_RANK, Card, Rank, Suit, is_valid_move
from eights_engine.executor import (
    check_tie,
    check_winner,
    draw_card,
    execute_move,
    handle_suit_select,
    init_game,
    play_card,
    take_ai_turn,
)
from eights_engine.moves import DrawCard, Move, PlayCard, SelectSuit
from eights_engine.state import GameState, GameStatus, Side, Winner

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "WILD_RANK",
    "is_valid_move",
    "GameState",
    "GameStatus",
    "Side",
    "Winner",
    "Move",
    "PlayCard",
    "DrawCard",
    "SelectSuit",
    "init_game",
    "play_card",
    "draw_card",
    "handle_suit_select",
    "take_ai_turn",
    "execute_move",
    "check_winner",
    "check_tie",
]
