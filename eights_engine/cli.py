"""Command-line interface for Crazy Eights."""

from __future__ import annotations

import argparse
import time
from typing import TYPE_CHECKING

from eights_engine.cards import Suit, is_valid_move
from eights_engine.executor import (
    draw_card,
    execute_move,
    handle_suit_select,
    init_game,
    play_card,
    take_ai_turn,
)
from eights_engine.move_generator import generate_legal_moves
from eights_engine.state import GameStatus, Side, Winner

if TYPE_CHECKING:
    from eights_engine.state import GameState


def format_state(state: GameState, show_ai_hand: bool = False) -> str:
    """Format game state for display."""
    lines = []

    lines.append("=" * 60)
    lines.append(f"Status: {state.status.value} | {state.last_action}")
    lines.append("=" * 60)

    top = state.top_card
    lines.append(
        f"\nTop card: {top or '-'} | Current suit: {state.current_suit.symbol} "
        f"({state.current_suit.value}) | Deck: {len(state.deck)} cards"
    )

    for side in Side:
        prefix = "→ " if side is state.current_player else "  "
        hand = state.hand(side)
        label = "You" if side is Side.PLAYER else "AI"
        if side is Side.PLAYER or show_ai_hand:
            hand_str = ", ".join(str(c) for c in hand) or "(empty)"
        else:
            hand_str = f"[{len(hand)} cards]"
        lines.append(f"{prefix}{label}: {hand_str}")

    if state.is_game_over:
        lines.append("\n" + "=" * 60)
        lines.append(f"GAME OVER - {_winner_text(state.winner)}")
        lines.append("=" * 60)

    return "\n".join(lines)


def _winner_text(winner: Winner | None) -> str:
    if winner is Winner.PLAYER:
        return "You cleared all your cards first!"
    if winner is Winner.AI:
        return "The AI was faster this time."
    return "Tie: no one can move and the deck is empty."


def format_player_options(state: GameState) -> str:
    """List the player's cards with their numbers and which are playable."""
    lines = ["Your cards:"]
    top = state.top_card
    for i, card in enumerate(state.player_hand):
        marker = "*" if is_valid_move(card, top, state.current_suit) else " "
        lines.append(f"  {i + 1}. {marker} {card}")
    lines.append("  d. Draw" if state.deck else "  d. Skip (deck empty)")
    return "\n".join(lines)


def _prompt_suit() -> Suit | None:
    suits = list(Suit)
    options = "  ".join(f"{i + 1}={s.symbol} {s.value}" for i, s in enumerate(suits))
    while True:
        choice = input(f"Pick a suit ({options}): ").strip().lower()
        if choice == "q":
            return None
        for i, suit in enumerate(suits):
            if choice in (str(i + 1), suit.value):
                return suit
        print("Please choose one of the four suits")


def play_interactive(seed: int | None = None, delay: float = 1.5) -> None:
    """Play an interactive game against the computer."""
    from strategies.first_match import FirstMatchStrategy

    ai = FirstMatchStrategy()
    state = init_game(seed=seed)

    print("\nWelcome to Crazy Eights!")
    print("Match the suit or rank. Eights are wild. Empty your hand first to win.")
    print("Type a card number to play it, 'd' to draw, or 'q' to quit.\n")

    while not state.is_game_over:
        print(format_state(state))

        if state.current_player is Side.AI:
            time.sleep(delay)
            state = take_ai_turn(state, ai)
            continue

        if state.status == GameStatus.SUIT_PICKING:
            suit = _prompt_suit()
            if suit is None:
                print("Goodbye!")
                return
            state = handle_suit_select(state, suit)
            continue

        print(f"\n{format_player_options(state)}")
        choice = input("\nYour move: ").strip().lower()

        if choice == "q":
            print("Goodbye!")
            return
        if choice == "d":
            state = draw_card(state)
            continue

        try:
            card_idx = int(choice) - 1
        except ValueError:
            print("Please enter a card number, 'd' or 'q'")
            continue
        if not 0 <= card_idx < len(state.player_hand):
            print(f"Please enter a number 1-{len(state.player_hand)}")
            continue

        new_state = play_card(state, state.player_hand[card_idx])
        if new_state is state:
            print("That card can't be played now.")
        state = new_state
        print()

    print(format_state(state, show_ai_hand=True))


def watch_game(seed: int | None = None, delay: float = 0.5) -> None:
    """Watch two strategies play each other."""
    from strategies.first_match import FirstMatchStrategy
    from strategies.random_strategy import RandomStrategy

    player_strategy = RandomStrategy(seed=seed)
    ai_strategy = FirstMatchStrategy()
    state = init_game(seed=seed)

    print(f"\nWatching: {player_strategy.name} (player seat) vs {ai_strategy.name} (AI seat)")
    print("Press Ctrl+C to stop.\n")

    try:
        while not state.is_game_over:
            print(format_state(state, show_ai_hand=True))

            if state.current_player is Side.AI:
                state = take_ai_turn(state, ai_strategy)
            else:
                move = player_strategy.select_move(state, generate_legal_moves(state))
                state = execute_move(state, move)

            time.sleep(delay)
            print("\n" + "-" * 60 + "\n")

    except KeyboardInterrupt:
        print("\nStopped.")

    print(format_state(state, show_ai_hand=True))


def run_simulation(num_games: int = 100, seed: int = 42) -> None:
    """Run a batch of games between strategies and print the tally."""
    from simulation.runner import run_batch
    from strategies.first_match import FirstMatchStrategy
    from strategies.random_strategy import RandomStrategy

    matchups = [
        (RandomStrategy(seed=seed), FirstMatchStrategy()),
        (FirstMatchStrategy(), FirstMatchStrategy()),
    ]

    for player_strategy, ai_strategy in matchups:
        label = f"{player_strategy.name} vs {ai_strategy.name}"
        print(f"\nRunning {num_games} games: {label}")

        results = run_batch(player_strategy, ai_strategy, num_games, start_seed=seed)
        if not results:
            print("No games played.")
            continue

        player_wins = sum(1 for r in results if r.winner == Winner.PLAYER.value)
        ai_wins = sum(1 for r in results if r.winner == Winner.AI.value)
        ties = sum(1 for r in results if r.winner == Winner.TIE.value)
        avg_moves = sum(r.move_count for r in results) / len(results)
        avg_duration = sum(r.duration_ms for r in results) / len(results)

        print(f"\nResults ({label}):")
        print(f"  Player seat wins: {player_wins} ({100*player_wins/num_games:.1f}%)")
        print(f"  AI seat wins: {ai_wins} ({100*ai_wins/num_games:.1f}%)")
        print(f"  Ties: {ties} ({100*ties/num_games:.1f}%)")
        print(f"  Average moves: {avg_moves:.1f}")
        print(f"  Average duration: {avg_duration:.2f}ms")


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive number, got {value}")
    return number


def main() -> None:
    """Main entry point for the CLI."""
    from core.config import setup_logging

    parser = argparse.ArgumentParser(description="Crazy Eights against the computer")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play against the AI")
    play_parser.add_argument("--seed", type=int, help="Random seed")
    play_parser.add_argument(
        "--delay", type=float, default=1.5, help="AI think delay (seconds)"
    )

    # Watch command
    watch_parser = subparsers.add_parser("watch", help="Watch AI vs AI")
    watch_parser.add_argument("--seed", type=int, help="Random seed")
    watch_parser.add_argument(
        "--delay", type=float, default=0.5, help="Delay between moves (seconds)"
    )

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Run a batch of AI games")
    simulate_parser.add_argument(
        "--games", type=_positive_int, default=100, help="Number of games"
    )
    simulate_parser.add_argument("--seed", type=int, default=42, help="Random seed")

    args = parser.parse_args()
    setup_logging(args.log_level)

    if args.command == "play":
        play_interactive(seed=args.seed, delay=args.delay)
    elif args.command == "watch":
        watch_game(seed=args.seed, delay=args.delay)
    elif args.command == "simulate":
        run_simulation(num_games=args.games, seed=args.seed)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
