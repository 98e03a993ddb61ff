"""Tests for player strategies."""

import pytest

from eights_engine.cards import Card, Rank, Suit
from eights_engine.move_generator import generate_legal_moves
from eights_engine.moves import DrawCard, PlayCard, SelectSuit
from eights_engine.state import GameState, GameStatus, Side
from strategies import FirstMatchStrategy, RandomStrategy


def _state(player_hand, ai_hand=(), top=None, **kwargs):
    top = top or Card(Rank.KING, Suit.HEARTS)
    return GameState(
        deck=(),
        player_hand=tuple(player_hand),
        ai_hand=tuple(ai_hand) or (Card(Rank.ACE, Suit.SPADES),),
        discard_pile=(top,),
        current_suit=kwargs.pop("current_suit", top.suit),
        **kwargs,
    )


class TestFirstMatchSelectMove:
    def setup_method(self):
        self.strategy = FirstMatchStrategy()

    def test_name(self):
        assert self.strategy.name == "FirstMatch"

    def test_picks_first_play_not_best_play(self):
        first = Card(Rank.TWO, Suit.HEARTS)
        state = _state(player_hand=(Card(Rank.FOUR, Suit.CLUBS), first, Card(Rank.EIGHT, Suit.SPADES)))

        move = self.strategy.select_move(state, generate_legal_moves(state))

        assert move == PlayCard(card=first)

    def test_plays_wild_when_it_comes_first(self):
        eight = Card(Rank.EIGHT, Suit.SPADES)
        state = _state(player_hand=(eight, Card(Rank.TWO, Suit.HEARTS)))

        move = self.strategy.select_move(state, generate_legal_moves(state))

        assert move == PlayCard(card=eight)

    def test_draws_when_nothing_playable(self):
        state = _state(player_hand=(Card(Rank.FOUR, Suit.CLUBS),))

        move = self.strategy.select_move(state, generate_legal_moves(state))

        assert move == DrawCard()

    def test_empty_move_list_raises(self):
        state = _state(player_hand=(Card(Rank.FOUR, Suit.CLUBS),))

        with pytest.raises(ValueError):
            self.strategy.select_move(state, [])

    def test_selects_suit_from_own_hand_when_picking(self):
        state = _state(
            player_hand=(Card(Rank.FOUR, Suit.CLUBS), Card(Rank.FIVE, Suit.CLUBS)),
            status=GameStatus.SUIT_PICKING,
        )

        move = self.strategy.select_move(state, generate_legal_moves(state))

        assert move == SelectSuit(suit=Suit.CLUBS)


class TestFirstMatchChooseSuit:
    def setup_method(self):
        self.strategy = FirstMatchStrategy()
        self.state = _state(player_hand=(Card(Rank.FOUR, Suit.CLUBS),))

    def test_most_frequent_suit(self):
        hand = (
            Card(Rank.TWO, Suit.SPADES),
            Card(Rank.THREE, Suit.DIAMONDS),
            Card(Rank.FOUR, Suit.DIAMONDS),
            Card(Rank.FIVE, Suit.CLUBS),
        )
        assert self.strategy.choose_suit(self.state, hand) == Suit.DIAMONDS

    def test_tie_goes_to_suit_with_latest_card(self):
        hand = (
            Card(Rank.TWO, Suit.SPADES),
            Card(Rank.THREE, Suit.HEARTS),
            Card(Rank.FOUR, Suit.SPADES),
            Card(Rank.FIVE, Suit.HEARTS),
        )
        assert self.strategy.choose_suit(self.state, hand) == Suit.HEARTS

        reordered = (hand[1], hand[0], hand[3], hand[2])
        assert self.strategy.choose_suit(self.state, reordered) == Suit.SPADES

    def test_single_cards_tie_to_last_card(self):
        hand = (Card(Rank.TWO, Suit.CLUBS), Card(Rank.NINE, Suit.DIAMONDS))
        assert self.strategy.choose_suit(self.state, hand) == Suit.DIAMONDS

    def test_empty_hand_defaults_to_hearts(self):
        assert self.strategy.choose_suit(self.state, ()) == Suit.HEARTS


class TestRandomStrategy:
    def test_picks_a_legal_move(self):
        strategy = RandomStrategy(seed=3)
        state = _state(player_hand=(Card(Rank.TWO, Suit.HEARTS), Card(Rank.FOUR, Suit.CLUBS)))
        legal = generate_legal_moves(state)

        for _ in range(20):
            assert strategy.select_move(state, legal) in legal

    def test_seeded_is_reproducible(self):
        state = _state(
            player_hand=(Card(Rank.TWO, Suit.HEARTS), Card(Rank.THREE, Suit.HEARTS)),
            current_player=Side.PLAYER,
        )
        legal = generate_legal_moves(state)

        a = RandomStrategy(seed=11)
        b = RandomStrategy(seed=11)

        assert [a.select_move(state, legal) for _ in range(10)] == [
            b.select_move(state, legal) for _ in range(10)
        ]
        assert [a.choose_suit(state, ()) for _ in range(10)] == [
            b.choose_suit(state, ()) for _ in range(10)
        ]

    def test_reset_seed_replays_sequence(self):
        strategy = RandomStrategy(seed=5)
        state = _state(player_hand=(Card(Rank.TWO, Suit.HEARTS),))

        first = [strategy.choose_suit(state, ()) for _ in range(8)]
        strategy.reset_seed(5)
        second = [strategy.choose_suit(state, ()) for _ in range(8)]

        assert first == second
        assert all(isinstance(s, Suit) for s in first)

    def test_empty_move_list_raises(self):
        state = _state(player_hand=(Card(Rank.TWO, Suit.HEARTS),))
        with pytest.raises(ValueError):
            RandomStrategy().select_move(state, [])
