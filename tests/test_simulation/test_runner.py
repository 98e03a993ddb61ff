"""Tests for the simulation runner."""

import pytest

from eights_engine.state import Winner
from simulation.runner import GameRunner, run_batch, state_to_dict
from eights_engine.executor import init_game
from strategies import FirstMatchStrategy, RandomStrategy


class TestGameRunner:
    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_games_finish(self, seed):
        runner = GameRunner(RandomStrategy(seed=seed), FirstMatchStrategy())

        result, log = runner.run_game(seed=seed)

        assert result.winner in {w.value for w in Winner}
        assert result.move_count == len(log.moves)
        assert log.result is result

    def test_every_logged_state_accounts_for_all_cards(self):
        runner = GameRunner(FirstMatchStrategy(), FirstMatchStrategy())

        _, log = runner.run_game(seed=9)

        for record in log.moves:
            snapshot = record.state_after
            total = (
                snapshot["deck_size"]
                + snapshot["discard_size"]
                + len(snapshot["player_hand"])
                + len(snapshot["ai_hand"])
            )
            assert total == 52

    def test_ai_seat_never_left_picking_a_suit(self):
        runner = GameRunner(RandomStrategy(seed=1), FirstMatchStrategy())

        _, log = runner.run_game(seed=21)

        for record in log.moves:
            if record.side == "ai":
                assert record.state_after["status"] != "suit_picking"

    def test_same_seed_same_game(self):
        a, _ = GameRunner(FirstMatchStrategy(), FirstMatchStrategy()).run_game(seed=7)
        b, _ = GameRunner(FirstMatchStrategy(), FirstMatchStrategy()).run_game(seed=7)

        assert a.winner == b.winner
        assert a.move_count == b.move_count
        assert a.final_hand_sizes == b.final_hand_sizes

    def test_no_log_when_disabled(self):
        runner = GameRunner(FirstMatchStrategy(), FirstMatchStrategy(), log_moves=False)

        result, log = runner.run_game(seed=1)

        assert log is None
        assert result.player_strategies == ("FirstMatch", "FirstMatch")

    def test_move_cap_abandons_game(self):
        runner = GameRunner(FirstMatchStrategy(), FirstMatchStrategy(), max_moves=1)

        result, _ = runner.run_game(seed=1)

        assert result.move_count == 1
        assert result.winner is None


class TestRunBatch:
    def test_batch_size_and_seeds(self):
        results = run_batch(RandomStrategy(seed=0), FirstMatchStrategy(), num_games=5, start_seed=100)

        assert len(results) == 5
        assert [r.seed for r in results] == [100, 101, 102, 103, 104]


class TestStateToDict:
    def test_initial_state(self):
        data = state_to_dict(init_game(seed=2))

        assert data["status"] == "playing"
        assert data["current_player"] == "player"
        assert data["deck_size"] == 35
        assert data["discard_size"] == 1
        assert len(data["player_hand"]) == 8
        assert data["winner"] is None
