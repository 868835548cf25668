"""
Tests for the Board: apples, restart, the double-back guard, difficulty and ticks.
"""

import os
import random
import sys
from types import SimpleNamespace
from unittest.mock import patch

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.board import Board, TickResult  # noqa: E402
from domain.constants import UP, DOWN, LEFT, RIGHT  # noqa: E402
from domain.game_state import GameState  # noqa: E402
from domain.position import Position  # noqa: E402


class SequenceRandom:
    """Stand-in rng that replays fixed values for randrange(), then returns 0."""

    def __init__(self, values):
        self.values = list(values)

    def randrange(self, stop):
        value = self.values.pop(0) if self.values else 0
        assert 0 <= value < stop
        return value


def make_board(values=(0, 1, 1, 2, 3, 4, 5, 6), width=20, height=20, **kwargs):
    """
    Default values: horizontal axis, positive sign -> start heading right,
    then apples at (1,2), (3,4), (5,6).
    """
    return Board(width, height, rng=SequenceRandom(values), **kwargs)


class TestBoardInitialization:
    """Tests for Board construction and restart()."""

    def test_construction_restarts(self):
        board = make_board()

        assert board.next_direction == Position(1, 0)
        assert list(board.snake.segments) == [Position(10, 10), Position(11, 10), Position(12, 10)]
        assert board.apple_positions == [Position(1, 2), Position(3, 4), Position(5, 6)]
        assert board.tick_number == 0
        assert board.current_interval is None

    @pytest.mark.parametrize("axis,sign,expected", [
        (0, 0, Position(-1, 0)),
        (0, 1, Position(1, 0)),
        (1, 0, Position(0, -1)),
        (1, 1, Position(0, 1)),
    ])
    def test_restart_direction_from_axis_and_sign(self, axis, sign, expected):
        board = make_board(values=[axis, sign])

        assert board.next_direction == expected
        assert board.snake.segments[0] == Position(10, 10)
        assert board.snake.head == Position(10, 10) + expected.scaled(2)

    def test_restart_resets_snake_apples_and_tick(self):
        board = make_board(values=[0, 1, 1, 2, 3, 4, 5, 6, 1, 0, 7, 7, 8, 8, 9, 9])
        board.tick()
        board.tick()
        board.apple_positions.clear()

        board.restart()

        assert board.tick_number == 0
        assert board.next_direction == Position(0, -1)
        assert list(board.snake.segments) == [Position(10, 10), Position(10, 9), Position(10, 8)]
        assert board.apple_positions == [Position(7, 7), Position(8, 8), Position(9, 9)]
        assert board.snake.has_collided() is False

    def test_restart_after_collision_revives_snake(self):
        board = make_board(values=(0, 1), width=5, height=5, start_snake_length=1)
        for _ in range(3):
            board.tick()
        assert board.snake.has_collided() is True

        board.restart()

        assert board.snake.has_collided() is False
        assert board.snake.get_length() == 1

    def test_seeded_boards_are_reproducible(self):
        first = Board(20, 20, rng=random.Random(1234))
        second = Board(20, 20, rng=random.Random(1234))

        assert first.apple_positions == second.apple_positions
        assert first.next_direction == second.next_direction

    def test_default_rng(self):
        board = Board(20, 20)
        assert isinstance(board.rng, random.Random)
        assert len(board.apple_positions) == 3

    @pytest.mark.parametrize("kwargs", [
        {"width": 0, "height": 20},
        {"width": 20, "height": -1},
        {"width": 20, "height": 20, "spawn_apple_count": 0},
        {"width": 20, "height": 20, "start_snake_length": 0},
        {"width": 4, "height": 20, "start_snake_length": 3},
        {"width": 20, "height": 20, "min_interval_ms": 0},
        {"width": 20, "height": 20, "start_interval_ms": 10, "min_interval_ms": 20},
        {"width": 20, "height": 20, "interval_step_ms": -5},
    ])
    def test_invalid_settings_raise(self, kwargs):
        with pytest.raises(ValueError):
            Board(rng=random.Random(0), **kwargs)

    def test_smallest_fitting_grid(self):
        board = Board(5, 5, rng=random.Random(0), start_snake_length=3)
        assert all(p.in_bounds(5, 5) for p in board.snake.segments)

    def test_from_config(self):
        config = SimpleNamespace(
            grid_width=12,
            grid_height=8,
            spawn_apple_count=5,
            start_snake_length=2,
            start_interval_ms=300,
            interval_step_ms=10,
            min_interval_ms=50,
            prevent_double_backs=False,
            seed=99,
        )

        board = Board.from_config(config)

        assert (board.width, board.height) == (12, 8)
        assert len(board.apple_positions) == 5
        assert board.snake.get_length() == 2
        assert board.prevent_double_backs is False
        assert board.difficulty_for_length(2) == 280
        assert board.apple_positions == Board.from_config(config).apple_positions


class TestApples:
    """Tests for spawn_apples() and eat_apple()."""

    def test_spawn_apples_count_and_bounds(self):
        board = Board(7, 9, rng=random.Random(5))
        for count in (0, 1, 3, 50):
            board.spawn_apples(count)
            assert len(board.apple_positions) == count
            assert all(p.in_bounds(7, 9) for p in board.apple_positions)

    def test_spawn_apples_replaces_existing(self):
        board = make_board(values=[0, 1, 1, 2, 3, 4, 5, 6, 9, 9])
        board.spawn_apples(1)
        assert board.apple_positions == [Position(9, 9)]

    def test_spawn_apples_allows_duplicates_and_snake_cells(self):
        board = make_board(values=[0, 1, 1, 2, 3, 4, 5, 6, 10, 10, 10, 10])
        board.spawn_apples(2)
        assert board.apple_positions == [Position(10, 10), Position(10, 10)]
        assert Position(10, 10) in board.snake.segments

    def test_spawn_negative_raises(self):
        board = make_board()
        with pytest.raises(ValueError):
            board.spawn_apples(-1)

    def test_eat_apple_present(self):
        board = make_board()

        assert board.eat_apple(Position(3, 4)) is True
        assert board.apple_positions == [Position(1, 2), Position(5, 6)]

    def test_eat_apple_removes_one_of_duplicates(self):
        board = make_board()
        board.apple_positions = [Position(2, 2), Position(2, 2)]

        assert board.eat_apple(Position(2, 2)) is True
        assert board.apple_positions == [Position(2, 2)]

    def test_eat_apple_miss_has_no_side_effect(self):
        board = make_board()
        before = list(board.apple_positions)

        assert board.eat_apple(Position(0, 0)) is False
        assert board.apple_positions == before

    def test_eat_apple_miss_on_empty_board_respawns_batch(self):
        board = make_board()
        board.apple_positions = []

        assert board.eat_apple(Position(0, 0)) is False
        assert len(board.apple_positions) == board.spawn_apple_count

    def test_eating_last_apple_respawns_batch(self):
        board = make_board(values=[0, 1, 1, 2, 3, 4, 5, 6, 4, 4, 5, 5, 6, 6])
        board.apple_positions = [Position(2, 2)]

        assert board.eat_apple(Position(2, 2)) is True
        assert board.apple_positions == [Position(4, 4), Position(5, 5), Position(6, 6)]


class TestDirectionGuard:
    """Tests for request_direction() and the double-back guard."""

    def test_reversal_rejected(self):
        board = make_board()
        assert board.next_direction == Position(1, 0)

        assert board.request_direction(Position(-1, 0)) is False
        assert board.next_direction == Position(1, 0)

    def test_same_axis_rejected(self):
        board = make_board()
        assert board.request_direction(RIGHT) is False
        assert board.next_direction == Position(1, 0)

    def test_orthogonal_accepted(self):
        board = make_board()

        assert board.request_direction(UP) is True
        assert board.next_direction == Position(0, -1)
        assert board.request_direction(DOWN) is False
        assert board.request_direction(LEFT) is True
        assert board.next_direction == Position(-1, 0)

    def test_guard_disabled_accepts_reversal(self):
        board = make_board(prevent_double_backs=False)

        assert board.request_direction(LEFT) is True
        assert board.next_direction == Position(-1, 0)

    def test_direction_names_are_case_insensitive(self):
        board = make_board()
        assert board.request_direction("up") is True
        assert board.next_direction == Position(0, -1)

    @pytest.mark.parametrize("direction", [Position(0, 0), Position(1, 1), "NORTH", 3])
    def test_invalid_direction_raises(self, direction):
        board = make_board()
        with pytest.raises(ValueError):
            board.request_direction(direction)

    def test_fractional_vector_rejected_without_guard(self):
        board = make_board(prevent_double_backs=False)

        with pytest.raises(ValueError):
            board.request_direction(Position(0.5, 0.5))
        assert board.next_direction == Position(1, 0)

    def test_two_turns_within_one_tick_can_reverse(self):
        """The guard looks at the pending direction only, so UP then LEFT sneaks a reversal through."""
        board = make_board()

        assert board.request_direction(UP) is True
        assert board.request_direction(LEFT) is True
        result = board.tick()

        assert result.collided is True
        assert board.snake.collision_position == Position(11, 10)
        assert board.snake.collision_reason == "self"


class TestDifficulty:
    """Tests for difficulty_for_length()."""

    def test_default_curve(self):
        board = make_board()
        assert board.difficulty_for_length(0) == 500
        assert board.difficulty_for_length(3) == 455
        assert board.difficulty_for_length(4) == 440
        assert board.difficulty_for_length(32) == 20
        assert board.difficulty_for_length(400) == 20

    def test_monotonic_and_floored(self):
        board = make_board()
        intervals = [board.difficulty_for_length(n) for n in range(200)]

        assert all(a >= b for a, b in zip(intervals, intervals[1:]))
        assert min(intervals) == board.min_interval_ms


class TestTick:
    """Tests for Board.tick()."""

    def test_eating_apple_scenario(self):
        """20x20, length 3 from (10,10) heading right, apple at (13,10)."""
        board = make_board()
        board.apple_positions = [Position(13, 10), Position(0, 0)]

        result = board.tick()

        assert isinstance(result, TickResult)
        assert result.grew is True
        assert list(board.snake.segments) == [
            Position(10, 10), Position(11, 10), Position(12, 10), Position(13, 10)
        ]
        assert board.snake.get_length() == 4
        assert board.apple_positions == [Position(0, 0)]

    def test_first_tick_always_reports_interval(self):
        board = make_board()

        result = board.tick()

        assert result.interval_changed is True
        assert result.interval_ms == 455
        assert board.current_interval == 455

    def test_interval_only_reported_on_change(self):
        board = make_board()
        board.tick()

        plain = board.tick()
        assert plain.interval_changed is False
        assert plain.interval_ms == 455

        board.apple_positions = [Position(15, 10)]
        grown = board.tick()
        assert grown.grew is True
        assert grown.interval_changed is True
        assert grown.interval_ms == 440

    def test_tick_with_direction_goes_through_guard(self):
        board = make_board()

        board.tick(LEFT)
        assert board.snake.head == Position(13, 10)

        board.tick(DOWN)
        assert board.snake.head == Position(13, 11)

    def test_tick_counts(self):
        board = make_board()
        board.tick()
        board.tick()
        assert board.tick_number == 2

    def test_collision_reported_once(self):
        board = make_board(values=(0, 1), width=5, height=5, start_snake_length=1)
        board.apple_positions = [Position(0, 0)]

        first = board.tick()
        second = board.tick()
        third = board.tick()

        assert (first.collided, second.collided) == (False, False)
        assert third.collided is True
        assert third.collided_this_tick is True
        assert board.snake.collision_position == Position(4, 2)
        assert board.snake.collision_reason == "wall"

        frozen = board.tick()
        assert frozen.collided is True
        assert frozen.collided_this_tick is False
        assert frozen.interval_changed is False

    def test_collided_snake_does_not_touch_apples(self):
        board = make_board(values=(0, 1), width=5, height=5, start_snake_length=1)
        for _ in range(3):
            board.tick()
        assert board.snake.has_collided() is True

        with patch.object(board, "eat_apple") as eat_apple:
            board.tick()
            eat_apple.assert_not_called()

    def test_apples_never_empty_after_tick(self):
        board = make_board()
        board.apple_positions = [Position(13, 10)]

        board.tick()

        assert len(board.apple_positions) == board.spawn_apple_count

    def test_random_play_keeps_invariants(self):
        """Random input over many ticks: alive snakes stay in bounds and distinct, apples never run out."""
        rng = random.Random(2021)
        board = Board(8, 8, rng=random.Random(7), spawn_apple_count=2)
        previous_interval = None

        for _ in range(2000):
            if board.snake.has_collided():
                board.restart()
                previous_interval = None
            board.request_direction(rng.choice([UP, DOWN, LEFT, RIGHT]))
            result = board.tick()

            assert board.apple_positions
            assert result.interval_ms == board.difficulty_for_length(board.snake.get_length())
            if previous_interval is not None:
                assert result.interval_ms <= previous_interval
            previous_interval = result.interval_ms
            if not board.snake.has_collided():
                segments = list(board.snake.segments)
                assert len(set(segments)) == len(segments)
                assert all(p.in_bounds(8, 8) for p in segments)


class TestGetCurrentState:
    """Tests for Board.get_current_state()."""

    def test_snapshot_fields(self):
        board = make_board()
        board.tick()

        state = board.get_current_state()

        assert isinstance(state, GameState)
        assert state.tick_number == 1
        assert (state.width, state.height) == (20, 20)
        assert state.segments == [(11, 10), (12, 10), (13, 10)]
        assert state.apples == [(1, 2), (3, 4), (5, 6)]
        assert state.collided is False
        assert state.collision_position is None
        assert state.interval_ms == 455
        assert state.next_direction == (1, 0)

    def test_snapshot_is_detached(self):
        board = make_board()
        state = board.get_current_state()

        board.tick()

        assert state.segments == [(10, 10), (11, 10), (12, 10)]

    def test_snapshot_after_collision(self):
        board = make_board(values=(0, 1), width=5, height=5, start_snake_length=1)
        for _ in range(3):
            board.tick()

        state = board.get_current_state()

        assert state.collided is True
        assert state.collision_position == (4, 2)
        assert state.collision_reason == "wall"
