"""
Tests for board geometry: octagon bounds, compass directions, line detection.
"""

import pytest

from thud.errors import InvalidDirection, OutOfBounds, ThudError
from thud.geometry import Coordinate, Direction, all_coordinates, on_board


C = Coordinate.zero_based


class TestOctagonBounds:

    @pytest.mark.parametrize("x, y", [
        (5, 0), (9, 0), (0, 5), (0, 9), (14, 5), (9, 14), (7, 7), (1, 4), (10, 1),
    ])
    def test_playable_cells(self, x, y):
        coord = C(x, y)
        assert (coord.x, coord.y) == (x, y)

    @pytest.mark.parametrize("x, y", [
        (0, 0), (4, 0), (0, 4), (14, 14), (10, 0), (11, 1), (3, 1), (13, 3),
        (-1, 7), (7, -1), (15, 7), (7, 15),
    ])
    def test_cut_corners_and_outside_rejected(self, x, y):
        with pytest.raises(OutOfBounds):
            C(x, y)

    def test_non_integer_rejected(self):
        with pytest.raises(OutOfBounds):
            C(7.0, 7)
        with pytest.raises(OutOfBounds):
            C(True, 7)

    @pytest.mark.parametrize("x, y", [(0, 0), (15, 5), (100, 100), (-1, 7), (True, 7), (7.0, 7)])
    def test_direct_construction_checked(self, x, y):
        with pytest.raises(OutOfBounds):
            Coordinate(x, y)

    def test_direct_construction_matches_zero_based(self):
        assert Coordinate(0, 6) == C(0, 6)
        assert Coordinate(0, 6).index == C(0, 6).index

    def test_out_of_bounds_is_a_value_error(self):
        with pytest.raises(ValueError):
            C(0, 0)
        assert issubclass(OutOfBounds, ThudError)

    def test_playable_cell_count(self):
        assert len(list(all_coordinates())) == 165

    def test_on_board_matches_construction(self):
        assert on_board(5, 0)
        assert not on_board(4, 0)

    def test_coordinates_are_values(self):
        assert C(3, 7) == C(3, 7)
        assert len({C(3, 7), C(3, 7), C(7, 3)}) == 2


class TestDirection:

    def test_clockwise_numbering_from_right(self):
        assert Direction.from_num(0) is Direction.RIGHT
        assert Direction.from_num(2) is Direction.DOWN
        assert Direction.from_num(4) is Direction.LEFT
        assert Direction.from_num(7) is Direction.UP_RIGHT

    def test_direction_member_passes_through(self):
        assert Direction.from_num(Direction.UP) is Direction.UP

    @pytest.mark.parametrize("token", [8, -1, 100, "1", 1.5, None, True])
    def test_malformed_ordinals(self, token):
        with pytest.raises(InvalidDirection):
            Direction.from_num(token)

    def test_deltas(self):
        assert Direction.RIGHT.delta == (1, 0)
        assert Direction.DOWN.delta == (0, 1)
        assert Direction.UP_LEFT.delta == (-1, -1)

    def test_opposite(self):
        assert Direction.RIGHT.opposite is Direction.LEFT
        assert Direction.DOWN_RIGHT.opposite is Direction.UP_LEFT
        assert Direction.UP_RIGHT.opposite is Direction.DOWN_LEFT


class TestNeighbours:

    def test_step_inside(self):
        assert C(7, 7).step(Direction.UP) == C(7, 6)
        assert C(7, 7).step(Direction.DOWN_LEFT) == C(6, 8)

    def test_step_off_board(self):
        assert C(5, 0).step(Direction.UP) is None
        assert C(5, 0).step(Direction.LEFT) is None

    def test_centre_has_eight_neighbours(self):
        assert [d for d, _ in C(7, 7).neighbours()] == list(Direction)

    def test_corner_cell_neighbours(self):
        found = dict(C(5, 0).neighbours())
        assert found == {
            Direction.RIGHT: C(6, 0),
            Direction.DOWN_RIGHT: C(6, 1),
            Direction.DOWN: C(5, 1),
            Direction.DOWN_LEFT: C(4, 1),
        }


class TestLineTo:

    def test_diagonal(self):
        assert C(7, 7).line_to(C(10, 10)) == (Direction.DOWN_RIGHT, 3)

    def test_straight(self):
        assert C(7, 7).line_to(C(7, 2)) == (Direction.UP, 5)
        assert C(3, 7).line_to(C(0, 7)) == (Direction.LEFT, 3)

    def test_knight_jump_is_not_a_line(self):
        assert C(7, 7).line_to(C(8, 9)) is None

    def test_same_cell_is_not_a_line(self):
        assert C(7, 7).line_to(C(7, 7)) is None
