"""Tests for coordinates and cardinal directions."""

import pytest

from warehousebot.warehouse import ALL_DIRECTIONS, ORIGIN, Coords2D, Direction


def test_opposites_are_symmetric():
    assert Direction.NORTH.opposite() is Direction.SOUTH
    assert Direction.SOUTH.opposite() is Direction.NORTH
    assert Direction.EAST.opposite() is Direction.WEST
    assert Direction.WEST.opposite() is Direction.EAST
    for direction in ALL_DIRECTIONS:
        assert direction.opposite().opposite() is direction


def test_neighbor_arithmetic_uses_screen_orientation():
    assert ORIGIN.go(Direction.NORTH) == Coords2D(0, -1)
    assert ORIGIN.go(Direction.SOUTH) == Coords2D(0, 1)
    assert ORIGIN.go(Direction.EAST) == Coords2D(1, 0)
    assert ORIGIN.go(Direction.WEST) == Coords2D(-1, 0)
    assert Coords2D(2, 3).go(Direction.EAST, 3) == Coords2D(5, 3)
    assert Coords2D(2, 3).go(Direction.NORTH, 0) == Coords2D(2, 3)
    assert Coords2D(2, 3).north_west() == Coords2D(1, 2)


def test_direction_index_matches_order():
    assert [d.index for d in ALL_DIRECTIONS] == [0, 1, 2, 3]
    assert ALL_DIRECTIONS[0] is Direction.NORTH


def test_direction_parse_accepts_names_and_abbreviations():
    assert Direction.parse("north") is Direction.NORTH
    assert Direction.parse(" East ") is Direction.EAST
    assert Direction.parse("s") is Direction.SOUTH
    assert Direction.parse("W") is Direction.WEST

    with pytest.raises(ValueError):
        Direction.parse("up")


def test_key_round_trip_and_display():
    pos = Coords2D(3, -2)
    assert pos.to_key() == "3,-2"
    assert Coords2D.from_key("3,-2") == pos
    assert Coords2D.from_key(" 3 , -2 ") == pos
    assert str(pos) == "(3, -2)"


@pytest.mark.parametrize("key", ["", "12", "1,2,3", "a,b", "1.5,2", "1;2"])
def test_from_key_rejects_malformed_input(key):
    with pytest.raises(ValueError):
        Coords2D.from_key(key)


def test_coords_are_hashable_values():
    lookup = {Coords2D(1, 2): "a"}
    assert lookup[Coords2D(1, 2)] == "a"
    assert Coords2D(1, 2) != Coords2D(2, 1)
