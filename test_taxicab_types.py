"""Tests for taxicab_types module."""

import pytest

from taxicab_types import Direction, DirectionParseError, Joint, Point


class TestPoint:
    """Tests for the Point value type."""

    def test_ordering_is_lexicographic(self) -> None:
        """Points sort by x, then y."""
        points = [Point(1, 0), Point(0, 5), Point(0, -1), Point(-2, 9)]
        assert sorted(points) == [Point(-2, 9), Point(0, -1), Point(0, 5), Point(1, 0)]

    def test_points_are_hashable_values(self) -> None:
        """Equal points collapse in sets and dict keys."""
        assert {Point(1, 2), Point(1, 2)} == {Point(1, 2)}

    def test_go_each_direction(self) -> None:
        """go offsets by exactly one cell."""
        p = Point(3, -4)
        assert p.go(Direction.E) == Point(4, -4)
        assert p.go(Direction.W) == Point(2, -4)
        assert p.go(Direction.N) == Point(3, -3)
        assert p.go(Direction.S) == Point(3, -5)


class TestDirection:
    """Tests for Direction parsing, display and stepping."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("east", Direction.E),
            ("right", Direction.E),
            ("→", Direction.E),
            ("west", Direction.W),
            ("left", Direction.W),
            ("←", Direction.W),
            ("north", Direction.N),
            ("up", Direction.N),
            ("↑", Direction.N),
            ("south", Direction.S),
            ("down", Direction.S),
            ("↓", Direction.S),
        ],
    )
    def test_parse_names(self, text: str, expected: Direction) -> None:
        """Every recognized name parses."""
        assert Direction.parse(text) == expected

    def test_parse_is_case_insensitive(self) -> None:
        """EAST and the arrow name the same direction."""
        assert Direction.from_str("EAST") == Direction.from_str("→")
        assert Direction.parse("Down") == Direction.S

    def test_parse_failure_carries_normalized_input(self) -> None:
        """Unknown names fail with the lower-cased input."""
        with pytest.raises(DirectionParseError) as excinfo:
            Direction.parse("up-left")
        assert excinfo.value.normalized == "up-left"

        with pytest.raises(DirectionParseError) as excinfo:
            Direction.parse("NorthEast")
        assert excinfo.value.normalized == "northeast"

    def test_parse_error_is_value_error(self) -> None:
        """Callers may catch ValueError."""
        with pytest.raises(ValueError, match="Unknown direction"):
            Direction.parse("")

    def test_display_symbols(self) -> None:
        """str gives the arrow symbol."""
        assert [str(d) for d in Direction] == ["→", "←", "↑", "↓"]

    def test_display_round_trips_through_parse(self) -> None:
        """Parsing the displayed symbol returns the same direction."""
        for direction in Direction:
            assert Direction.parse(str(direction)) is direction

    def test_axis_and_sign(self) -> None:
        """axis and positive encode X(+/-) and Y(+/-)."""
        assert (Direction.E.axis, Direction.E.positive) == ("x", True)
        assert (Direction.W.axis, Direction.W.positive) == ("x", False)
        assert (Direction.N.axis, Direction.N.positive) == ("y", True)
        assert (Direction.S.axis, Direction.S.positive) == ("y", False)

    def test_opposite(self) -> None:
        """Stepping then stepping back returns to the start."""
        p = Point(0, 0)
        for direction in Direction:
            assert direction.opposite.step(direction.step(p)) == p

    def test_step(self) -> None:
        """step matches Point.go."""
        assert Direction.N.step(Point(1, 1)) == Point(1, 2)


class TestJoint:
    """Tests for the Joint edge type."""

    def test_source_and_target(self) -> None:
        """target is one step from source along the direction."""
        joint = Joint(Point(2, 2), Direction.W)
        assert joint.source() == Point(2, 2)
        assert joint.target() == Point(1, 2)

    def test_joints_are_values(self) -> None:
        """Joints compare and hash by content."""
        assert Joint(Point(0, 0), Direction.N) == Joint(Point(0, 0), Direction.N)
        assert len({Joint(Point(0, 0), Direction.N), Joint(Point(0, 0), Direction.S)}) == 2
