import pytest

from blob47.directions import (
    DIAGONALS,
    ORTHOGONALS,
    Aggregate,
    Compass,
    angular_distance,
    axis_of,
    direction_between,
    horizontal_of,
    kind_of,
    members,
    offset_of,
    opposite,
    rotate,
    vertical_of,
)
from blob47.errors import InvalidDirectionOperand


def test_rotate_steps_clockwise():
    assert rotate(Compass.TOP) == Compass.TOP_RIGHT
    assert rotate(Compass.TOP, -1) == Compass.TOP_LEFT
    assert rotate(Compass.LEFT, 3) == Compass.TOP_RIGHT
    assert rotate(Compass.LEFT, -3) == Compass.BOTTOM_RIGHT
    assert isinstance(rotate(Compass.TOP, 5), Compass)


@pytest.mark.parametrize("d", list(Compass))
def test_rotate_is_a_group_action(d):
    assert rotate(d, 8) == d
    assert rotate(d, -8) == d
    for n in range(-9, 10):
        for m in range(-9, 10):
            assert rotate(rotate(d, n), m) == rotate(d, n + m)


def test_opposite():
    assert opposite(Compass.TOP) == Compass.BOTTOM
    assert opposite(Compass.TOP_RIGHT) == Compass.BOTTOM_LEFT
    assert opposite(Compass.LEFT) == Compass.RIGHT
    for d in Compass:
        assert opposite(opposite(d)) == d


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (Compass.TOP, Compass.RIGHT, 2),
        (Compass.RIGHT, Compass.TOP, -2),
        (Compass.TOP_LEFT, Compass.TOP_RIGHT, 2),
        (Compass.LEFT, Compass.TOP_RIGHT, 3),
        (Compass.TOP, Compass.BOTTOM, 4),
        (Compass.BOTTOM, Compass.TOP, -4),
        (Compass.BOTTOM_LEFT, Compass.BOTTOM_LEFT, 0),
    ],
)
def test_angular_distance_examples(a, b, expected):
    assert angular_distance(a, b) == expected


def test_angular_distance_is_antisymmetric_and_bounded():
    for a in Compass:
        for b in Compass:
            steps = angular_distance(a, b)
            assert -4 <= steps <= 4
            assert steps == -angular_distance(b, a)
            assert rotate(a, steps) == b


@pytest.mark.parametrize("agg", list(Aggregate))
def test_aggregates_are_not_rotation_operands(agg):
    with pytest.raises(InvalidDirectionOperand):
        rotate(agg, 1)
    with pytest.raises(InvalidDirectionOperand):
        opposite(agg)
    with pytest.raises(InvalidDirectionOperand):
        angular_distance(Compass.TOP, agg)


def test_plain_ints_are_rejected():
    with pytest.raises(InvalidDirectionOperand):
        rotate(2, 1)


def test_invalid_operand_is_a_value_error():
    with pytest.raises(ValueError):
        rotate(Aggregate.CENTER)


def test_kind_and_members_are_inverse():
    for d in ORTHOGONALS:
        assert kind_of(d) is Aggregate.ORTHOGONAL
    for d in DIAGONALS:
        assert kind_of(d) is Aggregate.DIAGONAL
    for d in Compass:
        assert d in members(kind_of(d))
    assert members(Aggregate.VERTICAL) == (Compass.TOP, Compass.BOTTOM)
    assert members(Aggregate.HORIZONTAL) == (Compass.LEFT, Compass.RIGHT)
    assert members(Aggregate.CENTER) == ()
    with pytest.raises(InvalidDirectionOperand):
        members(Compass.TOP)


def test_vertical_projection():
    assert vertical_of(Compass.TOP_RIGHT) is Compass.TOP
    assert vertical_of(Compass.TOP_LEFT) is Compass.TOP
    assert vertical_of(Compass.BOTTOM) is Compass.BOTTOM
    assert vertical_of(Compass.RIGHT) is Aggregate.VERTICAL
    assert vertical_of(Aggregate.VERTICAL) is Aggregate.VERTICAL
    for agg in (
        Aggregate.CENTER,
        Aggregate.HORIZONTAL,
        Aggregate.ORTHOGONAL,
        Aggregate.DIAGONAL,
    ):
        with pytest.raises(InvalidDirectionOperand):
            vertical_of(agg)


def test_horizontal_projection():
    assert horizontal_of(Compass.BOTTOM_LEFT) is Compass.LEFT
    assert horizontal_of(Compass.TOP_RIGHT) is Compass.RIGHT
    assert horizontal_of(Compass.TOP) is Aggregate.HORIZONTAL
    assert horizontal_of(Aggregate.HORIZONTAL) is Aggregate.HORIZONTAL
    for agg in (
        Aggregate.CENTER,
        Aggregate.VERTICAL,
        Aggregate.ORTHOGONAL,
        Aggregate.DIAGONAL,
    ):
        with pytest.raises(InvalidDirectionOperand):
            horizontal_of(agg)


def test_axis_of_dispatches_on_axis():
    assert axis_of(Compass.BOTTOM_RIGHT, Aggregate.VERTICAL) is Compass.BOTTOM
    assert axis_of(Compass.BOTTOM_RIGHT, Aggregate.HORIZONTAL) is Compass.RIGHT
    with pytest.raises(InvalidDirectionOperand):
        axis_of(Compass.TOP, Aggregate.DIAGONAL)
    assert axis_of(Aggregate.VERTICAL, Aggregate.VERTICAL) is Aggregate.VERTICAL
    for axis in (Aggregate.VERTICAL, Aggregate.HORIZONTAL):
        with pytest.raises(InvalidDirectionOperand):
            axis_of(Aggregate.CENTER, axis)


def test_offsets_use_screen_coordinates():
    assert offset_of(Compass.TOP) == (0, -1)
    assert offset_of(Compass.BOTTOM_RIGHT) == (1, 1)
    assert offset_of(Compass.LEFT) == (-1, 0)
    assert offset_of(Aggregate.CENTER) == (0, 0)


def test_direction_between():
    assert direction_between((0, 0), (5, -3)) is Compass.TOP_RIGHT
    assert direction_between((2, 2), (2, 9)) is Compass.BOTTOM
    assert direction_between((4, 1), (4, 1)) is Aggregate.CENTER
    for d in Compass:
        assert direction_between((0, 0), offset_of(d)) is d
