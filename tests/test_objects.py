import pytest

from crucible_routing import Direction, Grid, MalformedInputError, OutOfBoundsError, SearchState


def test_grid_parse_dimensions_and_costs():
    g = Grid.parse("123\n456\n")
    assert (g.width, g.height) == (3, 2)
    assert g.cost((0, 0)) == 1
    assert g.cost((2, 1)) == 6
    assert g.start == (0, 0)
    assert g.goal == (2, 1)
    assert str(g) == "123\n456"


def test_grid_parse_without_trailing_newline_and_crlf():
    assert Grid.parse("12\r\n34") == Grid.parse("12\n34\n")


def test_grid_neighbors_in_bounds():
    g = Grid.parse("000\n000\n000")
    assert g.neighbors4((1, 1)) == [(0, 1), (1, 0), (2, 1), (1, 2)]

    # corners
    assert g.neighbors4((0, 0)) == [(1, 0), (0, 1)]
    assert g.neighbors4((2, 2)) == [(1, 2), (2, 1)]


def test_single_cell_grid_has_no_neighbours():
    g = Grid.parse("7")
    assert g.neighbors4((0, 0)) == []


@pytest.mark.parametrize("coord", [(-1, 0), (0, -1), (3, 0), (0, 2)])
def test_out_of_bounds_access(coord):
    g = Grid.parse("123\n456")
    assert not g.in_bounds(coord)
    with pytest.raises(OutOfBoundsError):
        g.cost(coord)
    with pytest.raises(IndexError):
        g.neighbors4(coord)


@pytest.mark.parametrize("text", [
    "", "\n", "12\n3", "12\n\n34", "1a\n23", "1 2",
    "12\x1c34", "12\x0c34", "12\u202834", "12\x0b34", "12\x8534",
    "12\n34\n   \n", "12\n34\n\t", "12\n34\n\n",
])
def test_malformed_input(text):
    with pytest.raises(MalformedInputError):
        Grid.parse(text)


def test_malformed_input_reports_position():
    with pytest.raises(MalformedInputError) as info:
        Grid.parse("123\n4x6")
    assert info.value.line == 2
    assert info.value.column == 2


def test_from_rows_rejects_negative_costs():
    with pytest.raises(MalformedInputError):
        Grid.from_rows([[1, -2]])


def test_from_rows_rejects_non_integer_costs():
    with pytest.raises(MalformedInputError) as info:
        Grid.from_rows([[1.9, 2]])
    assert (info.value.line, info.value.column) == (1, 1)
    with pytest.raises(MalformedInputError):
        Grid.from_rows([[1, True]])
    with pytest.raises(MalformedInputError):
        Grid.from_rows([["3", 2]])


def test_check_returns_tuple_or_raises():
    g = Grid.parse("12\n34")
    assert g.check([1, 1]) == (1, 1)
    with pytest.raises(OutOfBoundsError):
        g.check((2, 0))


def test_grid_is_immutable():
    g = Grid.parse("12")
    with pytest.raises(AttributeError):
        g.rows = ((3, 4),)


def test_direction_helpers():
    assert Direction.between((1, 1), (0, 1)) is Direction.LEFT
    assert Direction.between((1, 1), (1, 2)) is Direction.DOWN
    assert Direction.UP.opposite is Direction.DOWN
    assert Direction.RIGHT.step((2, 3)) == (3, 3)
    with pytest.raises(ValueError):
        Direction.between((0, 0), (1, 1))


def test_search_states_are_distinct_by_direction_and_run():
    a = SearchState((1, 0), Direction.RIGHT, 1)
    b = SearchState((1, 0), Direction.RIGHT, 2)
    c = SearchState((1, 0), Direction.RIGHT, 1)
    assert a != b
    assert a == c
    assert len({a, b, c}) == 2
    assert SearchState((0, 0)).sort_key() < a.sort_key()
