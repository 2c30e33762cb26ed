import pytest

from crucible_routing import Direction, Grid, SearchState
from crucible_routing.utilities import (
    has_reversal,
    longest_run,
    path_cost,
    path_directions,
    path_to_str,
    path_turns,
    reconstruct_path,
)


def test_path_cost_and_turns():
    grid = Grid.parse("1234\n5678")
    p_straight = [(0, 0), (1, 0), (2, 0), (3, 0)]
    assert path_cost(grid, p_straight) == 2 + 3 + 4
    assert path_turns(p_straight) == 0
    assert longest_run(p_straight) == 3

    p_turn = [(0, 0), (1, 0), (1, 1), (2, 1)]
    assert path_cost(grid, p_turn) == 2 + 6 + 7
    assert path_turns(p_turn) == 2
    assert longest_run(p_turn) == 1
    assert path_directions(p_turn) == [Direction.RIGHT, Direction.DOWN, Direction.RIGHT]


def test_single_cell_path():
    grid = Grid.parse("9")
    assert path_cost(grid, [(0, 0)]) == 0
    assert path_turns([(0, 0)]) == 0
    assert longest_run([(0, 0)]) == 0


def test_reversal_detection():
    assert has_reversal([(0, 0), (1, 0), (0, 0)])
    assert not has_reversal([(0, 0), (1, 0), (1, 1), (0, 1)])


def test_non_adjacent_steps_rejected():
    with pytest.raises(ValueError):
        path_directions([(0, 0), (2, 0)])


def test_reconstruct_path_walks_predecessors():
    s0 = SearchState((0, 0))
    s1 = SearchState((1, 0), Direction.RIGHT, 1)
    s2 = SearchState((1, 1), Direction.DOWN, 1)
    prev = {s1: s0, s2: s1}
    assert reconstruct_path(prev, s2) == [s0, s1, s2]
    assert reconstruct_path(prev, s0) == [s0]


def test_path_to_str():
    assert path_to_str([(0, 0), (1, 0)]) == "(0,0)->(1,0)"
