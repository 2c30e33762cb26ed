from crucible_routing import Grid, search
from crucible_routing.metrics import longest_straight, steps_taken, summarize, total_cost, total_turns


def test_metric_helpers_basic():
    result = search(Grid.parse("1111\n9991\n9991"))
    assert result.path == [(0, 0), (1, 0), (2, 0), (3, 0), (3, 1), (3, 2)]
    assert total_cost(result) == 5
    assert steps_taken(result) == 5
    assert total_turns(result) == 1
    assert longest_straight(result) == 3


def test_summarize_reachable_and_unreachable():
    summary = summarize(search(Grid.parse("12\n34")))
    assert summary["reachable"] is True
    assert summary["total_cost"] == 6
    assert summary["states_finalized"] >= 1

    missing = summarize(None)
    assert missing == {
        "reachable": False,
        "total_cost": None,
        "steps": 0,
        "turns": 0,
        "longest_run": 0,
        "states_finalized": 0,
    }
