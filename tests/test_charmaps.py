import pytest

from crucible_routing import Grid, MalformedInputError
from crucible_routing.charmaps import REGISTRY, CharMap, get_charmap, register


def test_digit_map_registered():
    cm = get_charmap("digit")
    assert [cm(ch) for ch in "0189"] == [0, 1, 8, 9]
    with pytest.raises(MalformedInputError):
        cm.value("²")


def test_unknown_map_name():
    with pytest.raises(KeyError):
        get_charmap("nope")


def test_custom_map_plugs_into_parse():
    class DotHash(CharMap):
        name = "dothash"

        def value(self, ch):
            if ch == ".":
                return 1
            if ch == "#":
                return 9
            raise self.reject(ch)

    register("dothash", DotHash)
    try:
        g = Grid.parse(".#\n#.", charmap="dothash")
        assert g.rows == ((1, 9), (9, 1))
        assert Grid.parse("..", charmap=DotHash()).rows == ((1, 1),)
    finally:
        REGISTRY.pop("dothash", None)
