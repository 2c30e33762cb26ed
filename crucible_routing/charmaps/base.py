from ..errors import MalformedInputError


class CharMap:
    """Base class for character-to-cost mappings used when parsing grids."""

    name = "base"

    def value(self, ch: str) -> int:
        """Return the cost encoded by `ch`, raising MalformedInputError if unmappable."""
        raise NotImplementedError

    def __call__(self, ch: str) -> int:
        return self.value(ch)

    def reject(self, ch: str) -> MalformedInputError:
        return MalformedInputError(f"Character {ch!r} is not accepted by the {self.name} map")
