from .base import CharMap


class DigitCharMap(CharMap):
    """Map ASCII digits '0'-'9' to the costs 0-9."""

    name = "digit"

    def value(self, ch: str) -> int:
        if len(ch) != 1 or not ("0" <= ch <= "9"):
            raise self.reject(ch)
        return ord(ch) - ord("0")
