from typing import Dict, Type

from .base import CharMap
from .digits import DigitCharMap

REGISTRY: Dict[str, Type[CharMap]] = {
    'digit': DigitCharMap,
}

def register(name: str, cls: Type[CharMap]) -> None:
    REGISTRY[name] = cls

def get_charmap(name: str) -> CharMap:
    cls = REGISTRY.get(name)
    if cls is None:
        raise KeyError(f"Unknown character map {name!r}; known: {sorted(REGISTRY)}")
    return cls()
