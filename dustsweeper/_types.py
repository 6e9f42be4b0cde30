from __future__ import annotations

import operator
from typing import Callable

_OPS: dict[str, Callable[[float, float], bool]] = {
    ">=": operator.ge,
    "<=": operator.le,
    ">": operator.gt,
    "<": operator.lt,
    "==": operator.eq,
    "!=": operator.ne,
}


def compare(left: float, op: str, right: float) -> bool:
    """Compare two values using a string operator."""
    fn = _OPS.get(op)
    if fn is None:
        raise ValueError(f"Unknown operator: {op!r}. Expected one of {list(_OPS)}")
    return fn(left, right)


def zone_key(zone_index: int) -> str:
    """Save-blob key for a zone's currency bucket."""
    return f"zone_{zone_index}"


def parse_zone_key(key: str | int) -> int:
    """Inverse of zone_key; also accepts bare integer keys from older saves."""
    if isinstance(key, int):
        return key
    text = str(key)
    if text.startswith("zone_"):
        text = text[len("zone_"):]
    return int(text)
