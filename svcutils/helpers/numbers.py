"""Best-effort number parsing.

Parsing reads the leading number of the value's string form and ignores
whatever trails it, so ``"12px"`` parses as ``12``.
"""

import math
import re
from typing import Any, List, Mapping, Optional


_INT_RE = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|\d+)")
_FLOAT_RE = re.compile(r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")


def parse_int(value: Any) -> Optional[int]:
    """Leading integer of ``value``, ``None`` when there is none.

    Hexadecimal literals (``0x1f``) are accepted; floats are truncated.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, int):
        return value

    match = _INT_RE.match(str(value))
    if not match:
        return None
    sign, digits = match.groups()
    number = int(digits, 16) if digits[:2].lower() == "0x" else int(digits)
    return -number if sign == "-" else number


def parse_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return None if isinstance(value, float) and math.isnan(value) else float(value)

    match = _FLOAT_RE.match(str(value))
    if not match:
        return None
    return float(match.group(1).replace("Infinity", "inf"))


def parse_int_null(value: Any) -> Optional[int]:
    # Zero maps to None as well; callers rely on that.
    return parse_int(value) or None


def parse_float_null(value: Any) -> Optional[float]:
    return parse_float(value) or None


def arr(start: int, stop: int) -> List[int]:
    return list(range(start, stop))


def num_keys(obj: Mapping[Any, Any]) -> List[Optional[int]]:
    return [parse_int(k) for k in obj]
