import math
from typing import Any, Optional

# "No limit" for time-valued fields. Only turned into math.inf when a
# start request is built.
UNBOUNDED = None

_INFINITY_STRINGS = ("inf", "+inf", "infinity", "+infinity")


def is_unbounded(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip().lower() in _INFINITY_STRINGS
    try:
        return math.isinf(value) and value > 0
    except TypeError:
        return False


def as_number(value: Any) -> float:
    """Coerce a host-supplied number. Booleans are not numbers here."""
    if isinstance(value, bool) or value is None:
        raise TypeError(f"expected a number, got {value!r}")
    res = float(value)
    if math.isnan(res) or math.isinf(res):
        raise ValueError(f"{value!r} is not a finite number")
    return res


def as_bound(value: Any) -> Optional[float]:
    """Like as_number, but +inf / None / "inf" mean unbounded."""
    if is_unbounded(value):
        return UNBOUNDED
    return as_number(value)


def bound_to_float(value: Optional[float]) -> float:
    return math.inf if value is UNBOUNDED else float(value)
