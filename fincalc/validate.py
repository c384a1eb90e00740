# fincalc/validate.py
from __future__ import annotations

import math
from typing import Any, Iterable, List, Mapping, Optional

from .errors import InputError

_MISSING = object()


def split_list(value: Any) -> List[str]:
    """'a, b,,c' -> ['a', 'b', 'c']; lists pass through as stripped strings."""
    if value is None:
        return []
    if isinstance(value, str):
        items: Iterable[Any] = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        items = [value]
    out = []
    for x in items:
        s = str(x).strip()
        if s:
            out.append(s)
    return out


def to_number(value: Any, name: str = "value") -> float:
    if isinstance(value, bool):
        raise InputError(f"Not a number for {name}: {value!r}")
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise InputError(f"Not a number for {name}: {value!r}") from None
    if not math.isfinite(v):
        raise InputError(f"Not a finite number for {name}: {value!r}")
    return v


def to_numbers(values: Any, name: str = "cashflows") -> List[float]:
    return [to_number(x, name) for x in split_list(values)]


def require_number(
    params: Mapping[str, Any], key: str, default: Any = _MISSING
) -> float:
    """Fetch params[key] as a float; missing/None falls back to *default* or fails."""
    raw = params.get(key)
    if raw is None or raw == "":
        if default is _MISSING:
            raise InputError(f"missing required parameter: --{key}")
        return float(default)
    return to_number(raw, key)


def require_numbers(params: Mapping[str, Any], key: str = "cashflows") -> List[float]:
    values = to_numbers(params.get(key), key)
    if not values:
        raise InputError(f"missing required parameter: --{key}")
    return values


def optional_text(params: Mapping[str, Any], key: str) -> Optional[str]:
    raw = params.get(key)
    return None if raw is None else str(raw)


__all__ = [
    "split_list",
    "to_number",
    "to_numbers",
    "require_number",
    "require_numbers",
    "optional_text",
]
