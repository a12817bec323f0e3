"""Lenient numeric and flag coercion, and currency rounding."""

import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable

CENT = Decimal("0.01")


def coerce_number(value: Any, default: float = 0.0) -> float:
    """Return a float for ``value`` or ``default`` when it isn't usable.

    Form fields arrive as ``None``, empty strings, ``"$1,250"`` or outright
    junk while the user is still typing. None of those should stop an
    estimate from rendering, so anything unusable becomes ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip().replace(",", "").replace("$", "").replace("%", "")
        if not value:
            return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def coerce_non_negative(value: Any) -> float:
    return max(coerce_number(value), 0.0)


def coerce_int(value: Any, default: int = 0) -> int:
    return int(coerce_number(value, float(default)))


TRUTHY_TEXT = ("true", "yes", "1")


def coerce_flag(value: Any, default: bool = False, truthy: Iterable[str] = TRUTHY_TEXT) -> bool:
    """Read a form flag; ``"false"`` or ``"no"`` is off, not a non-empty string."""
    if value is None:
        return default
    if isinstance(value, str):
        text = value.strip().lower()
        if not text:
            return default
        return text in truthy
    return bool(value)


def round_money(value: float) -> float:
    """Round to the nearest cent, half away from zero."""
    try:
        quantized = Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return 0.0
    return float(quantized)
