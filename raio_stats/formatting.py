from __future__ import annotations

import math

MISSING = "s/d"


def _is_missing(value) -> bool:
    return value is None or (isinstance(value, float) and not math.isfinite(value))


def format_number(value: float | int | None) -> str:
    """pt-BR grouping: ``9122`` -> ``"9.122"``, ``1234.5`` -> ``"1.234,50"``."""
    if _is_missing(value):
        return MISSING
    decimals = 0 if float(value).is_integer() else 2
    text = f"{value:,.{decimals}f}"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def format_percent(value: float | None) -> str:
    if _is_missing(value):
        return MISSING
    return f"{value:.2f}".replace(".", ",") + "%"


def format_delta(value: float | None) -> str:
    if _is_missing(value):
        return MISSING
    sign = "+" if value > 0 else ""
    return f"{sign}{format_number(value)}"
