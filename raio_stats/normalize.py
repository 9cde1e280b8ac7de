"""Canonical indicator names, pt-BR number parsing and header alias resolution.

Absent or unparseable numbers are returned as ``None``. A recorded ``0``
is a real count and must never be confused with missing data, so nothing
here coerces bad input to zero.
"""

from __future__ import annotations

import math
import re
import unicodedata
from typing import Mapping, Sequence

from .errors import MalformedSchema, UnparseableValue
from .indicators import INDICATOR_ALIASES

_WHITESPACE = re.compile(r"\s+")
# "2.454" or "1.234.567": dots grouping thousands, no decimal part
_THOUSANDS_ONLY = re.compile(r"^[+-]?[1-9]\d{0,2}(\.\d{3})+$")


def fold(text: str) -> str:
    """Lowercase, strip accents and collapse whitespace."""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _WHITESPACE.sub(" ", stripped).strip().lower()


_FOLDED_ALIASES = {fold(k): v for k, v in INDICATOR_ALIASES.items()}


def normalize_indicator(name: str | None) -> str:
    if name is None:
        return ""
    trimmed = name.strip()
    key = trimmed.lower()
    if key in INDICATOR_ALIASES:
        return INDICATOR_ALIASES[key]
    return _FOLDED_ALIASES.get(fold(trimmed), trimmed)


def _missing(value: object, strict: bool) -> None:
    if strict:
        raise UnparseableValue(value)
    return None


def parse_number(value: str | float | int | None, *, strict: bool = False) -> float | None:
    """Parse a pt-BR formatted number.

    ``"12,5%"`` and ``"12.5"`` both give ``12.5``; ``"2.454"`` and
    ``"2.454,0"`` give ``2454.0``. Percentages never take the thousands
    reading, so ``"12.345%"`` is ``12.345``. Empty, ``None`` and garbage give ``None``,
    or raise :class:`UnparseableValue` when ``strict`` is set.
    """
    if value is None:
        return _missing(value, strict)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = float(value)
        return number if math.isfinite(number) else _missing(value, strict)

    cleaned = _WHITESPACE.sub("", str(value)).replace("%", "")
    if not cleaned:
        return _missing(value, strict)
    if "," in cleaned:
        cleaned = cleaned.replace(".", "").replace(",", ".")
    elif "%" not in str(value) and _THOUSANDS_ONLY.match(cleaned):
        cleaned = cleaned.replace(".", "")

    try:
        number = float(cleaned)
    except ValueError:
        return _missing(value, strict)
    if not math.isfinite(number):
        return _missing(value, strict)
    return number


def parse_year(value: str | float | int | None) -> int | None:
    number = parse_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def resolve_columns(
    header: Sequence[str],
    aliases: Mapping[str, Sequence[str]],
    *,
    required: bool = False,
) -> tuple[dict[str, str], list[str]]:
    """Map each logical field to the header column that carries it.

    Aliases are tried in order; for each one an exact match wins over a
    case/accent-insensitive one. Returns ``(resolved, missing)`` where
    ``missing`` holds the alias lists (``"Valor/Quantidade"``) that found
    nothing.
    """
    folded = {}
    for column in header:
        folded.setdefault(fold(column), column)

    resolved: dict[str, str] = {}
    missing: list[str] = []
    for field, candidates in aliases.items():
        for candidate in candidates:
            if candidate in header:
                resolved[field] = candidate
                break
            match = folded.get(fold(candidate))
            if match is not None:
                resolved[field] = match
                break
        else:
            missing.append("/".join(candidates))

    if missing and required:
        raise MalformedSchema(missing)
    return resolved, missing
