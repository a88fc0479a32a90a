# src/app/services/text.py
"""
Input normalization shared by the recipe and family services.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Optional


def parse_lines(value: Any) -> List[str]:
    """
    Turn a free-text block into an ordered list of entries.

    The block is split on newlines, each line is trimmed and blank lines are
    dropped, so "flour\\nsugar\\n\\neggs" becomes ["flour", "sugar", "eggs"].
    A list is accepted too and cleaned the same way, item by item.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items: Iterable[Any] = value.splitlines()
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        items = [value]
    lines: List[str] = []
    for item in items:
        if item is None:
            continue
        text = str(item).strip()
        if text:
            lines.append(text)
    return lines


def clean_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    stripped = str(value).strip()
    return stripped or None


def to_int(value: Any) -> Optional[int]:
    """Parse an int from an int or numeric string; blank means absent."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("booleans are not numbers")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"not an integer: {value}")
        return int(value)
    text = str(value).strip()
    if not text:
        return None
    return int(text)


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)
