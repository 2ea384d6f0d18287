"""Typed accessors for untyped TOML tables.

Used at the config boundary so the rest of rk only sees narrowed types.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def get_str(table: Mapping[str, object], key: str, *, strip: bool = True) -> str | None:
    """Get a string value from a mapping.

    Returns None if missing, not a str, or empty. With ``strip=False`` the raw
    value is kept, which matters for prefixes ending in a space.
    """
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip() if strip else value
    return s or None


def get_float(table: Mapping[str, object], key: str) -> float | None:
    """Get a positive number (int or float) from a mapping.

    bool is rejected even though it is an int subclass.
    """
    value = table.get(key)
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    if value <= 0:
        return None
    return float(value)


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table (dict with string keys) from a mapping."""
    return as_str_dict(table.get(key))
