"""Ordered fallback resolution of loosely-shaped record fields."""
from collections.abc import Iterable, Mapping
from typing import Any


def resolve_field(record: Any, candidates: Iterable[str], default: str) -> str:
    """
    Return the first non-empty candidate value as a string.

    Args:
        record: Dict or attribute object holding the raw data
        candidates: Dotted accessor paths, tried in order (e.g. "patient.name")
        default: Literal returned when every candidate is empty

    Returns:
        Resolved string value, never empty unless the default is
    """
    for path in candidates:
        value = stringify(lookup_path(record, path))
        if value:
            return value
    return default


def lookup_path(record: Any, path: str) -> Any:
    """Follow a dotted path through dicts and attributes, None if any hop is missing."""
    current = record
    for part in path.split("."):
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(part)
        else:
            current = getattr(current, part, None)
    return current


def lookup_price(catalog: Iterable[Any], test_name: str) -> float:
    """Price of the catalog entry whose name exactly matches, 0.0 if none does."""
    for entry in catalog:
        if lookup_path(entry, "name") == test_name:
            price = lookup_path(entry, "price")
            return float(price) if price else 0.0
    return 0.0


def stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
