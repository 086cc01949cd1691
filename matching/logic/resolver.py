"""
Attribute Resolver

Resolves a logical attribute against a university record that may carry
several legacy key names for the same data.

This is a pure READ layer:
- NO mutation of the record
- NO coercion beyond the helpers a check explicitly asks for
- NEVER raises; the only outcomes are "present" and "absent"
"""

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Mapping, Optional

from .constants import ATTRIBUTE_ALIASES, Attribute


def pick_value(source: Optional[Mapping[str, Any]], keys: Iterable[str]) -> Optional[Any]:
    """
    Return the first value among `keys` that is present and not None.

    Args:
        source: University record (may be None)
        keys: Alias keys in preference order

    Returns:
        The resolved value, or None when every alias is missing or null
    """
    if not source:
        return None
    for key in keys:
        value = source.get(key)
        if value is not None:
            return value
    return None


def resolve_attribute(source: Optional[Mapping[str, Any]], attribute: Attribute) -> Optional[Any]:
    """Resolve a logical attribute through its alias table."""
    return pick_value(source, ATTRIBUTE_ALIASES[attribute])


def normalize_string(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip().lower()


def as_number(value: Any) -> Optional[float]:
    """
    Parse a stored value as a finite number.

    Bools are not numbers here. Numeric strings are accepted because
    spreadsheet imports stored some figures as text.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float, Decimal)):
            number = float(value)
        elif isinstance(value, str):
            number = float(Decimal(value.strip()))
        else:
            return None
    except (InvalidOperation, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def as_string_list(value: Any) -> List[str]:
    """
    Normalize a stored list-ish value into a list of normalized strings.

    A scalar becomes a one-element list, a falsy value an empty list.
    Empty items are dropped.
    """
    if not value:
        return []
    items = value if isinstance(value, (list, tuple, set)) else [value]
    normalized = (normalize_string(item) for item in items)
    return [item for item in normalized if item]
