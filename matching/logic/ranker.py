"""
Ranker

Filters scored universities by the requested minimum match percentage
and orders the survivors for display.
"""

import math
from typing import Any, Dict, List, Mapping, Tuple

from .compiler import CriteriaInput, coerce_criteria
from .constants import (
    DEFAULT_MIN_MATCH_PERCENTAGE,
    MATCH_PERCENTAGE_KEY,
    Attribute,
)
from .resolver import as_number, resolve_attribute


def resolve_min_match_percentage(criteria: CriteriaInput) -> float:
    """Minimum percentage requested by the caller, 0 when absent or malformed."""
    minimum = coerce_criteria(criteria).min_match_percentage
    return minimum if minimum is not None else DEFAULT_MIN_MATCH_PERCENTAGE


def filter_by_threshold(
    scored: List[Dict[str, Any]],
    minimum: float
) -> List[Dict[str, Any]]:
    """
    Drop universities scoring strictly below `minimum`.

    Args:
        scored: Universities carrying `matchPercentage`
        minimum: Threshold percentage

    Returns:
        Universities meeting the threshold, in input order
    """
    return [item for item in scored if item[MATCH_PERCENTAGE_KEY] >= minimum]


def tuition_sort_key(university: Mapping[str, Any]) -> float:
    """Resolved tuition, infinite when the university has none."""
    tuition = as_number(resolve_attribute(university, Attribute.TUITION))
    return tuition if tuition is not None else math.inf


def _ranking_key(university: Mapping[str, Any]) -> Tuple[int, float]:
    return (-university[MATCH_PERCENTAGE_KEY], tuition_sort_key(university))


def rank_matches(filtered: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Rank by match percentage (descending), then tuition (ascending).

    Universities without tuition data sort last among ties. The sort is
    stable, so full ties keep catalog order.
    """
    return sorted(filtered, key=_ranking_key)
