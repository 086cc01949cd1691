"""
Scoring Evaluator

Runs compiled checks against universities and turns the outcomes into an
integer match percentage.

Each university is scored against its own denominator: a check the
university has no data for is NOT_APPLICABLE and counts toward neither
the matched nor the total tally.
"""

from typing import Any, Callable, Dict, Iterable, List, Mapping, Sequence

from .constants import (
    MATCH_PERCENTAGE_KEY,
    NO_TEST_POLICY,
    REQUIRES_TEST_POLICY,
    VACUOUS_MATCH_PERCENTAGE,
    CheckKind,
    Outcome,
)
from .contracts import Check
from .resolver import as_number, as_string_list, normalize_string, resolve_attribute


def _outcome(matched: bool) -> Outcome:
    return Outcome.MATCH if matched else Outcome.MISS


# =============================================================================
# CHECK INTERPRETERS
# =============================================================================

def _equals(check: Check, university: Mapping[str, Any]) -> Outcome:
    value = normalize_string(resolve_attribute(university, check.attribute))
    if not value:
        return Outcome.NOT_APPLICABLE
    return _outcome(value == check.target)


def _at_most(check: Check, university: Mapping[str, Any]) -> Outcome:
    value = as_number(resolve_attribute(university, check.attribute))
    if value is None:
        return Outcome.NOT_APPLICABLE
    return _outcome(value <= check.target)


def _at_least(check: Check, university: Mapping[str, Any]) -> Outcome:
    value = as_number(resolve_attribute(university, check.attribute))
    if value is None:
        return Outcome.NOT_APPLICABLE
    return _outcome(value >= check.target)


def _includes(check: Check, university: Mapping[str, Any]) -> Outcome:
    values = as_string_list(resolve_attribute(university, check.attribute))
    if not values:
        return Outcome.NOT_APPLICABLE
    return _outcome(check.target in values)


def _includes_all(check: Check, university: Mapping[str, Any]) -> Outcome:
    values = as_string_list(resolve_attribute(university, check.attribute))
    if not values:
        return Outcome.NOT_APPLICABLE
    return _outcome(all(target in values for target in check.target))


def _is_true(check: Check, university: Mapping[str, Any]) -> Outcome:
    value = resolve_attribute(university, check.attribute)
    if value is None:
        return Outcome.NOT_APPLICABLE
    return _outcome(bool(value))


def _test_policy(check: Check, university: Mapping[str, Any]) -> Outcome:
    """
    Three-way required tests rule.

    An explicitly empty test list is data ("no tests required"), so only a
    missing attribute is NOT_APPLICABLE.
    """
    raw = resolve_attribute(university, check.attribute)
    if raw is None:
        return Outcome.NOT_APPLICABLE
    tests = as_string_list(raw)

    if check.target == NO_TEST_POLICY:
        return _outcome(len(tests) == 0)
    if check.target == REQUIRES_TEST_POLICY:
        return _outcome(len(tests) > 0)
    return _outcome(check.target in tests)


CHECK_INTERPRETERS: Dict[CheckKind, Callable[[Check, Mapping[str, Any]], Outcome]] = {
    CheckKind.EQUALS: _equals,
    CheckKind.AT_MOST: _at_most,
    CheckKind.AT_LEAST: _at_least,
    CheckKind.INCLUDES: _includes,
    CheckKind.INCLUDES_ALL: _includes_all,
    CheckKind.IS_TRUE: _is_true,
    CheckKind.TEST_POLICY: _test_policy,
}


def evaluate_check(check: Check, university: Mapping[str, Any]) -> Outcome:
    """Evaluate one check against one university."""
    return CHECK_INTERPRETERS[check.kind](check, university)


# =============================================================================
# SCORING
# =============================================================================

def round_half_up_percentage(matched: int, total: int) -> int:
    """round(matched / total * 100) with halves rounded up, in exact integer math."""
    return (matched * 200 + total) // (2 * total)


def score_university(checks: Sequence[Check], university: Mapping[str, Any]) -> int:
    """
    Compute the match percentage of a single university.

    Args:
        checks: Compiled checks for the request
        university: University record

    Returns:
        Integer percentage in [0, 100]; 100 when no check applies
    """
    matched = 0
    total = 0

    for check in checks:
        outcome = evaluate_check(check, university)
        if outcome is Outcome.NOT_APPLICABLE:
            continue
        total += 1
        if outcome is Outcome.MATCH:
            matched += 1

    if total == 0:
        return VACUOUS_MATCH_PERCENTAGE
    return round_half_up_percentage(matched, total)


def score_catalog(
    checks: Sequence[Check],
    catalog: Iterable[Mapping[str, Any]]
) -> List[Dict[str, Any]]:
    """
    Score every university in the catalog.

    Returns new dicts carrying `matchPercentage`; catalog records are not modified.
    """
    return [
        {**university, MATCH_PERCENTAGE_KEY: score_university(checks, university)}
        for university in catalog
    ]
