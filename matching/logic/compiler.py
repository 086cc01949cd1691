"""
Criteria Compiler

Translates a nested CriteriaDocument into a flat, ordered tuple of Check
descriptors. Each present, well-formed criteria field contributes exactly
one independent check; absent, malformed or "Any" fields contribute none.

The compiler never raises for bad input. Order of the output does not
affect scoring but is stable: top-level fields first, then categories in
the order academics, financials, lifestyle, admissions, demographics, future.
"""

import logging
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from .constants import (
    ANY_SENTINEL,
    Attribute,
    CheckKind,
)
from .contracts import (
    AcademicsFilters,
    AdmissionsFilters,
    Check,
    CriteriaDocument,
    DemographicsFilters,
    FinancialsFilters,
    FutureFilters,
    LifestyleFilters,
)
from .resolver import normalize_string

logger = logging.getLogger(__name__)

CriteriaInput = Union[CriteriaDocument, Mapping[str, Any], None]


def coerce_criteria(criteria: CriteriaInput) -> CriteriaDocument:
    """
    Accept a CriteriaDocument, a raw mapping or None.

    Anything that cannot be read as a criteria document is treated as an
    empty one.
    """
    if isinstance(criteria, CriteriaDocument):
        return criteria
    if not isinstance(criteria, Mapping):
        return CriteriaDocument()
    try:
        return CriteriaDocument.model_validate(dict(criteria))
    except ValidationError as e:
        logger.debug(f"Ignoring unreadable criteria document: {e}")
        return CriteriaDocument()


class _CheckList:
    """Accumulates checks while skipping absent and sentinel values."""

    def __init__(self):
        self.checks: List[Check] = []

    def add(self, kind: CheckKind, attribute: Attribute, target: Any, source: str):
        self.checks.append(Check(kind=kind, attribute=attribute, target=target, source=source))

    def numeric(self, kind: CheckKind, attribute: Attribute, value: Optional[float], source: str):
        if value is not None:
            self.add(kind, attribute, value, source)

    def text(self, attribute: Attribute, value: Optional[str], source: str, kind: CheckKind = CheckKind.EQUALS):
        target = _preference(value)
        if target:
            self.add(kind, attribute, target, source)

    def all_of(self, attribute: Attribute, values: Optional[Sequence[str]], source: str):
        targets = _normalized_targets(values)
        if targets:
            self.add(CheckKind.INCLUDES_ALL, attribute, targets, source)

    def flag(self, attribute: Attribute, value: Optional[bool], source: str):
        # Unticked toggles mean "don't care", only an explicit True filters
        if value is True:
            self.add(CheckKind.IS_TRUE, attribute, True, source)


def _preference(value: Optional[str]) -> Optional[str]:
    """Normalized string preference, or None for empty and "Any" values."""
    target = normalize_string(value)
    if not target or target == ANY_SENTINEL:
        return None
    return target


def _normalized_targets(values: Optional[Sequence[str]]) -> Tuple[str, ...]:
    if not values:
        return ()
    normalized = (normalize_string(item) for item in values)
    return tuple(item for item in normalized if item)


# =============================================================================
# CATEGORY COMPILERS
# =============================================================================

def _compile_academics(out: _CheckList, filters: AcademicsFilters):
    out.numeric(CheckKind.AT_LEAST, Attribute.MIN_GPA, filters.min_gpa, "academics.minGpa")
    out.text(Attribute.DEGREE_LEVELS, filters.degree_level, "academics.degreeLevel", kind=CheckKind.INCLUDES)
    out.all_of(Attribute.LANGUAGES, filters.languages, "academics.languages")
    out.text(Attribute.REQUIRED_TESTS, filters.test_policy, "academics.testPolicy", kind=CheckKind.TEST_POLICY)


def _compile_financials(out: _CheckList, filters: FinancialsFilters):
    out.numeric(CheckKind.AT_MOST, Attribute.TUITION, filters.max_budget, "financials.maxBudget")
    out.numeric(CheckKind.AT_MOST, Attribute.COST_OF_LIVING, filters.max_cost_of_living, "financials.maxCostOfLiving")
    out.numeric(CheckKind.AT_LEAST, Attribute.SCHOLARSHIP_AVAILABILITY, filters.min_scholarship, "financials.minScholarship")
    out.flag(Attribute.INTERNATIONAL_SCHOLARSHIPS, filters.scholarships_international, "financials.scholarshipsInternational")
    out.flag(Attribute.NEED_BLIND, filters.need_blind, "financials.needBlind")


def _compile_lifestyle(out: _CheckList, filters: LifestyleFilters):
    out.text(Attribute.COUNTRY, filters.country, "lifestyle.country")
    out.text(Attribute.CITY, filters.city, "lifestyle.city")
    out.text(Attribute.CLIMATE, filters.climate, "lifestyle.climate")
    out.text(Attribute.CAMPUS_SETTING, filters.campus_setting, "lifestyle.campusSetting")


def _compile_admissions(out: _CheckList, filters: AdmissionsFilters):
    out.numeric(CheckKind.AT_MOST, Attribute.ACCEPTANCE_RATE, filters.max_acceptance_rate, "admissions.maxAcceptanceRate")
    out.numeric(CheckKind.AT_LEAST, Attribute.SAT, filters.min_sat, "admissions.minSat")


def _compile_demographics(out: _CheckList, filters: DemographicsFilters):
    out.numeric(CheckKind.AT_LEAST, Attribute.ENROLLMENT, filters.min_enrollment, "demographics.minEnrollment")
    out.numeric(CheckKind.AT_MOST, Attribute.ENROLLMENT, filters.max_enrollment, "demographics.maxEnrollment")
    out.numeric(CheckKind.AT_LEAST, Attribute.INTERNATIONAL_PCT, filters.min_international_pct, "demographics.minInternationalPct")
    out.numeric(CheckKind.AT_MOST, Attribute.INTERNATIONAL_PCT, filters.max_international_pct, "demographics.maxInternationalPct")


def _compile_future(out: _CheckList, filters: FutureFilters):
    out.numeric(CheckKind.AT_LEAST, Attribute.VISA_MONTHS, filters.min_visa_months, "future.minVisaMonths")
    out.numeric(CheckKind.AT_LEAST, Attribute.INTERNSHIP_STRENGTH, filters.min_internship_strength, "future.minInternshipStrength")
    out.numeric(CheckKind.AT_LEAST, Attribute.ALUMNI_STRENGTH, filters.min_alumni_strength, "future.minAlumniStrength")
    out.numeric(CheckKind.AT_LEAST, Attribute.GRADUATION_RATE, filters.min_graduation_rate, "future.minGraduationRate")
    out.numeric(CheckKind.AT_LEAST, Attribute.EMPLOYMENT_RATE, filters.min_employment_rate, "future.minEmploymentRate")


CATEGORY_COMPILERS = [
    ("academics", _compile_academics),
    ("financials", _compile_financials),
    ("lifestyle", _compile_lifestyle),
    ("admissions", _compile_admissions),
    ("demographics", _compile_demographics),
    ("future", _compile_future),
]


# =============================================================================
# ENTRY POINT
# =============================================================================

def compile_criteria(criteria: CriteriaInput = None) -> Tuple[Check, ...]:
    """
    Build the checks for one matching request.

    Args:
        criteria: CriteriaDocument, raw criteria mapping, or None

    Returns:
        Immutable tuple of Check descriptors (empty for empty criteria)
    """
    document = coerce_criteria(criteria)
    out = _CheckList()

    out.text(Attribute.COUNTRY, document.country, "country")

    max_tuition = document.max_tuition if document.max_tuition is not None else document.max_budget
    out.numeric(CheckKind.AT_MOST, Attribute.TUITION, max_tuition, "maxTuition")
    out.numeric(CheckKind.AT_LEAST, Attribute.TUITION, document.min_tuition, "minTuition")

    out.all_of(Attribute.INTERESTS, document.interests, "interests")

    for name, compile_category in CATEGORY_COMPILERS:
        category = getattr(document, name)
        if category is None or not category.enabled:
            continue
        compile_category(out, category.filters)

    return tuple(out.checks)
