"""
Data Contracts for the Matching Engine

Defines Pydantic models for CriteriaDocument (input) and MatchResponse (output),
plus the compiled Check descriptor passed between compiler and evaluator.
These contracts are the API boundary for the matching engine.
"""

import math
from decimal import Decimal
from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, BeforeValidator, Field

from .constants import Attribute, CheckKind


# =============================================================================
# LENIENT FIELD TYPES
# =============================================================================
# Criteria come straight from the search form. A value of the wrong type is
# treated as "no opinion" instead of rejecting the whole document.

def _finite_number_or_none(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def _string_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _string_list_or_none(value: Any) -> Optional[List[str]]:
    if not isinstance(value, (list, tuple)):
        return None
    return [item for item in value if isinstance(item, str)]


def _bool_or_none(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def _mapping_or_none(value: Any) -> Optional[Any]:
    if isinstance(value, (dict, BaseModel)):
        return value
    return None


def _mapping_or_empty(value: Any) -> Any:
    if isinstance(value, (dict, BaseModel)):
        return value
    return {}


FiniteNumber = Annotated[Optional[float], BeforeValidator(_finite_number_or_none)]
Text = Annotated[Optional[str], BeforeValidator(_string_or_none)]
TextList = Annotated[Optional[List[str]], BeforeValidator(_string_list_or_none)]
Flag = Annotated[Optional[bool], BeforeValidator(_bool_or_none)]


class CriteriaModel(BaseModel):
    """Base for criteria models: camelCase on the wire, snake_case in Python."""

    class Config:
        populate_by_name = True
        extra = "ignore"


# =============================================================================
# CATEGORY FILTERS
# =============================================================================

class AcademicsFilters(CriteriaModel):
    min_gpa: FiniteNumber = Field(default=None, alias="minGpa")
    degree_level: Text = Field(default=None, alias="degreeLevel")
    languages: TextList = None
    test_policy: Text = Field(default=None, alias="testPolicy")


class FinancialsFilters(CriteriaModel):
    max_budget: FiniteNumber = Field(default=None, alias="maxBudget")
    max_cost_of_living: FiniteNumber = Field(default=None, alias="maxCostOfLiving")
    min_scholarship: FiniteNumber = Field(default=None, alias="minScholarship")
    scholarships_international: Flag = Field(default=None, alias="scholarshipsInternational")
    need_blind: Flag = Field(default=None, alias="needBlind")


class LifestyleFilters(CriteriaModel):
    country: Text = None
    city: Text = None
    climate: Text = None
    campus_setting: Text = Field(default=None, alias="campusSetting")


class AdmissionsFilters(CriteriaModel):
    max_acceptance_rate: FiniteNumber = Field(default=None, alias="maxAcceptanceRate")
    min_sat: FiniteNumber = Field(default=None, alias="minSat")


class DemographicsFilters(CriteriaModel):
    min_enrollment: FiniteNumber = Field(default=None, alias="minEnrollment")
    max_enrollment: FiniteNumber = Field(default=None, alias="maxEnrollment")
    min_international_pct: FiniteNumber = Field(default=None, alias="minInternationalPct")
    max_international_pct: FiniteNumber = Field(default=None, alias="maxInternationalPct")


class FutureFilters(CriteriaModel):
    min_visa_months: FiniteNumber = Field(default=None, alias="minVisaMonths")
    min_internship_strength: FiniteNumber = Field(default=None, alias="minInternshipStrength")
    min_alumni_strength: FiniteNumber = Field(default=None, alias="minAlumniStrength")
    min_graduation_rate: FiniteNumber = Field(default=None, alias="minGraduationRate")
    min_employment_rate: FiniteNumber = Field(default=None, alias="minEmploymentRate")


# =============================================================================
# CATEGORIES
# =============================================================================
# Filters of a category are only considered when the category is enabled.

class AcademicsCriteria(CriteriaModel):
    enabled: Flag = None
    filters: Annotated[AcademicsFilters, BeforeValidator(_mapping_or_empty)] = Field(default_factory=AcademicsFilters)


class FinancialsCriteria(CriteriaModel):
    enabled: Flag = None
    filters: Annotated[FinancialsFilters, BeforeValidator(_mapping_or_empty)] = Field(default_factory=FinancialsFilters)


class LifestyleCriteria(CriteriaModel):
    enabled: Flag = None
    filters: Annotated[LifestyleFilters, BeforeValidator(_mapping_or_empty)] = Field(default_factory=LifestyleFilters)


class AdmissionsCriteria(CriteriaModel):
    enabled: Flag = None
    filters: Annotated[AdmissionsFilters, BeforeValidator(_mapping_or_empty)] = Field(default_factory=AdmissionsFilters)


class DemographicsCriteria(CriteriaModel):
    enabled: Flag = None
    filters: Annotated[DemographicsFilters, BeforeValidator(_mapping_or_empty)] = Field(default_factory=DemographicsFilters)


class FutureCriteria(CriteriaModel):
    enabled: Flag = None
    filters: Annotated[FutureFilters, BeforeValidator(_mapping_or_empty)] = Field(default_factory=FutureFilters)


# =============================================================================
# INPUT CONTRACT
# =============================================================================

class CriteriaDocument(CriteriaModel):
    """
    Input contract for the matching engine.
    Every field is optional; an absent field never penalizes a university.
    """
    country: Text = None
    min_tuition: FiniteNumber = Field(default=None, alias="minTuition")
    max_tuition: FiniteNumber = Field(default=None, alias="maxTuition")
    max_budget: FiniteNumber = Field(default=None, alias="maxBudget")  # legacy name for maxTuition
    min_match_percentage: FiniteNumber = Field(default=None, alias="minMatchPercentage")
    interests: TextList = None

    academics: Annotated[Optional[AcademicsCriteria], BeforeValidator(_mapping_or_none)] = None
    financials: Annotated[Optional[FinancialsCriteria], BeforeValidator(_mapping_or_none)] = None
    lifestyle: Annotated[Optional[LifestyleCriteria], BeforeValidator(_mapping_or_none)] = None
    admissions: Annotated[Optional[AdmissionsCriteria], BeforeValidator(_mapping_or_none)] = None
    demographics: Annotated[Optional[DemographicsCriteria], BeforeValidator(_mapping_or_none)] = None
    future: Annotated[Optional[FutureCriteria], BeforeValidator(_mapping_or_none)] = None


# =============================================================================
# INTERMEDIATE DATA STRUCTURES
# =============================================================================

class Check(BaseModel):
    """
    A compiled criteria check.
    Describes the comparison instead of closing over it, so compiled
    check lists can be inspected and compared in tests.
    """
    kind: CheckKind
    attribute: Attribute
    target: Any = None
    source: str = ""  # criteria field that produced the check, e.g. "academics.minGpa"

    class Config:
        frozen = True


# =============================================================================
# OUTPUT CONTRACT
# =============================================================================

class MatchResponse(BaseModel):
    """
    Output contract for the matching engine.
    `total_count` is the number of universities meeting the threshold,
    even when `matches` has been truncated for the caller's plan.
    """
    matches: List[Dict[str, Any]] = Field(default_factory=list)
    total_count: int = Field(default=0, ge=0, alias="totalCount")

    class Config:
        populate_by_name = True
