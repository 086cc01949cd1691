"""
Matching Engine Constants

Defines attribute alias tables, sentinels, plan keys and visibility limits
used by the matching engine. All values are deterministic with no AI/ML components.
"""

from enum import Enum
from typing import Dict, Tuple


# =============================================================================
# LOGICAL ATTRIBUTES
# =============================================================================

class Attribute(str, Enum):
    """Logical university attributes that criteria checks inspect."""
    COUNTRY = "country"
    TUITION = "tuition"
    INTERESTS = "interests"
    MIN_GPA = "min_gpa"
    DEGREE_LEVELS = "degree_levels"
    LANGUAGES = "languages"
    REQUIRED_TESTS = "required_tests"
    COST_OF_LIVING = "cost_of_living"
    SCHOLARSHIP_AVAILABILITY = "scholarship_availability"
    INTERNATIONAL_SCHOLARSHIPS = "international_scholarships"
    NEED_BLIND = "need_blind"
    CITY = "city"
    CLIMATE = "climate"
    CAMPUS_SETTING = "campus_setting"
    ACCEPTANCE_RATE = "acceptance_rate"
    SAT = "sat"
    ENROLLMENT = "enrollment"
    INTERNATIONAL_PCT = "international_pct"
    VISA_MONTHS = "visa_months"
    INTERNSHIP_STRENGTH = "internship_strength"
    ALUMNI_STRENGTH = "alumni_strength"
    GRADUATION_RATE = "graduation_rate"
    EMPLOYMENT_RATE = "employment_rate"


# Record keys per logical attribute, in preference order.
# Older imports stored the same data under different names.
ATTRIBUTE_ALIASES: Dict[Attribute, Tuple[str, ...]] = {
    Attribute.COUNTRY: ("country", "location_country"),
    Attribute.TUITION: ("avg_tuition_per_year", "tuition_international", "tuition"),
    Attribute.INTERESTS: ("interests", "focus_areas"),
    Attribute.MIN_GPA: ("min_gpa", "gpa_requirement"),
    Attribute.DEGREE_LEVELS: ("degree_levels", "degree_options"),
    Attribute.LANGUAGES: ("languages", "instruction_languages"),
    Attribute.REQUIRED_TESTS: ("required_tests", "testing_policy"),
    Attribute.COST_OF_LIVING: ("cost_of_living_index", "cost_of_living"),
    Attribute.SCHOLARSHIP_AVAILABILITY: ("scholarship_availability", "scholarships_available"),
    Attribute.INTERNATIONAL_SCHOLARSHIPS: ("scholarships_international", "international_scholarships_available"),
    Attribute.NEED_BLIND: ("need_blind_admissions", "need_blind"),
    Attribute.CITY: ("location_city", "city"),
    Attribute.CLIMATE: ("climate",),
    Attribute.CAMPUS_SETTING: ("campus_setting",),
    Attribute.ACCEPTANCE_RATE: ("acceptance_rate",),
    Attribute.SAT: ("sat_average", "sat_minimum"),
    Attribute.ENROLLMENT: ("enrollment", "student_population"),
    Attribute.INTERNATIONAL_PCT: ("international_student_percentage", "intl_student_percentage"),
    Attribute.VISA_MONTHS: ("post_grad_visa_strength", "post_study_work_visa_months"),
    Attribute.INTERNSHIP_STRENGTH: ("internship_strength",),
    Attribute.ALUMNI_STRENGTH: ("alumni_network_strength",),
    Attribute.GRADUATION_RATE: ("graduation_rate",),
    Attribute.EMPLOYMENT_RATE: ("employment_rate", "graduate_employment_rate"),
}


# =============================================================================
# CHECK KINDS & OUTCOMES
# =============================================================================

class CheckKind(str, Enum):
    """Comparison performed by a compiled check."""
    EQUALS = "equals"              # normalized string equality
    AT_MOST = "at_most"            # numeric <=
    AT_LEAST = "at_least"          # numeric >=
    INCLUDES = "includes"          # list contains the target
    INCLUDES_ALL = "includes_all"  # list contains every target
    IS_TRUE = "is_true"            # truthy flag
    TEST_POLICY = "test_policy"    # three-way required tests rule


class Outcome(str, Enum):
    """Result of evaluating one check against one university."""
    MATCH = "match"
    MISS = "miss"
    NOT_APPLICABLE = "not_applicable"


# =============================================================================
# SENTINELS
# =============================================================================

# "No preference" value sent by the criteria form selects
ANY_SENTINEL = "any"

NO_TEST_POLICY = "no-test"
REQUIRES_TEST_POLICY = "requires-test"

# =============================================================================
# SCORING
# =============================================================================

MATCH_PERCENTAGE_KEY = "matchPercentage"
VACUOUS_MATCH_PERCENTAGE = 100
DEFAULT_MIN_MATCH_PERCENTAGE = 0

# =============================================================================
# PLANS & VISIBILITY
# =============================================================================

ANONYMOUS_PLAN = "anonymous"
FREE_PLAN = "free"

# Anonymous callers see a teaser of the ranked list
ANONYMOUS_VISIBLE_LIMIT = 3
