"""
Matching Logic Module

Provides the deterministic matching & ranking engine for university search.
The database-backed collaborators (adapter, plan_resolver, runner) are
imported from their modules directly.
"""

from .contracts import (
    CriteriaDocument,
    Check,
    MatchResponse,
)
from .constants import (
    Attribute,
    CheckKind,
    Outcome,
    ANONYMOUS_PLAN,
    FREE_PLAN,
    ANONYMOUS_VISIBLE_LIMIT,
)
from .compiler import compile_criteria
from .evaluator import evaluate_check, score_university, score_catalog
from .ranker import filter_by_threshold, rank_matches
from .access_gate import apply_access_gate
from .engine import MatchingEngine, get_matching_universities

__all__ = [
    # Main engine
    "MatchingEngine",
    "get_matching_universities",

    # Pipeline stages
    "compile_criteria",
    "evaluate_check",
    "score_university",
    "score_catalog",
    "filter_by_threshold",
    "rank_matches",
    "apply_access_gate",

    # Contracts
    "CriteriaDocument",
    "Check",
    "MatchResponse",

    # Enums & constants
    "Attribute",
    "CheckKind",
    "Outcome",
    "ANONYMOUS_PLAN",
    "FREE_PLAN",
    "ANONYMOUS_VISIBLE_LIMIT",
]
