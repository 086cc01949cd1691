"""
Matching Engine

Main orchestrator that combines all matching components into a single pipeline.
This is the primary entry point for scoring a university catalog against criteria.
"""

import logging
from typing import Any, Iterable, Mapping, Optional

from .access_gate import apply_access_gate
from .compiler import CriteriaInput, coerce_criteria, compile_criteria
from .constants import FREE_PLAN
from .contracts import MatchResponse
from .evaluator import score_catalog
from .ranker import filter_by_threshold, rank_matches, resolve_min_match_percentage

logger = logging.getLogger(__name__)


class MatchingEngine:
    """
    Pure, stateless matching pipeline.

    Pipeline flow:
    1. Compilation - Turn the criteria document into checks (once per request)
    2. Scoring - Match percentage per university
    3. Threshold - Drop universities below minMatchPercentage
    4. Ranking - Sort by percentage, then tuition
    5. Access Gate - Truncate for the caller's plan, keep the total

    The engine holds no per-request state and may be shared between
    concurrent requests.
    """

    def __init__(self, fallback_plan_key: str = FREE_PLAN):
        """
        Initialize the matching engine.

        Args:
            fallback_plan_key: Plan applied when the caller's plan key is missing
        """
        self.fallback_plan_key = fallback_plan_key
        self.version = "1.0.0"

    def match(
        self,
        criteria: CriteriaInput,
        catalog: Iterable[Mapping[str, Any]],
        plan_key: Optional[str]
    ) -> MatchResponse:
        """
        Score, filter, rank and gate a university catalog.

        Args:
            criteria: Criteria document (model, raw mapping or None)
            catalog: Every university record, already fetched
            plan_key: Caller's plan key (anonymous, free or a paid tier)

        Returns:
            MatchResponse with visible matches and the filtered total
        """
        document = coerce_criteria(criteria)
        checks = compile_criteria(document)
        logger.debug(f"Compiled {len(checks)} criteria checks: {[c.source for c in checks]}")

        scored = score_catalog(checks, catalog)
        minimum = resolve_min_match_percentage(document)
        ranked = rank_matches(filter_by_threshold(scored, minimum))
        logger.debug(f"{len(ranked)}/{len(scored)} universities at or above {minimum}%")

        return apply_access_gate(ranked, plan_key, fallback_plan_key=self.fallback_plan_key)


# Convenience function for simple usage
def get_matching_universities(
    criteria: CriteriaInput,
    catalog: Iterable[Mapping[str, Any]],
    plan_key: Optional[str] = FREE_PLAN
) -> MatchResponse:
    """
    Convenience function to run the matching pipeline.

    Args:
        criteria: Criteria document
        catalog: University records
        plan_key: Caller's plan key

    Returns:
        MatchResponse
    """
    engine = MatchingEngine()
    return engine.match(criteria, catalog, plan_key)
