"""
Access Gate

Decides how much of the ranked list a caller may see based on their plan.
The reported total always reflects the full ranked list.
"""

from typing import Any, Dict, List, Optional

from .constants import ANONYMOUS_PLAN, ANONYMOUS_VISIBLE_LIMIT, FREE_PLAN
from .contracts import MatchResponse


def apply_access_gate(
    ranked: List[Dict[str, Any]],
    plan_key: Optional[str],
    fallback_plan_key: str = FREE_PLAN
) -> MatchResponse:
    """
    Truncate matches for anonymous callers.

    Args:
        ranked: Threshold-filtered, sorted matches
        plan_key: Caller's plan key; None when it could not be resolved
        fallback_plan_key: Plan applied when `plan_key` is missing

    Returns:
        MatchResponse with the visible matches and the full total
    """
    effective_plan = plan_key or fallback_plan_key
    total_count = len(ranked)

    if effective_plan == ANONYMOUS_PLAN:
        visible = ranked[:ANONYMOUS_VISIBLE_LIMIT]
    else:
        visible = list(ranked)

    return MatchResponse(matches=visible, total_count=total_count)
