"""
Engine Runner

Orchestrates the matching pipeline for one request:
1. Fetches the university catalog via adapter
2. Resolves the caller's plan key
3. Runs the matching engine
4. Returns the gated MatchResponse

This is a pure orchestration layer - NO scoring, NO business logic.
"""

import logging
import time
from typing import Optional

from sqlalchemy.orm import Session

from models.models_user import User

from .adapter import fetch_university_catalog
from .compiler import CriteriaInput
from .contracts import MatchResponse
from .engine import MatchingEngine
from .plan_resolver import resolve_plan_key

logger = logging.getLogger(__name__)

matching_engine = MatchingEngine()


def run_matching(
    db: Session,
    criteria: CriteriaInput,
    user: Optional[User] = None
) -> MatchResponse:
    """
    Main entry point: run the full matching pipeline.

    Args:
        db: Database session
        criteria: Criteria document from the request
        user: Authenticated caller, or None for anonymous

    Returns:
        MatchResponse with visible matches and total count
    """
    caller = str(user.id) if user is not None else "anonymous"
    logger.info(f"🚀 Starting matching pipeline for caller: {caller}")

    catalog = fetch_university_catalog(db)
    plan_key = resolve_plan_key(db, user)
    logger.info(f"🎫 Plan key: {plan_key}")

    start_time = time.perf_counter()
    output = matching_engine.match(criteria, catalog, plan_key)
    processing_time = (time.perf_counter() - start_time) * 1000

    logger.info(
        f"✨ Matching complete ({processing_time:.2f}ms): "
        f"{len(output.matches)} visible of {output.total_count} matches"
    )
    return output
