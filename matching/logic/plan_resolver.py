"""
Plan Resolver

Maps a caller to the plan key that controls result visibility.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from matching.models import Plan
from models.models_user import User

from .constants import ANONYMOUS_PLAN, FREE_PLAN

logger = logging.getLogger(__name__)


def resolve_plan_key(db: Session, user: Optional[User]) -> str:
    """
    Resolve the caller's plan key.

    - No user: anonymous
    - User without a plan, unknown plan, or plan without a key: free
    - Lookup failure: free (logged)

    Args:
        db: Database session
        user: Authenticated user, or None

    Returns:
        Plan key string
    """
    if user is None:
        return ANONYMOUS_PLAN

    if not user.plan_id:
        return FREE_PLAN

    try:
        key = db.execute(select(Plan.key).where(Plan.id == user.plan_id)).scalar_one_or_none()
    except SQLAlchemyError as e:
        logger.error(f"Unexpected error while resolving plan key for user {user.id}: {e}")
        db.rollback()
        return FREE_PLAN

    return key or FREE_PLAN
