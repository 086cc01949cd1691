"""
Matching API Routes

Exposes the matching engine via REST API.
Single endpoint: POST /matching
"""

import logging
from typing import Optional

import jwt
from fastapi import APIRouter, Body, Depends, Header
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db import get_db
from models.models_user import User
from utils.auth_utils import bearer_token, decode_token
from utils.crud_user import get_user_by_id
from .logic.contracts import CriteriaDocument, MatchResponse
from .logic.runner import matching_engine, run_matching

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/matching", tags=["matching"])


def _resolve_caller(db: Session, authorization: Optional[str]) -> Optional[User]:
    """
    Best-effort authentication.

    A missing, invalid or expired token, a token for an unknown user, or a failed user lookup
    yields an anonymous caller instead of an error.
    """
    token = bearer_token(authorization)
    if not token:
        return None
    try:
        data = decode_token(token)
    except jwt.PyJWTError as e:
        logger.debug(f"Ignoring invalid bearer token: {e}")
        return None

    user_id = data.get("sub") or data.get("id") or data.get("userId")
    if not user_id:
        return None
    try:
        return get_user_by_id(db, user_id)
    except SQLAlchemyError as e:
        logger.error(f"Unexpected error while loading caller {user_id}: {e}")
        db.rollback()
        return None


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("", summary="Match universities against criteria", response_model=MatchResponse)
@router.post("/", summary="Match universities against criteria", response_model=MatchResponse, include_in_schema=False)
def match_universities(
    criteria: Optional[CriteriaDocument] = Body(default=None),
    authorization: Optional[str] = Header(default=None),
    db: Session = Depends(get_db)
):
    """
    Score and rank every university against the caller's criteria.

    **Request Body:** criteria document (every field optional)
    - `country`, `minTuition`, `maxTuition`, `minMatchPercentage`, `interests`
    - `academics`, `financials`, `lifestyle`, `admissions`, `demographics`, `future`:
      `{"enabled": bool, "filters": {...}}`

    **Response:**
    - `matches`: universities with `matchPercentage`, best first
      (anonymous callers see the first 3)
    - `totalCount`: number of universities meeting `minMatchPercentage`
    """
    try:
        user = _resolve_caller(db, authorization)
        output = run_matching(db, criteria, user)
    except Exception:
        logger.exception("Error in matching route")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to get matching universities."}
        )

    return output


# =============================================================================
# HEALTH CHECK
# =============================================================================

@router.get("/health", summary="Matching engine health check")
def health_check():
    """Check if matching engine is operational."""
    return {"status": "ok", "engine": "matching", "version": matching_engine.version}
