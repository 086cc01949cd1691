"""
Data Adapter for Matching Engine

Reads the university catalog and transforms each row into the plain
record shape the matching engine expects.

This is a pure READ + TRANSFORM layer:
- NO scoring logic
- NO ranking/filtering
- NO DB writes
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from matching.models import University

logger = logging.getLogger(__name__)


def university_to_record(university: University) -> Dict[str, Any]:
    """
    Flatten a University row into a record dict.

    Legacy keys live in the JSON `attributes` column. Typed columns are laid
    over them, except where a column is NULL, so a legacy value is still
    reachable through its own key.

    Args:
        university: ORM row

    Returns:
        Record dict keyed by column / attribute name
    """
    record: Dict[str, Any] = dict(university.attributes or {})

    for column in University.__table__.columns:
        if column.name == "attributes":
            continue
        value = getattr(university, column.name)
        if value is not None or column.name not in record:
            record[column.name] = value

    return record


def fetch_university_catalog(db: Session) -> List[Dict[str, Any]]:
    """
    Fetch every university as a record dict, ordered by name.

    No pagination and no filtering: the engine scores the whole catalog.
    """
    rows = db.execute(select(University).order_by(University.name.asc())).scalars().all()
    catalog = [university_to_record(row) for row in rows]
    logger.info(f"📦 University catalog loaded: {len(catalog)} records")
    return catalog
