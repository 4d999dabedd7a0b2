"""
Officer roster seeding.

A roster import is a destructive full replace: every officer row is
deleted and the sheet is inserted fresh, so officer ids change on every
run. Feedback references officers by id, which makes this a pre-launch /
maintenance tool. With feedback present the replace refuses to run unless
``force`` is set, in which case that feedback is deleted too. Never run it
alongside live traffic or another import.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
import pandas as pd
from sqlalchemy import func, insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from feedback_portal.models import Feedback, Officer
from feedback_portal.utils.validators import clean_str
from .errors import ServiceError

logger = logging.getLogger("importer.officers")

# Workbook headers -> officers columns
COLUMN_MAP = {
    "First Name": "first_name",
    "Last Name": "last_name",
    "Job Title": "job_title",
}


@dataclass(frozen=True)
class RosterImportResult:
    found: int
    imported: int
    skipped: int
    feedback_deleted: int = 0
    dry_run: bool = False


def read_roster(path: str | Path, sheet_name: Optional[str] = None) -> List[Dict[str, Any]]:
    """Load roster rows (header -> cell) from .xlsx/.xls (first sheet by default) or .csv."""
    path = Path(path)
    if not path.exists():
        raise ServiceError(f"Roster file not found: {path}")

    if path.suffix.lower() == ".csv":
        df = pd.read_csv(path, dtype=str, keep_default_na=True)
    else:
        df = pd.read_excel(path, sheet_name=sheet_name if sheet_name else 0, dtype=str)

    # Normalize headers (trim)
    df.columns = [str(c).strip() for c in df.columns]
    df = df.astype(object).replace({np.nan: None})
    rows = df.to_dict(orient="records")
    logger.info("roster_read path=%s rows=%s columns=%s", path, len(rows), list(df.columns))
    return rows


def _prepare(rows: Iterable[Dict[str, Any]]) -> tuple[List[Dict[str, str]], int, int]:
    params: List[Dict[str, str]] = []
    found = 0
    skipped = 0
    for row in rows:
        found += 1
        first = clean_str(row.get("First Name"))
        last = clean_str(row.get("Last Name"))
        if not first or not last:
            skipped += 1
            logger.debug("roster_row_skipped index=%s reason=missing_name", found - 1)
            continue
        params.append(
            {
                "first_name": first,
                "last_name": last,
                "job_title": clean_str(row.get("Job Title")) or "",
            }
        )
    return params, found, skipped


def replace_roster(
    session: Session,
    rows: Iterable[Dict[str, Any]],
    *,
    force: bool = False,
    dry_run: bool = False,
) -> RosterImportResult:
    """
    Delete every officer and insert the usable rows, in one transaction.

    Rows missing a first or last name are skipped and counted. Any storage
    failure rolls the whole replace back.
    """
    params, found, skipped = _prepare(rows)

    if dry_run:
        logger.info("dry_run=true found=%s importable=%s skipped=%s", found, len(params), skipped)
        return RosterImportResult(found=found, imported=len(params), skipped=skipped, dry_run=True)

    try:
        existing_feedback = session.query(func.count(Feedback.id)).scalar() or 0
        if existing_feedback and not force:
            raise ServiceError(
                f"{existing_feedback} feedback rows reference the current roster; "
                "replacing it would orphan them. Re-run with force to delete that feedback."
            )

        feedback_deleted = 0
        if existing_feedback:
            feedback_deleted = session.query(Feedback).delete(synchronize_session=False)
            logger.warning("roster_replace feedback_deleted=%s", feedback_deleted)

        officers_deleted = session.query(Officer).delete(synchronize_session=False)
        if params:
            session.execute(insert(Officer), params)
        session.commit()
    except (ServiceError, SQLAlchemyError):
        session.rollback()
        raise

    logger.info(
        "roster_replace_complete found=%s imported=%s skipped=%s officers_deleted=%s",
        found, len(params), skipped, officers_deleted,
    )
    return RosterImportResult(
        found=found,
        imported=len(params),
        skipped=skipped,
        feedback_deleted=feedback_deleted,
    )
