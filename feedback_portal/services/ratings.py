from __future__ import annotations

import logging
from typing import Iterable, List

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from feedback_portal.models import MAX_ID, Feedback, Officer
from .errors import NotFoundError
from .records import AdminSnapshot, FeedbackRecord, OfficerHistory, OfficerRating

logger = logging.getLogger(__name__)


def mean_rating(ratings: Iterable[int]) -> float:
    """Arithmetic mean as float; 0.0 for no ratings (never a real average)."""
    total = 0
    count = 0
    for r in ratings:
        total += int(r)
        count += 1
    return total / count if count else 0.0


def list_officers_with_ratings(session: Session) -> List[OfficerRating]:
    """
    Every officer with its live average rating and feedback count:

        SELECT o.*, COALESCE(AVG(f.rating), 0), COUNT(f.id)
        FROM officers o LEFT JOIN feedback f ON f.officer_id = o.id
        GROUP BY o.id ORDER BY o.last_name, o.first_name

    The outer join keeps officers with no feedback (avg 0, count 0).
    """
    rows = (
        session.query(
            Officer.id,
            Officer.first_name,
            Officer.last_name,
            Officer.job_title,
            func.coalesce(func.avg(Feedback.rating), 0).label("avg_rating"),
            func.count(Feedback.id).label("feedback_count"),
        )
        .outerjoin(Feedback, Feedback.officer_id == Officer.id)
        .group_by(Officer.id, Officer.first_name, Officer.last_name, Officer.job_title)
        .order_by(Officer.last_name.asc(), Officer.first_name.asc(), Officer.id.asc())
        .all()
    )
    # Postgres AVG() hands back Decimal; SQLite a float
    return [
        OfficerRating(
            id=oid,
            first_name=first,
            last_name=last,
            job_title=title or "",
            avg_rating=float(avg or 0),
            feedback_count=int(count or 0),
        )
        for (oid, first, last, title, avg, count) in rows
    ]


def get_officer_feedback(session: Session, officer_id: int) -> List[FeedbackRecord]:
    """All feedback for one officer, newest first. Unknown officer -> NotFoundError."""
    if not 1 <= officer_id <= MAX_ID or session.get(Officer, officer_id) is None:
        raise NotFoundError(f"Officer {officer_id} not found")

    rows = (
        session.query(Feedback)
        .filter(Feedback.officer_id == officer_id)
        .order_by(Feedback.created_at.desc(), Feedback.id.desc())
        .all()
    )
    return [FeedbackRecord.from_model(fb) for fb in rows]


def get_admin_snapshot(session: Session) -> AdminSnapshot:
    """
    Global stats plus every officer with its complete feedback history.

    Officers and their feedback collections load in one transaction and the
    global figures are summed from those collections, so total_feedback
    always equals the sum of the officers' feedback_count.
    """
    officers = (
        session.query(Officer)
        .options(selectinload(Officer.feedback))
        .order_by(Officer.last_name.asc(), Officer.first_name.asc(), Officer.id.asc())
        .populate_existing()
        .all()
    )

    histories: List[OfficerHistory] = []
    counted: List[int] = []
    for o in officers:
        records = [FeedbackRecord.from_model(fb) for fb in o.feedback]
        ratings = [r.rating for r in records]
        counted.extend(ratings)
        histories.append(
            OfficerHistory(
                rating=OfficerRating(
                    id=o.id,
                    first_name=o.first_name,
                    last_name=o.last_name,
                    job_title=o.job_title or "",
                    avg_rating=mean_rating(ratings),
                    feedback_count=len(records),
                ),
                feedback=records,
            )
        )

    logger.debug("admin_snapshot officers=%s feedback=%s", len(histories), len(counted))
    return AdminSnapshot(
        total_feedback=len(counted),
        overall_average_rating=mean_rating(counted),
        officers=histories,
    )
