from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from feedback_portal.models import MAX_ID, Feedback, Officer
from feedback_portal.models.feedback import RATING_MAX, RATING_MIN
from feedback_portal.utils.validators import clean_str
from .errors import ValidationError
from .records import FeedbackRecord

logger = logging.getLogger(__name__)


def _to_int(value: Any, field_name: str) -> int:
    """Strict int coercion: ints, integral floats, digit strings. Never bools."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} is required.")
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ValidationError(f"{field_name} must be an integer.")
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"{field_name} must be an integer.")


@dataclass(frozen=True)
class FeedbackSubmission:
    officer_id: int
    rating: int
    feedback_text: str = ""
    is_anonymous: bool = True
    interaction_type: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "FeedbackSubmission":
        """Validate a decoded JSON body. Raises ValidationError on the first problem."""
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object.")

        officer_id = _to_int(payload.get("officer_id"), "officer_id")
        if not 1 <= officer_id <= MAX_ID:
            raise ValidationError(f"officer_id must be between 1 and {MAX_ID}.")

        rating = _to_int(payload.get("rating"), "rating")
        if not RATING_MIN <= rating <= RATING_MAX:
            raise ValidationError(f"rating must be between {RATING_MIN} and {RATING_MAX}.")

        text = payload.get("feedback_text")
        if text is None:
            text = ""
        elif not isinstance(text, str):
            raise ValidationError("feedback_text must be a string.")

        is_anonymous = payload.get("is_anonymous")
        if is_anonymous is None:
            is_anonymous = True
        elif not isinstance(is_anonymous, bool):
            raise ValidationError("is_anonymous must be true or false.")

        interaction_type = payload.get("interaction_type")
        if interaction_type is not None and not isinstance(interaction_type, str):
            raise ValidationError("interaction_type must be a string.")

        return cls(
            officer_id=officer_id,
            rating=rating,
            feedback_text=text.strip(),
            is_anonymous=is_anonymous,
            interaction_type=clean_str(interaction_type, max_len=100),
        )


def submit_feedback(session: Session, submission: FeedbackSubmission) -> FeedbackRecord:
    """
    Persist one submission and return the stored row.

    The officer must exist; nothing is written otherwise. Storage errors
    roll the session back and propagate to the caller.
    """
    oid = submission.officer_id
    if not 1 <= oid <= MAX_ID or session.get(Officer, oid) is None:
        raise ValidationError(f"Officer {oid} does not exist.")

    fb = Feedback(
        officer_id=submission.officer_id,
        rating=submission.rating,
        feedback_text=submission.feedback_text,
        is_anonymous=submission.is_anonymous,
        interaction_type=submission.interaction_type,
    )
    try:
        session.add(fb)
        session.commit()
        # created_at comes from the server default
        session.refresh(fb)
    except SQLAlchemyError:
        session.rollback()
        raise

    logger.info("feedback_created id=%s officer_id=%s rating=%s", fb.id, fb.officer_id, fb.rating)
    return FeedbackRecord.from_model(fb)
