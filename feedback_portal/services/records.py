"""
Typed read models handed from the services to the blueprints.

The blueprints serialise these with ``to_dict()``; nothing above the
service layer touches ORM rows directly.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class FeedbackRecord:
    id: int
    officer_id: int
    rating: int
    feedback_text: str
    interaction_type: Optional[str]
    is_anonymous: bool
    created_at: Optional[datetime]

    @classmethod
    def from_model(cls, fb) -> "FeedbackRecord":
        return cls(
            id=fb.id,
            officer_id=fb.officer_id,
            rating=int(fb.rating),
            feedback_text=fb.feedback_text or "",
            interaction_type=fb.interaction_type,
            is_anonymous=bool(fb.is_anonymous),
            created_at=fb.created_at,
        )

    def to_dict(self) -> dict:
        return dict(
            id=self.id,
            officer_id=self.officer_id,
            rating=self.rating,
            feedback_text=self.feedback_text,
            interaction_type=self.interaction_type,
            is_anonymous=self.is_anonymous,
            created_at=_iso(self.created_at),
        )


@dataclass(frozen=True)
class OfficerRating:
    id: int
    first_name: str
    last_name: str
    job_title: str
    avg_rating: float
    feedback_count: int

    def to_dict(self) -> dict:
        return dict(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            job_title=self.job_title,
            avg_rating=self.avg_rating,
            feedback_count=self.feedback_count,
        )


@dataclass(frozen=True)
class OfficerHistory:
    rating: OfficerRating
    feedback: List[FeedbackRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        d = self.rating.to_dict()
        d["feedback"] = [f.to_dict() for f in self.feedback]
        return d


@dataclass(frozen=True)
class AdminSnapshot:
    total_feedback: int
    overall_average_rating: float
    officers: List[OfficerHistory]

    def to_dict(self) -> dict:
        return dict(
            total_feedback=self.total_feedback,
            overall_average_rating=self.overall_average_rating,
            officers=[o.to_dict() for o in self.officers],
        )
