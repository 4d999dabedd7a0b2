from __future__ import annotations

from sqlalchemy import text, true

from feedback_portal.extensions import db

RATING_MIN = 1
RATING_MAX = 5


class Feedback(db.Model):
    """One citizen rating of one officer. Insert-only."""
    __tablename__ = "feedback"

    id = db.Column(db.Integer, primary_key=True)
    officer_id = db.Column(db.Integer, db.ForeignKey("officers.id"), nullable=False)
    rating = db.Column(db.Integer, nullable=False)  # 1-5 stars
    interaction_type = db.Column(db.Text, nullable=True)
    feedback_text = db.Column(db.Text, nullable=False, default="", server_default=text("''"))
    # Always true today; kept for identified feedback later
    is_anonymous = db.Column(db.Boolean, nullable=False, default=True, server_default=true())
    created_at = db.Column(db.DateTime(timezone=True), server_default=db.func.now(), nullable=False)

    __table_args__ = (
        db.CheckConstraint(
            f"rating >= {RATING_MIN} AND rating <= {RATING_MAX}",
            name="ck_feedback_rating_range",
        ),
        db.Index("ix_feedback_officer_created_at", "officer_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Feedback id={self.id} officer_id={self.officer_id} rating={self.rating}>"
