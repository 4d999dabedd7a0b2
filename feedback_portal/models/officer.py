from __future__ import annotations

from sqlalchemy import Index, text

from feedback_portal.extensions import db

# Largest value a Postgres INTEGER id column holds
MAX_ID = 2**31 - 1


class Officer(db.Model):
    """
    Roster entry. Rows are only ever written by a full roster replace
    (see services/roster.py); nothing updates an officer in place.
    """
    __tablename__ = "officers"

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.Text, nullable=False)
    last_name = db.Column(db.Text, nullable=False)
    job_title = db.Column(db.Text, nullable=False, default="", server_default=text("''"))

    # Newest first, same order as the per-officer history endpoint
    feedback = db.relationship(
        "Feedback",
        order_by="[Feedback.created_at.desc(), Feedback.id.desc()]",
        lazy="select",
    )

    __table_args__ = (
        db.CheckConstraint("first_name <> ''", name="ck_officers_first_name_not_blank"),
        db.CheckConstraint("last_name <> ''", name="ck_officers_last_name_not_blank"),
        Index("ix_officers_last_first", "last_name", "first_name"),
    )

    def __repr__(self) -> str:
        return f"<Officer id={self.id} name={self.first_name!r} {self.last_name!r}>"

    def to_dict(self) -> dict:
        return dict(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            job_title=self.job_title or "",
        )
