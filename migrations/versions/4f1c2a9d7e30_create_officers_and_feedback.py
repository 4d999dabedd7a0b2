"""create officers and feedback tables

Revision ID: 4f1c2a9d7e30
Revises:
Create Date: 2026-10-19 12:00:00

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "4f1c2a9d7e30"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "officers",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("first_name", sa.Text(), nullable=False),
        sa.Column("last_name", sa.Text(), nullable=False),
        sa.Column("job_title", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("first_name <> ''", name="ck_officers_first_name_not_blank"),
        sa.CheckConstraint("last_name <> ''", name="ck_officers_last_name_not_blank"),
    )
    op.create_index("ix_officers_last_first", "officers", ["last_name", "first_name"], unique=False)

    op.create_table(
        "feedback",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("officer_id", sa.Integer(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("interaction_type", sa.Text(), nullable=True),
        sa.Column("feedback_text", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("is_anonymous", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["officer_id"], ["officers.id"]),
        sa.CheckConstraint("rating >= 1 AND rating <= 5", name="ck_feedback_rating_range"),
    )
    op.create_index("ix_feedback_officer_created_at", "feedback", ["officer_id", "created_at"], unique=False)


def downgrade():
    op.drop_index("ix_feedback_officer_created_at", table_name="feedback")
    op.drop_table("feedback")
    op.drop_index("ix_officers_last_first", table_name="officers")
    op.drop_table("officers")
