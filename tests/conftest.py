import os
# Ensure the app factory picks the Testing config & SQLite memory DB
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("TEST_DATABASE_URL", "sqlite:///:memory:")

from datetime import datetime

import pytest
from feedback_portal import create_app
from feedback_portal.extensions import db
from feedback_portal.models import Feedback, Officer


@pytest.fixture(scope="session")
def app():
    app = create_app()
    app.config.update(
        TESTING=True,
        SQLALCHEMY_DATABASE_URI="sqlite:///:memory:",
        RATELIMIT_ENABLED=False,
    )
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def session(app):
    with app.app_context():
        yield db.session


@pytest.fixture(autouse=True)
def _db_clean(app):
    # Clean BEFORE each test
    with app.app_context():
        db.session.rollback()
        for tbl in reversed(db.metadata.sorted_tables):
            db.session.execute(tbl.delete())
        db.session.commit()
    yield
    # And AFTER each test (keeps state hermetic even if a test fails mid-transaction)
    with app.app_context():
        db.session.rollback()
        for tbl in reversed(db.metadata.sorted_tables):
            db.session.execute(tbl.delete())
        db.session.commit()


@pytest.fixture()
def make_officer(app):
    def _make(first="Jane", last="Doe", title="Officer"):
        with app.app_context():
            o = Officer(first_name=first, last_name=last, job_title=title)
            db.session.add(o)
            db.session.commit()
            return o.id
    return _make


@pytest.fixture()
def add_feedback(app):
    """Insert feedback directly (bypassing the API) with an explicit timestamp."""
    def _add(officer_id, rating, created_at=None, text=""):
        with app.app_context():
            fb = Feedback(
                officer_id=officer_id,
                rating=rating,
                feedback_text=text,
                created_at=created_at or datetime(2025, 1, 1, 12, 0, 0),
            )
            db.session.add(fb)
            db.session.commit()
            return fb.id
    return _add
