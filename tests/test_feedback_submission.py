import pytest
from sqlalchemy.exc import OperationalError

from feedback_portal.models import Feedback
from feedback_portal.services.errors import ValidationError
from feedback_portal.services.feedback import FeedbackSubmission, submit_feedback


def test_defaults_applied():
    s = FeedbackSubmission.from_payload({"officer_id": 1, "rating": 4})
    assert s.feedback_text == ""
    assert s.is_anonymous is True
    assert s.interaction_type is None


def test_numeric_strings_accepted():
    s = FeedbackSubmission.from_payload({"officer_id": "7", "rating": "5"})
    assert (s.officer_id, s.rating) == (7, 5)


@pytest.mark.parametrize("rating", [1, 2, 3, 4, 5])
def test_ratings_in_range_accepted(rating):
    assert FeedbackSubmission.from_payload({"officer_id": 1, "rating": rating}).rating == rating


@pytest.mark.parametrize("rating", [0, 6, -1, 4.5, True, "abc", None, ""])
def test_bad_ratings_rejected(rating):
    with pytest.raises(ValidationError):
        FeedbackSubmission.from_payload({"officer_id": 1, "rating": rating})


@pytest.mark.parametrize("payload", [
    None,
    [],
    "text",
    {"rating": 3},
    {"officer_id": None, "rating": 3},
    {"officer_id": 1, "rating": 3, "feedback_text": 12},
    {"officer_id": 1, "rating": 3, "is_anonymous": "yes"},
])
def test_malformed_payloads_rejected(payload):
    with pytest.raises(ValidationError):
        FeedbackSubmission.from_payload(payload)


def test_submit_persists_and_returns_record(session, make_officer):
    oid = make_officer()
    rec = submit_feedback(
        session,
        FeedbackSubmission(officer_id=oid, rating=4, feedback_text="Helpful", interaction_type="traffic stop"),
    )
    assert rec.id is not None
    assert rec.officer_id == oid
    assert rec.rating == 4
    assert rec.feedback_text == "Helpful"
    assert rec.interaction_type == "traffic stop"
    assert rec.is_anonymous is True
    assert rec.created_at is not None
    assert session.query(Feedback).count() == 1


def test_submit_unknown_officer_writes_nothing(session):
    with pytest.raises(ValidationError):
        submit_feedback(session, FeedbackSubmission(officer_id=424242, rating=3))
    assert session.query(Feedback).count() == 0


@pytest.mark.parametrize("officer_id", [0, -3, 2**31, 10**30])
def test_officer_id_outside_integer_column_rejected(officer_id):
    with pytest.raises(ValidationError):
        FeedbackSubmission.from_payload({"officer_id": officer_id, "rating": 3})


def test_submit_oversized_officer_id_writes_nothing(session):
    with pytest.raises(ValidationError):
        submit_feedback(session, FeedbackSubmission(officer_id=10**30, rating=3))
    assert session.query(Feedback).count() == 0


def test_failed_commit_rolls_back_and_session_recovers(session, make_officer, monkeypatch):
    oid = make_officer()

    def failing_commit():
        raise OperationalError("INSERT INTO feedback", {}, Exception("disk I/O error"))

    with monkeypatch.context() as m:
        # patch the request-scoped Session itself, not the proxy
        m.setattr(session(), "commit", failing_commit)
        with pytest.raises(OperationalError):
            submit_feedback(session, FeedbackSubmission(officer_id=oid, rating=2))

    assert session.query(Feedback).count() == 0

    rec = submit_feedback(session, FeedbackSubmission(officer_id=oid, rating=5))
    assert rec.rating == 5
    assert session.query(Feedback).count() == 1
