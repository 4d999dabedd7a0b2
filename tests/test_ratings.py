from datetime import datetime

import pytest

from feedback_portal.services.errors import NotFoundError
from feedback_portal.services.ratings import (
    get_admin_snapshot,
    get_officer_feedback,
    list_officers_with_ratings,
    mean_rating,
)


def test_mean_rating_empty_is_zero():
    assert mean_rating([]) == 0.0
    assert mean_rating([4, 2]) == 3.0


def test_officer_without_feedback_has_zero_avg_and_count(session, make_officer):
    make_officer("Jane", "Doe")
    rows = list_officers_with_ratings(session)
    assert len(rows) == 1
    assert rows[0].avg_rating == 0
    assert rows[0].feedback_count == 0


def test_avg_is_true_mean_not_rounded(session, make_officer, add_feedback):
    oid = make_officer()
    for r in (5, 4, 4):
        add_feedback(oid, r)
    (row,) = list_officers_with_ratings(session)
    assert row.feedback_count == 3
    assert row.avg_rating == pytest.approx(13 / 3)
    assert isinstance(row.avg_rating, float)


def test_list_sorted_by_last_then_first(session, make_officer):
    make_officer("Zed", "Adams")
    make_officer("Amy", "Brown")
    make_officer("Bob", "Adams")
    names = [(r.last_name, r.first_name) for r in list_officers_with_ratings(session)]
    assert names == [("Adams", "Bob"), ("Adams", "Zed"), ("Brown", "Amy")]


def test_officer_feedback_newest_first(session, make_officer, add_feedback):
    oid = make_officer()
    add_feedback(oid, 3, created_at=datetime(2025, 1, 1, 9, 0))
    add_feedback(oid, 5, created_at=datetime(2025, 3, 1, 9, 0))
    add_feedback(oid, 1, created_at=datetime(2025, 2, 1, 9, 0))

    rows = get_officer_feedback(session, oid)
    assert [r.rating for r in rows] == [5, 1, 3]
    stamps = [r.created_at for r in rows]
    assert all(a >= b for a, b in zip(stamps, stamps[1:]))


def test_officer_feedback_empty_list_for_known_officer(session, make_officer):
    oid = make_officer()
    assert get_officer_feedback(session, oid) == []


def test_officer_feedback_unknown_officer_raises(session):
    with pytest.raises(NotFoundError):
        get_officer_feedback(session, 9999)


def test_admin_snapshot_totals_match_officers(session, make_officer, add_feedback):
    a = make_officer("Jane", "Doe")
    b = make_officer("John", "Roe")
    make_officer("Nobody", "Zulu")
    for r in (5, 3):
        add_feedback(a, r)
    add_feedback(b, 2)

    snap = get_admin_snapshot(session)
    assert snap.total_feedback == 3
    assert snap.total_feedback == sum(o.rating.feedback_count for o in snap.officers)
    assert snap.overall_average_rating == pytest.approx(10 / 3)

    by_last = {o.rating.last_name: o for o in snap.officers}
    assert by_last["Doe"].rating.avg_rating == 4.0
    assert len(by_last["Doe"].feedback) == 2
    assert by_last["Zulu"].rating.avg_rating == 0.0
    assert by_last["Zulu"].feedback == []


def test_admin_snapshot_empty_database(session):
    snap = get_admin_snapshot(session)
    assert snap.total_feedback == 0
    assert snap.overall_average_rating == 0.0
    assert snap.officers == []


def test_admin_snapshot_feedback_newest_first(session, make_officer, add_feedback):
    oid = make_officer()
    first = add_feedback(oid, 3, created_at=datetime(2025, 1, 1, 9, 0))
    latest = add_feedback(oid, 5, created_at=datetime(2025, 3, 1, 9, 0))
    middle = add_feedback(oid, 1, created_at=datetime(2025, 2, 1, 9, 0))
    tie = add_feedback(oid, 4, created_at=datetime(2025, 3, 1, 9, 0))

    (history,) = get_admin_snapshot(session).officers
    assert [r.id for r in history.feedback] == [tie, latest, middle, first]
    assert [r.id for r in history.feedback] == [r.id for r in get_officer_feedback(session, oid)]


def test_admin_snapshot_sees_feedback_added_after_officer_loaded(session, make_officer, add_feedback):
    oid = make_officer()
    assert get_admin_snapshot(session).total_feedback == 0
    add_feedback(oid, 2)
    snap = get_admin_snapshot(session)
    assert snap.total_feedback == 1
    assert snap.officers[0].rating.feedback_count == 1


@pytest.mark.parametrize("officer_id", [0, 2**31, 10**30])
def test_officer_feedback_out_of_range_id_is_not_found(session, officer_id):
    with pytest.raises(NotFoundError):
        get_officer_feedback(session, officer_id)
