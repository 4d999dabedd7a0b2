from flask import jsonify, current_app

from feedback_portal.extensions import db
from feedback_portal.services.errors import NotFoundError
from feedback_portal.services.ratings import get_officer_feedback, list_officers_with_ratings
from . import bp


@bp.get("/officers-with-ratings")
def officers_with_ratings():
    """Every officer with avg_rating / feedback_count, sorted by last then first name."""
    try:
        rows = list_officers_with_ratings(db.session)
        return jsonify([r.to_dict() for r in rows]), 200
    except Exception:
        current_app.logger.exception("GET /api/officers-with-ratings failed")
        return jsonify({"error": "server_error"}), 500


@bp.get("/officers")
def officers():
    """Older client shape: same data, rating under `average_rating`."""
    try:
        rows = list_officers_with_ratings(db.session)
        return jsonify([
            {
                "id": r.id,
                "first_name": r.first_name,
                "last_name": r.last_name,
                "job_title": r.job_title,
                "feedback_count": r.feedback_count,
                "average_rating": r.avg_rating,
            }
            for r in rows
        ]), 200
    except Exception:
        current_app.logger.exception("GET /api/officers failed")
        return jsonify({"error": "server_error"}), 500


@bp.get("/officers/<int:officer_id>/feedback")
def officer_feedback(officer_id: int):
    """Feedback for one officer, newest first. 404 if the officer id is unknown."""
    try:
        rows = get_officer_feedback(db.session, officer_id)
        return jsonify([r.to_dict() for r in rows]), 200
    except NotFoundError:
        return jsonify({"error": "not_found", "message": f"Officer {officer_id} not found."}), 404
    except Exception:
        current_app.logger.exception("GET /api/officers/%s/feedback failed", officer_id)
        return jsonify({"error": "server_error"}), 500
