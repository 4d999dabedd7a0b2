from flask import jsonify, request, current_app

from feedback_portal.extensions import db, limiter
from feedback_portal.services.errors import ValidationError
from feedback_portal.services.feedback import FeedbackSubmission, submit_feedback
from . import bp


def _feedback_rate_limit():
    return current_app.config.get("FEEDBACK_RATE_LIMIT") or "30 per minute"


@bp.post("/feedback")
@limiter.limit(_feedback_rate_limit)
def create_feedback():
    """
    Record one rating.

    Body: {officer_id, rating, feedback_text?, is_anonymous?, interaction_type?}
    201 with the stored record; 400 on bad input (nothing written); 500 otherwise.
    """
    payload = request.get_json(silent=True)
    try:
        submission = FeedbackSubmission.from_payload(payload)
        record = submit_feedback(db.session, submission)
        return jsonify(record.to_dict()), 201
    except ValidationError as ve:
        return jsonify({"error": "validation_error", "message": str(ve)}), 400
    except Exception:
        current_app.logger.exception("POST /api/feedback failed")
        return jsonify({"error": "server_error", "message": "Could not save feedback."}), 500
