from flask import jsonify, current_app

from feedback_portal.extensions import db
from feedback_portal.services.ratings import get_admin_snapshot
from . import bp


@bp.get("/admin/all-feedback")
def all_feedback():
    """Dashboard snapshot: global totals plus each officer's full history."""
    try:
        snapshot = get_admin_snapshot(db.session)
        return jsonify(snapshot.to_dict()), 200
    except Exception:
        current_app.logger.exception("GET /api/admin/all-feedback failed")
        return jsonify({"error": "server_error"}), 500
