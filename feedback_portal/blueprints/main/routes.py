from datetime import datetime, timezone

from flask import current_app, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from feedback_portal.extensions import db, limiter
from . import bp


@bp.get("/test")
@limiter.exempt
def liveness():
    """Deploy probe: proves the process answers; does not touch the database."""
    return jsonify({
        "message": f"{current_app.config.get('SITE_NAME')} is live and running!",
        "time": datetime.now(timezone.utc).isoformat(),
    }), 200


@bp.get("/healthz")
@limiter.exempt
def healthz():
    try:
        db.session.execute(text("SELECT 1"))
        ok = True
    except SQLAlchemyError as e:
        current_app.logger.error("Health check DB ping failed: %s", e)
        db.session.rollback()
        ok = False
    return jsonify({"status": "ok" if ok else "error", "database": ok}), (200 if ok else 503)
