import os
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

# Load .env only for local/dev. In prod, env vars come from the platform.
if os.getenv("APP_ENV", "development") != "production":
    from dotenv import load_dotenv
    load_dotenv(".env", override=False)


from .config import get_config
from .extensions import db, migrate, cors, limiter
from .security import init_security
from .observability import init_logging, init_sentry


def create_app(config_object=None):
    app = Flask(__name__)

    # Config: clean, explicit, class-based
    app.config.from_object(config_object or get_config())

    # Rate-limit storage: in-process for dev/tests, Redis when several workers share limits
    env_key = (os.getenv("APP_ENV", "development") or "development").lower()
    use_redis = env_key in ("staging", "production")
    storage_uri = os.environ.get("REDIS_URL") if use_redis else "memory://"
    if use_redis and not storage_uri:
        # Hard fail in stage/prod so we never silently run without RL storage
        raise RuntimeError("REDIS_URL is required in staging/production for rate limiting")
    app.config.setdefault("RATELIMIT_STORAGE_URI", storage_uri)

    # --- Required env validation for prod-like envs (staging/production) ---
    def _require(name: str):
        val = os.getenv(name)
        if not val:
            raise RuntimeError(f"Missing required environment variable: {name}")
        return val

    if env_key in ("staging", "production"):
        _require("SECRET_KEY")
        _require("DATABASE_URL")

    # --- Observability & Security ---
    init_logging(app)
    init_sentry(app)
    if env_key in ("staging", "production"):
        init_security(app)

    # Init extensions
    db.init_app(app)
    migrate.init_app(app, db, directory="migrations")
    cors.init_app(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})
    limiter.init_app(app)

    # Blueprints
    from .blueprints.main import bp as main_bp
    from .blueprints.api import bp as api_bp

    app.register_blueprint(main_bp)                    # /test, /healthz
    app.register_blueprint(api_bp, url_prefix="/api")  # JSON API

    # Error handlers: the client only ever gets JSON back
    @app.errorhandler(HTTPException)
    def http_error(e):
        names = {
            400: "bad_request",
            404: "not_found",
            405: "method_not_allowed",
            429: "rate_limited",
        }
        payload = {"error": names.get(e.code, "http_error"), "message": e.description}
        headers = {}
        retry_after = getattr(e, "retry_after", None)
        if e.code == 429 and retry_after is not None:
            headers["Retry-After"] = str(int(retry_after))
        return jsonify(payload), e.code, headers

    @app.errorhandler(Exception)
    def server_error(e):
        # Never leak internals; the traceback goes to the log (and Sentry)
        app.logger.exception("Unhandled error")
        return jsonify({"error": "server_error", "message": "Internal server error"}), 500

    # CLI commands (ops utilities)
    from .cli import register_cli
    register_cli(app)

    return app
