from flask import Blueprint

bp = Blueprint("api", __name__)

# Import submodules so their @bp.route decorators register
from . import officers  # noqa: E402,F401
from . import feedback  # noqa: E402,F401
from . import admin  # noqa: E402,F401
