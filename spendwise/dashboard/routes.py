"""Routes for the dashboard blueprint."""

from flask import current_app, g, jsonify

from spendwise.auth.decorators import login_required
from spendwise.core.db import get_db
from spendwise.errors import NotFoundError

from . import bp
from .services import get_dashboard_data


@bp.route("/", methods=["GET"])
@login_required
def dashboard():
    """Return the budget, spending and recent transactions of the signed-in user."""
    summary = get_dashboard_data(
        get_db(),
        g.user["uid"],
        default_budget=current_app.config["DEFAULT_MONTHLY_BUDGET"],
    )
    if summary is None:
        raise NotFoundError("User not found.")
    return jsonify({"success": True, "data": summary})
