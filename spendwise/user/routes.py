"""Routes for the user blueprint."""

from flask import current_app, g, jsonify, request, session

from spendwise.auth.decorators import login_required
from spendwise.core.db import get_db
from spendwise.errors import ValidationError

from . import bp
from .forms import BudgetForm, ProfileForm, ProfileImageForm, UsernameForm
from .models import to_public_profile
from .services import UserService


def _first_form_error(form):
    for errors in form.errors.values():
        if errors:
            return errors[0]
    return "Validation failed."


def _validate(form):
    if not form.validate_on_submit():
        raise ValidationError(_first_form_error(form))


@bp.route("/profile", methods=["GET"])
@login_required
def get_profile():
    """Return the signed-in user's own account document."""
    user = dict(g.user)
    user.pop("createdAt", None)
    return jsonify({"success": True, "data": user})


@bp.route("/profile", methods=["PATCH"])
@login_required
def update_profile():
    """Update display name and/or photo and copy them to friends and circles."""
    form = ProfileForm()
    _validate(form)

    payload = request.get_json(silent=True) or request.form
    data = {}
    if "display_name" in payload:
        # Optional() skips Length(min=1) for empty input
        display_name = (form.display_name.data or "").strip()
        if not display_name:
            raise ValidationError("Display name cannot be blank.")
        data["displayName"] = display_name
    if "photo_url" in payload:
        data["photoURL"] = form.photo_url.data or None
    if not data:
        raise ValidationError("Nothing to update.")

    updated = UserService.update_user_profile_and_propagate(
        get_db(), g.user["uid"], data
    )
    return jsonify({"success": True, "data": {"propagated": updated}})


@bp.route("/username", methods=["POST"])
@login_required
def set_username():
    """Choose a first username or change the current one."""
    form = UsernameForm()
    _validate(form)

    db = get_db()
    user_id = g.user["uid"]
    current_username = g.user.get("username")
    if current_username:
        UserService.update_username_and_propagate(
            db, user_id, current_username, form.username.data
        )
    else:
        UserService.set_username_for_new_user(db, user_id, form.username.data)
    return jsonify({"success": True, "data": {"username": form.username.data.lower()}})


@bp.route("/username/<string:username>/available", methods=["GET"])
@login_required
def username_available(username):
    """Report whether a username can still be reserved."""
    available = UserService.is_username_available(get_db(), username)
    return jsonify({"success": True, "data": {"available": available}})


@bp.route("/u/<string:username>", methods=["GET"])
@login_required
def view_user(username):
    """Return the public profile behind a username."""
    profile = UserService.get_user_by_username(get_db(), username)
    if profile is None:
        return jsonify({"success": False, "error": "User not found."}), 404
    return jsonify({"success": True, "data": profile})


@bp.route("/search", methods=["GET"])
@login_required
def search():
    """Search users by exact username or email."""
    term = request.args.get("q", "")
    results = UserService.search_users(get_db(), term)
    results = [r for r in results if r["uid"] != g.user["uid"]]
    return jsonify({"success": True, "data": results})


@bp.route("/budget", methods=["POST"])
@login_required
def set_budget():
    """Set the monthly budget."""
    form = BudgetForm()
    _validate(form)
    amount = float(form.budget.data)
    UserService.set_budget(get_db(), g.user["uid"], amount)
    return jsonify({"success": True, "data": {"budget": amount}})


@bp.route("/upload", methods=["POST"])
@login_required
def upload_image():
    """Upload a profile picture and return its public URL."""
    form = ProfileImageForm()
    _validate(form)
    url = UserService.upload_profile_image(g.user["uid"], form.image.data)
    return jsonify({"success": True, "data": {"url": url}})


@bp.route("/account", methods=["DELETE"])
@login_required
def delete_account():
    """Delete all of the signed-in user's data and end the session."""
    user_id = g.user["uid"]
    UserService.delete_all_user_data(get_db(), user_id)
    current_app.logger.info(f"Account data deleted for {user_id}")
    session.clear()
    return jsonify({"success": True, "data": to_public_profile(g.user)})
