from firebase_admin import auth
from flask import current_app, jsonify, request, session

from spendwise.core.db import get_db
from spendwise.extensions import csrf
from spendwise.user.services import UserService

from . import bp

GOOGLE_PROVIDER_ID = "google.com"


@bp.route("/session_login", methods=["POST"])
@csrf.exempt
def session_login():
    """
    Called by the client after a successful Firebase sign-in.
    Verifies the ID token, creates the user document on first sign-in,
    and starts a server-side session.
    """
    payload = request.get_json(silent=True) or {}
    id_token = payload.get("idToken")
    if not id_token:
        return jsonify({"success": False, "error": "Missing ID token."}), 400

    try:
        decoded_token = auth.verify_id_token(id_token)
    except (auth.InvalidIdTokenError, auth.ExpiredIdTokenError, ValueError) as e:
        current_app.logger.warning(f"Rejected session login: {e}")
        return jsonify({"success": False, "error": "Invalid token."}), 401

    uid = decoded_token["uid"]
    db = get_db()
    created = False
    if UserService.get_user_by_id(db, uid) is None:
        user_record = auth.get_user(uid)
        providers = {p.provider_id for p in user_record.provider_data}
        if GOOGLE_PROVIDER_ID in providers:
            UserService.create_initial_user_doc_for_google(db, user_record)
        else:
            display_name = payload.get("displayName") or user_record.display_name
            UserService.create_initial_user_document(db, user_record, display_name)
        created = True
        current_app.logger.info(f"Created user document for {uid}")

    session["user_id"] = uid
    return jsonify({"success": True, "data": {"uid": uid, "created": created}})


@bp.route("/logout", methods=["POST"])
def logout():
    """
    The actual sign-out is handled by the Firebase client-side SDK.
    This route clears the server-side session.
    """
    session.clear()
    return jsonify({"success": True})
