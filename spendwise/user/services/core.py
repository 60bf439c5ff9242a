from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore

from spendwise.core.constants import (
    DEFAULT_CATEGORIES,
    DEFAULT_PRIMARY_COLOR,
    EMAIL_SEARCH_LIMIT,
    USERNAME_PATTERN,
    USERS_COLLECTION,
)
from spendwise.errors import ValidationError

from ..models import User, UserProfile, to_public_profile
from .usernames import get_user_by_username

if TYPE_CHECKING:
    from firebase_admin.auth import UserRecord
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client


def update_user(db: Client, user_id: str, data: dict[str, Any]) -> None:
    """Update a user's document in Firestore."""
    user_ref = db.collection(USERS_COLLECTION).document(user_id)
    user_ref.update(data)


def get_user_by_id(db: Client, user_id: str) -> User | None:
    """Fetch a user by their ID."""
    user_ref = db.collection(USERS_COLLECTION).document(user_id)
    user_doc = cast("DocumentSnapshot", user_ref.get())
    if not user_doc.exists:
        return None
    data = user_doc.to_dict()
    if data is None:
        return None
    data["id"] = user_id
    return cast(User, data)


def _initial_user_data(
    uid: str, display_name: str | None, email: str | None, photo_url: str | None
) -> dict[str, Any]:
    return {
        "uid": uid,
        "displayName": display_name,
        "username": None,  # Chosen by the user in the next step
        "email": email,
        "categories": [dict(c) for c in DEFAULT_CATEGORIES],
        "budget": 0,
        "budgetIsSet": False,
        "photoURL": photo_url or None,
        "primaryColor": DEFAULT_PRIMARY_COLOR,
        "createdAt": firestore.SERVER_TIMESTAMP,
    }


def create_initial_user_document(
    db: Client, user: UserRecord, display_name: str
) -> None:
    """Create the user document for an email/password registration."""
    data = _initial_user_data(user.uid, display_name, user.email, user.photo_url)
    data["businessProfile"] = {"isSetup": False, "name": "", "logoUrl": None}
    data["accountType"] = None  # To be set by user
    db.collection(USERS_COLLECTION).document(user.uid).set(data)


def create_initial_user_doc_for_google(db: Client, user: UserRecord) -> None:
    """Create the user document for a Google sign-in, named after the Google account."""
    data = _initial_user_data(user.uid, user.display_name, user.email, user.photo_url)
    db.collection(USERS_COLLECTION).document(user.uid).set(data)


def set_budget(db: Client, user_id: str, amount: float) -> None:
    """Set the user's monthly budget."""
    if not math.isfinite(amount) or amount < 0:
        raise ValidationError("Budget must be zero or more.")
    update_user(db, user_id, {"budget": amount, "budgetIsSet": True})


def search_users(db: Client, search_term: str) -> list[UserProfile]:
    """Find users by exact username or exact email.

    An exact username match wins and skips the email query.
    """
    search_term = search_term.strip()
    if not search_term:
        return []

    # Only well-formed usernames can have a reservation
    if re.match(USERNAME_PATTERN, search_term):
        user_by_username = get_user_by_username(db, search_term.lower())
        if user_by_username:
            return [user_by_username]

    email_query = (
        db.collection(USERS_COLLECTION)
        .where(filter=firestore.FieldFilter("email", "==", search_term))
        .limit(EMAIL_SEARCH_LIMIT)
    )
    users = []
    for doc in email_query.stream():
        data = doc.to_dict()
        if data is not None:
            data.setdefault("uid", doc.id)
            users.append(to_public_profile(data))
    return users
