"""Username reservations.

Each username is reserved by one ``usernames/{lowercased}`` document holding
the owner's ``uid``. Reservations are created with ``batch.create`` so two
concurrent claims on the same name cannot both commit.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, cast

from flask import current_app
from google.api_core.exceptions import AlreadyExists, Conflict

from spendwise.core.constants import (
    USERNAME_FORMAT_MESSAGE,
    USERNAME_PATTERN,
    USERNAMES_COLLECTION,
    USERS_COLLECTION,
)
from spendwise.errors import ConflictError, ValidationError

from ..models import UserProfile, to_public_profile

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.batch import WriteBatch
    from google.cloud.firestore_v1.client import Client


def validate_username(username: str) -> None:
    """Raise ValidationError unless the username has the allowed format."""
    if not isinstance(username, str) or not re.match(USERNAME_PATTERN, username):
        raise ValidationError(USERNAME_FORMAT_MESSAGE)


def _taken_message(username: str) -> str:
    return f'Username "{username}" is already taken.'


def is_username_available(db: Client, username: str) -> bool:
    """Check if a username is available."""
    validate_username(username)
    username_ref = db.collection(USERNAMES_COLLECTION).document(username.lower())
    return not cast("DocumentSnapshot", username_ref.get()).exists


def _commit_reservation(batch: WriteBatch, username: str) -> None:
    try:
        batch.commit()
    except (AlreadyExists, Conflict) as e:
        # Someone else reserved the name between the check and the commit
        raise ConflictError(_taken_message(username)) from e


def set_username_for_new_user(db: Client, user_id: str, username: str) -> None:
    """Reserve a username and attach it to a freshly created account."""
    if not is_username_available(db, username):
        raise ConflictError(_taken_message(username))

    username_lower = username.lower()
    batch = db.batch()
    batch.update(
        db.collection(USERS_COLLECTION).document(user_id),
        {"username": username_lower},
    )
    batch.create(
        db.collection(USERNAMES_COLLECTION).document(username_lower),
        {"uid": user_id},
    )
    _commit_reservation(batch, username)
    current_app.logger.info(f"User {user_id} reserved username {username_lower}")


def release_username(
    db: Client, username: str, batch: WriteBatch | None = None
) -> None:
    """Delete a username reservation.

    When a batch is given the delete is only staged; otherwise it is
    written immediately.
    """
    username_ref = db.collection(USERNAMES_COLLECTION).document(username.lower())
    if batch is not None:
        batch.delete(username_ref)
    else:
        username_ref.delete()


def get_user_by_username(db: Client, username: str) -> UserProfile | None:
    """Resolve a username to the owner's public profile."""
    username_ref = db.collection(USERNAMES_COLLECTION).document(username.lower())
    username_doc = cast("DocumentSnapshot", username_ref.get())
    if not username_doc.exists:
        return None

    uid = (username_doc.to_dict() or {}).get("uid")
    if not uid:
        return None
    user_doc = cast(
        "DocumentSnapshot", db.collection(USERS_COLLECTION).document(uid).get()
    )
    if not user_doc.exists:
        current_app.logger.warning(
            f"Username {username.lower()} points to missing user {uid}."
        )
        return None

    data = user_doc.to_dict() or {}
    data.setdefault("uid", uid)
    return to_public_profile(data)


def update_username_and_propagate(
    db: Client, user_id: str, old_username: str | None, new_username: str
) -> None:
    """Move a user from their current username to a new one."""
    if old_username and new_username.lower() == old_username.lower():
        return
    if not is_username_available(db, new_username):
        raise ConflictError(_taken_message(new_username))

    new_username_lower = new_username.lower()
    batch = db.batch()
    if old_username:
        release_username(db, old_username, batch)
    batch.create(
        db.collection(USERNAMES_COLLECTION).document(new_username_lower),
        {"uid": user_id},
    )
    batch.update(
        db.collection(USERS_COLLECTION).document(user_id),
        {"username": new_username_lower},
    )
    _commit_reservation(batch, new_username)
    current_app.logger.info(
        f"User {user_id} changed username from {old_username} to {new_username_lower}"
    )
