"""Cascading deletion of a user's data.

The cascade runs in stages, each recorded on an ``accountDeletions/{uid}``
marker before the next one starts:

    leave_circles -> delete_friendships -> commit_dependents -> complete

Stages are committed separately, so a crash can leave an account partly
cleaned up. Calling ``delete_all_user_data`` again resumes from the stage
recorded on the marker. The last stage commits every dependent deletion,
the username release, the account reset and the ``complete`` marker in a
single batch.
"""

from __future__ import annotations

import datetime
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, cast

from flask import current_app

from spendwise.circles.services import get_circle_docs, leave_circle
from spendwise.core.constants import (
    ACCOUNT_DELETIONS_COLLECTION,
    DEFAULT_CATEGORIES,
    DEFAULT_PRIMARY_COLOR,
    USERS_COLLECTION,
)
from spendwise.debts.services import add_all_user_settlements_deletions_to_batch
from spendwise.errors import NotFoundError
from spendwise.friends.services import (
    add_friend_requests_deletions_to_batch,
    delete_user_friendships,
)
from spendwise.notifications.services import add_notifications_deletions_to_batch
from spendwise.recurring.services import add_recurring_expenses_deletions_to_batch
from spendwise.transactions.services import add_transactions_deletions_to_batch

from ..models import DeletionMarker
from .usernames import release_username

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.batch import WriteBatch
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference


STAGE_LEAVE_CIRCLES = "leave_circles"
STAGE_DELETE_FRIENDSHIPS = "delete_friendships"
STAGE_COMMIT_DEPENDENTS = "commit_dependents"
STAGE_COMPLETE = "complete"

MAX_LEAVE_WORKERS = 8

# Each stages the deletion of one module's documents for a user
DEPENDENT_DATA_STAGERS = (
    add_transactions_deletions_to_batch,
    add_recurring_expenses_deletions_to_batch,
    add_notifications_deletions_to_batch,
    add_friend_requests_deletions_to_batch,
    add_all_user_settlements_deletions_to_batch,
)


def _now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def account_reset_fields() -> dict[str, Any]:
    """Return the fields written to a deleted account's document."""
    return {
        "budget": 0,
        "budgetIsSet": False,
        "photoURL": None,
        "categories": [dict(c) for c in DEFAULT_CATEGORIES],
        "primaryColor": DEFAULT_PRIMARY_COLOR,
        "username": None,
    }


def _start_or_resume(
    db: Client, user_id: str, marker_ref: DocumentReference
) -> DeletionMarker:
    """Return the unfinished marker for the user, or write a new one."""
    marker_doc = cast("DocumentSnapshot", marker_ref.get())
    if marker_doc.exists:
        existing = cast(DeletionMarker, marker_doc.to_dict() or {})
        if existing.get("stage") not in (None, STAGE_COMPLETE):
            current_app.logger.info(
                f"Resuming deletion of {user_id} at stage {existing['stage']}"
            )
            return existing

    user_doc = cast(
        "DocumentSnapshot", db.collection(USERS_COLLECTION).document(user_id).get()
    )
    if not user_doc.exists:
        raise NotFoundError(f"User {user_id} not found.")

    marker: DeletionMarker = {
        "stage": STAGE_LEAVE_CIRCLES,
        "username": (user_doc.to_dict() or {}).get("username"),
        "startedAt": _now(),
        "updatedAt": _now(),
    }
    marker_ref.set(dict(marker))
    return marker


def _advance(
    marker_ref: DocumentReference, stage: str, batch: WriteBatch | None = None
) -> None:
    update = {"stage": stage, "updatedAt": _now()}
    if batch is not None:
        batch.update(marker_ref, update)
    else:
        marker_ref.update(update)


def _leave_if_present(
    db: Client, circle_id: str, user_id: str, logger: logging.Logger
) -> None:
    try:
        leave_circle(db, circle_id, user_id)
    except NotFoundError:
        # Deleted since the membership query, e.g. by its last other member
        logger.info(f"Circle {circle_id} already gone while deleting {user_id}")


def leave_all_circles(db: Client, user_id: str) -> int:
    """Leave every circle of the user concurrently.

    All leaves run to completion before the first failure, if any, is
    raised. Circles already left stay left, and a circle deleted in the
    meantime counts as left.
    """
    circle_docs = get_circle_docs(db, user_id)
    if not circle_docs:
        return 0

    # Worker threads run outside the app context
    logger = current_app.logger
    workers = min(MAX_LEAVE_WORKERS, len(circle_docs))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(_leave_if_present, db, doc.id, user_id, logger)
            for doc in circle_docs
        ]
    for future in futures:
        future.result()
    return len(circle_docs)


def stage_dependent_deletions(db: Client, user_id: str, batch: WriteBatch) -> None:
    """Ask every dependent-data module to stage its deletions into the batch."""
    for stage_deletions in DEPENDENT_DATA_STAGERS:
        stage_deletions(db, user_id, batch)


def delete_all_user_data(db: Client, user_id: str) -> None:
    """Remove or detach everything a user owns, then reset their account.

    The user document itself is kept with its uid, display name and email.
    """
    marker_ref = db.collection(ACCOUNT_DELETIONS_COLLECTION).document(user_id)
    marker = _start_or_resume(db, user_id, marker_ref)
    stage = marker["stage"]

    if stage == STAGE_LEAVE_CIRCLES:
        left = leave_all_circles(db, user_id)
        current_app.logger.info(f"Deleting {user_id}: left {left} circles")
        stage = STAGE_DELETE_FRIENDSHIPS
        _advance(marker_ref, stage)

    if stage == STAGE_DELETE_FRIENDSHIPS:
        deleted = delete_user_friendships(db, user_id)
        current_app.logger.info(f"Deleting {user_id}: removed {deleted} friendships")
        stage = STAGE_COMMIT_DEPENDENTS
        _advance(marker_ref, stage)

    if stage == STAGE_COMMIT_DEPENDENTS:
        batch = db.batch()
        stage_dependent_deletions(db, user_id, batch)
        username = marker.get("username")
        if username:
            release_username(db, username, batch)
        batch.update(
            db.collection(USERS_COLLECTION).document(user_id), account_reset_fields()
        )
        _advance(marker_ref, STAGE_COMPLETE, batch)
        batch.commit()

    current_app.logger.info(f"Deleted all data for user {user_id}")
