"""Service layer for notification documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

from firebase_admin import firestore

from spendwise.core.constants import NOTIFICATIONS_COLLECTION
from spendwise.core.db import stage_deletions

if TYPE_CHECKING:
    from google.cloud.firestore_v1.batch import WriteBatch
    from google.cloud.firestore_v1.client import Client


def add_notifications_deletions_to_batch(
    db: Client, user_id: str, batch: WriteBatch
) -> None:
    """Stage the deletion of every notification addressed to the user."""
    docs = (
        db.collection(NOTIFICATIONS_COLLECTION)
        .where(filter=firestore.FieldFilter("userId", "==", user_id))
        .stream()
    )
    stage_deletions(batch, docs)
