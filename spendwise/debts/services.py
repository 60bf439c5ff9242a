"""Service layer for settlement documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

from firebase_admin import firestore

from spendwise.core.constants import SETTLEMENTS_COLLECTION
from spendwise.core.db import stage_deletions

if TYPE_CHECKING:
    from google.cloud.firestore_v1.batch import WriteBatch
    from google.cloud.firestore_v1.client import Client


def add_all_user_settlements_deletions_to_batch(
    db: Client, user_id: str, batch: WriteBatch
) -> None:
    """Stage the deletion of every settlement the user takes part in.

    A settlement involves two users; once one side is gone the record
    has no counterparty, so it is removed for both.
    """
    docs = (
        db.collection(SETTLEMENTS_COLLECTION)
        .where(
            filter=firestore.FieldFilter("participantIds", "array_contains", user_id)
        )
        .stream()
    )
    stage_deletions(batch, docs)
