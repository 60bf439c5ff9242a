"""Service layer for recurring expense documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from firebase_admin import firestore

from spendwise.core.constants import RECURRING_EXPENSES_COLLECTION
from spendwise.core.db import stage_deletions

if TYPE_CHECKING:
    from google.cloud.firestore_v1.batch import WriteBatch
    from google.cloud.firestore_v1.client import Client


def get_user_recurring_expenses(db: Client, user_id: str) -> list[dict[str, Any]]:
    """Fetch the recurring expenses configured by a user."""
    docs = (
        db.collection(RECURRING_EXPENSES_COLLECTION)
        .where(filter=firestore.FieldFilter("userId", "==", user_id))
        .stream()
    )
    return [{"id": doc.id, **(doc.to_dict() or {})} for doc in docs]


def add_recurring_expenses_deletions_to_batch(
    db: Client, user_id: str, batch: WriteBatch
) -> None:
    """Stage the deletion of every recurring expense owned by the user."""
    docs = (
        db.collection(RECURRING_EXPENSES_COLLECTION)
        .where(filter=firestore.FieldFilter("userId", "==", user_id))
        .stream()
    )
    stage_deletions(batch, docs)
