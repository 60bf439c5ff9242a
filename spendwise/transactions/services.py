"""Service layer for transaction documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from firebase_admin import firestore

from spendwise.core.constants import TRANSACTIONS_COLLECTION
from spendwise.core.db import stage_deletions

if TYPE_CHECKING:
    from google.cloud.firestore_v1.batch import WriteBatch
    from google.cloud.firestore_v1.client import Client


def _user_transactions_query(db: Client, user_id: str) -> Any:
    return db.collection(TRANSACTIONS_COLLECTION).where(
        filter=firestore.FieldFilter("userId", "==", user_id)
    )


def get_user_transactions(
    db: Client, user_id: str, limit: int | None = None
) -> list[dict[str, Any]]:
    """Fetch a user's transactions, newest first."""
    query = _user_transactions_query(db, user_id).order_by(
        "date", direction=firestore.Query.DESCENDING
    )
    if limit:
        query = query.limit(limit)

    results = []
    for doc in query.stream():
        data = doc.to_dict()
        if data is not None:
            results.append({"id": doc.id, **data})
    return results


def add_transactions_deletions_to_batch(
    db: Client, user_id: str, batch: WriteBatch
) -> None:
    """Stage the deletion of every transaction owned by the user."""
    stage_deletions(batch, _user_transactions_query(db, user_id).stream())
