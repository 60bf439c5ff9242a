"""Keep denormalized user snapshots in sync with the user document."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore
from flask import current_app

from spendwise.core.constants import (
    CIRCLES_COLLECTION,
    FRIENDSHIPS_COLLECTION,
    SNAPSHOT_FIELDS,
    USERS_COLLECTION,
)

from ..models import MemberSnapshot

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.batch import WriteBatch
    from google.cloud.firestore_v1.client import Client


# (collection, array of member ids, map of member snapshots keyed by id)
SNAPSHOT_INDEXES = (
    (FRIENDSHIPS_COLLECTION, "userIds", "users"),
    (CIRCLES_COLLECTION, "memberIds", "members"),
)


def _stage_snapshot_update(
    batch: WriteBatch,
    doc: DocumentSnapshot,
    map_field: str,
    user_id: str,
    updates: MemberSnapshot,
) -> bool:
    """Stage a field-level merge into one document's snapshot of the user."""
    data = doc.to_dict() or {}
    if not data.get(map_field, {}).get(user_id):
        return False
    batch.update(
        doc.reference,
        {f"{map_field}.{user_id}.{field}": value for field, value in updates.items()},
    )
    return True


def update_user_profile_and_propagate(
    db: Client, user_id: str, data: dict[str, Any]
) -> int:
    """Update a user's profile and every snapshot of it, in one batch.

    Only the snapshot fields present in ``data`` are written, so an update
    of the display name never overwrites a concurrent photo change.

    Returns:
        int: The number of related documents updated.
    """
    if not data:
        return 0

    batch = db.batch()
    batch.update(db.collection(USERS_COLLECTION).document(user_id), data)

    updates = cast(
        MemberSnapshot,
        {field: data[field] for field in SNAPSHOT_FIELDS if field in data},
    )
    staged = 0
    if updates:
        for collection, ids_field, map_field in SNAPSHOT_INDEXES:
            docs = (
                db.collection(collection)
                .where(filter=firestore.FieldFilter(ids_field, "array_contains", user_id))
                .stream()
            )
            for doc in docs:
                if _stage_snapshot_update(batch, doc, map_field, user_id, updates):
                    staged += 1

    batch.commit()
    current_app.logger.info(
        f"Propagated profile update for {user_id} to {staged} related documents"
    )
    return staged
