"""Service layer for circle membership."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore

from spendwise.core.constants import CIRCLES_COLLECTION
from spendwise.errors import NotFoundError

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client


def get_circle_docs(db: Client, user_id: str) -> list[DocumentSnapshot]:
    """Fetch every circle the user is a member of."""
    query = db.collection(CIRCLES_COLLECTION).where(
        filter=firestore.FieldFilter("memberIds", "array_contains", user_id)
    )
    return list(query.stream())


def get_user_circles(db: Client, user_id: str) -> list[dict[str, Any]]:
    """Return the circles the user belongs to."""
    return [{"id": doc.id, **(doc.to_dict() or {})} for doc in get_circle_docs(db, user_id)]


def leave_circle(db: Client, circle_id: str, user_id: str) -> None:
    """Remove a user from a circle's member list and member snapshots.

    Both ``memberIds`` and ``members`` change in one batch so they stay in
    sync. A circle left by its last member is deleted.

    Raises:
        NotFoundError: If the circle does not exist.
    """
    circle_ref = db.collection(CIRCLES_COLLECTION).document(circle_id)
    circle_doc = cast("DocumentSnapshot", circle_ref.get())
    if not circle_doc.exists:
        raise NotFoundError(f"Circle {circle_id} not found.")

    data = circle_doc.to_dict() or {}
    member_ids = data.get("memberIds", [])
    if user_id not in member_ids:
        return

    batch = db.batch()
    if all(mid == user_id for mid in member_ids):
        batch.delete(circle_ref)
    else:
        batch.update(
            circle_ref,
            {
                "memberIds": firestore.ArrayRemove([user_id]),
                f"members.{user_id}": firestore.DELETE_FIELD,
            },
        )
    batch.commit()
