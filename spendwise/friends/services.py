from __future__ import annotations

from typing import TYPE_CHECKING, Any

from firebase_admin import firestore

from spendwise.core.constants import (
    FIRESTORE_BATCH_LIMIT,
    FRIEND_REQUESTS_COLLECTION,
    FRIENDSHIPS_COLLECTION,
)

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.batch import WriteBatch
    from google.cloud.firestore_v1.client import Client


def get_friendship_docs(db: Client, user_id: str) -> list[DocumentSnapshot]:
    """Fetch every friendship document the user takes part in."""
    query = db.collection(FRIENDSHIPS_COLLECTION).where(
        filter=firestore.FieldFilter("userIds", "array_contains", user_id)
    )
    return list(query.stream())


def get_user_friends(db: Client, user_id: str) -> list[dict[str, Any]]:
    """Return the denormalized snapshot of each of the user's friends."""
    friends = []
    for doc in get_friendship_docs(db, user_id):
        data = doc.to_dict() or {}
        users = data.get("users", {})
        for uid in data.get("userIds", []):
            if uid != user_id and uid in users:
                friends.append({"uid": uid, "friendshipId": doc.id, **users[uid]})
    return friends


def delete_user_friendships(db: Client, user_id: str) -> int:
    """Delete every friendship referencing the user.

    Friendships mean nothing with one party gone. Deletes are committed in
    chunks that stay under the per-batch write limit.
    """
    docs = get_friendship_docs(db, user_id)
    batch = db.batch()
    operation_count = 0

    for doc in docs:
        batch.delete(doc.reference)
        operation_count += 1

        if operation_count >= FIRESTORE_BATCH_LIMIT:
            batch.commit()
            batch = db.batch()
            operation_count = 0

    if operation_count > 0:
        batch.commit()
    return len(docs)


def add_friend_requests_deletions_to_batch(
    db: Client, user_id: str, batch: WriteBatch
) -> None:
    """Stage the deletion of friend requests sent or received by the user."""
    requests_ref = db.collection(FRIEND_REQUESTS_COLLECTION)
    staged: set[str] = set()
    for field in ("fromUserId", "toUserId"):
        docs = requests_ref.where(
            filter=firestore.FieldFilter(field, "==", user_id)
        ).stream()
        for doc in docs:
            if doc.id in staged:
                continue
            batch.delete(doc.reference)
            staged.add(doc.id)
