"""Access to the Firestore client for request handlers."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from firebase_admin import firestore

from spendwise.errors import InitializationError

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.batch import WriteBatch
    from google.cloud.firestore_v1.client import Client


def get_db() -> Client:
    """Return the Firestore client of the default Firebase app.

    Raises:
        InitializationError: If the Firebase app has not been initialized.
    """
    try:
        client = firestore.client()
    except ValueError as e:
        raise InitializationError("Firestore is not initialized.") from e
    if client is None:
        raise InitializationError("Firestore is not initialized.")
    return client


def stage_deletions(batch: WriteBatch, docs: Iterable[DocumentSnapshot]) -> int:
    """Stage a delete for every document snapshot and return how many were staged."""
    count = 0
    for doc in docs:
        batch.delete(doc.reference)
        count += 1
    return count
