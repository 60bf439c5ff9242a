"""Core data types for the spendwise application."""

from typing import Any, TypedDict


class _FirestoreDocumentBase(TypedDict):
    id: str
    createdAt: Any


class FirestoreDocument(_FirestoreDocumentBase, total=False):
    """Generic Firestore document structure."""

    updatedAt: Any


class APIResponse(TypedDict, total=False):
    """JSON envelope returned by every route: ``data`` on success, ``error`` otherwise."""

    success: bool
    data: Any
    error: str
