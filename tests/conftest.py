"""Common utilities for tests."""

import unittest.mock
from copy import deepcopy
from typing import Any, Optional

from firebase_admin import firestore
from google.api_core.exceptions import AlreadyExists, NotFound
from mockfirestore import CollectionReference, Query
from mockfirestore.document import DocumentReference


def patch_mockfirestore() -> None:
    """Apply monkeypatches to mockfirestore to support FieldFilter and equality."""

    def collection_where(
        self: Any,
        field_path: Optional[str] = None,
        op_string: Optional[str] = None,
        value: Any = None,
        filter: Any = None,
    ) -> Any:  # noqa: E501
        if filter:
            return self._where(filter.field_path, filter.op_string, filter.value)
        return self._where(field_path, op_string, value)

    if not hasattr(CollectionReference, "_where"):
        CollectionReference._where = CollectionReference.where
        CollectionReference.where = collection_where

    def query_where(
        self: Any,
        field_path: Optional[str] = None,
        op_string: Optional[str] = None,
        value: Any = None,
        filter: Any = None,
    ) -> Any:
        if filter:
            return self._where(filter.field_path, filter.op_string, filter.value)
        return self._where(field_path, op_string, value)

    if not hasattr(Query, "_where"):
        Query._where = Query.where
        Query.where = query_where

    def doc_ref_eq(self: Any, other: Any) -> bool:
        if not isinstance(other, DocumentReference):
            return False
        return self._path == other._path

    if not hasattr(DocumentReference, "_orig_eq"):
        DocumentReference._orig_eq = DocumentReference.__eq__
        DocumentReference.__eq__ = doc_ref_eq
        DocumentReference.__hash__ = lambda self: hash(tuple(self._path))


def apply_update(document: dict[str, Any], data: dict[str, Any]) -> dict[str, Any]:
    """Apply a Firestore-style update (dotted paths and sentinels) to a dict."""
    result = deepcopy(document)
    for key, value in data.items():
        parts = key.split(".")
        target = result
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        leaf = parts[-1]
        if value is firestore.DELETE_FIELD:
            target.pop(leaf, None)
        elif isinstance(value, firestore.ArrayRemove):
            target[leaf] = [v for v in target.get(leaf, []) if v not in value.values]
        elif isinstance(value, firestore.ArrayUnion):
            merged = list(target.get(leaf, []))
            merged += [v for v in value.values if v not in merged]
            target[leaf] = merged
        else:
            target[leaf] = deepcopy(value)
    return result


class MockBatch:
    """A WriteBatch stand-in that applies all staged writes on commit, or none.

    Pass ``fail_with`` to make ``commit`` raise before anything is written.
    """

    def __init__(self, db: Any, fail_with: Optional[Exception] = None) -> None:
        self.db = db
        self.fail_with = fail_with
        self.writes: list[tuple[str, Any, Any, bool]] = []
        self.commit = unittest.mock.MagicMock(side_effect=self._real_commit)

    def set(self, ref: Any, data: Any, merge: bool = False) -> None:
        self.writes.append(("set", ref, data, merge))

    def create(self, ref: Any, data: Any) -> None:
        self.writes.append(("create", ref, data, False))

    def update(self, ref: Any, data: Any) -> None:
        self.writes.append(("update", ref, data, False))

    def delete(self, ref: Any) -> None:
        self.writes.append(("delete", ref, None, False))

    def _real_commit(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

        # Check every precondition before the first write
        for op, ref, _, _ in self.writes:
            exists = ref.get().exists
            if op == "create" and exists:
                raise AlreadyExists(f"Document already exists: {ref.id}")
            if op == "update" and not exists:
                raise NotFound(f"No document to update: {ref.id}")

        for op, ref, data, merge in self.writes:
            if op == "delete":
                ref.delete()
            elif op == "update":
                ref.set(apply_update(ref.get().to_dict() or {}, data))
            elif merge:
                ref.set(apply_update(ref.get().to_dict() or {}, data))
            else:
                ref.set(deepcopy(data))

    def ops(self, op: str) -> list[tuple[Any, Any]]:
        """Return the staged (ref, data) pairs for one kind of write."""
        return [(ref, data) for kind, ref, data, _ in self.writes if kind == op]
