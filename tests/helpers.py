"""Base test case and seeding helpers backed by mockfirestore."""

from __future__ import annotations

import unittest
from typing import Any

from mockfirestore import MockFirestore

from spendwise import create_app
from spendwise.core.constants import DEFAULT_CATEGORIES, DEFAULT_PRIMARY_COLOR
from tests.conftest import MockBatch, patch_mockfirestore


class FirestoreTestCase(unittest.TestCase):
    """Runs service code against an in-memory Firestore inside an app context."""

    def setUp(self) -> None:
        patch_mockfirestore()
        self.db = MockFirestore()
        self.batches: list[MockBatch] = []
        self.db.batch = self._new_batch
        self.commit_error: Exception | None = None

        self.app = create_app({"TESTING": True, "WTF_CSRF_ENABLED": False})
        self.app_context = self.app.app_context()
        self.app_context.push()

    def tearDown(self) -> None:
        self.app_context.pop()
        self.db.reset()

    def _new_batch(self) -> MockBatch:
        batch = MockBatch(self.db, fail_with=self.commit_error)
        self.batches.append(batch)
        return batch

    def doc(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Return the stored data of a document, or None if it is missing."""
        snapshot = self.db.collection(collection).document(doc_id).get()
        return snapshot.to_dict() if snapshot.exists else None

    def create_user(
        self,
        uid: str,
        display_name: str = "Test User",
        email: str | None = None,
        username: str | None = None,
        photo_url: str | None = None,
        **extra: Any,
    ) -> dict[str, Any]:
        """Create a user document, and its username reservation if given."""
        data = {
            "uid": uid,
            "displayName": display_name,
            "username": username,
            "email": email or f"{uid}@example.com",
            "categories": [dict(c) for c in DEFAULT_CATEGORIES],
            "budget": 0,
            "budgetIsSet": False,
            "photoURL": photo_url,
            "primaryColor": DEFAULT_PRIMARY_COLOR,
            **extra,
        }
        self.db.collection("users").document(uid).set(data)
        if username:
            self.db.collection("usernames").document(username.lower()).set(
                {"uid": uid}
            )
        return data

    def create_friendship(self, friendship_id: str, *users: dict[str, Any]) -> None:
        """Create a friendship with snapshots of both users."""
        self.db.collection("friendships").document(friendship_id).set(
            {
                "userIds": [u["uid"] for u in users],
                "users": {
                    u["uid"]: {
                        "displayName": u["displayName"],
                        "photoURL": u["photoURL"],
                    }
                    for u in users
                },
            }
        )

    def create_circle(self, circle_id: str, name: str, *users: dict[str, Any]) -> None:
        """Create a circle whose members are the given users."""
        self.db.collection("circles").document(circle_id).set(
            {
                "name": name,
                "memberIds": [u["uid"] for u in users],
                "members": {
                    u["uid"]: {
                        "displayName": u["displayName"],
                        "photoURL": u["photoURL"],
                    }
                    for u in users
                },
            }
        )
