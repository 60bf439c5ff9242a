from __future__ import annotations

import unittest
from typing import Any, cast
from unittest.mock import MagicMock

from spendwise.core.constants import DEFAULT_CATEGORIES, DEFAULT_PRIMARY_COLOR
from spendwise.errors import ValidationError
from spendwise.user.services import UserService
from tests.helpers import FirestoreTestCase


class TestUserService(unittest.TestCase):
    def setUp(self) -> None:
        self.db = MagicMock()
        self.user_id = "test_user_id"

    def test_get_user_by_id(self) -> None:
        mock_doc = MagicMock()
        mock_doc.exists = True
        mock_doc.to_dict.return_value = {"displayName": "Test User"}
        self.db.collection().document().get.return_value = mock_doc

        result = UserService.get_user_by_id(self.db, self.user_id)
        self.assertIsNotNone(result)
        # Using cast to narrow type for Mypy without adding runtime logic
        res = cast(dict[str, Any], result)
        self.assertEqual(res["id"], self.user_id)
        self.assertEqual(res["displayName"], "Test User")

    def test_get_user_by_id_not_found(self) -> None:
        mock_doc = MagicMock()
        mock_doc.exists = False
        self.db.collection().document().get.return_value = mock_doc

        result = UserService.get_user_by_id(self.db, self.user_id)
        self.assertIsNone(result)

    def test_update_user(self) -> None:
        UserService.update_user(self.db, self.user_id, {"primaryColor": "1 2% 3%"})
        self.db.collection.assert_called_with("users")
        self.db.collection().document.assert_called_with(self.user_id)
        self.db.collection().document().update.assert_called_once_with(
            {"primaryColor": "1 2% 3%"}
        )

    def test_set_budget_rejects_negative(self) -> None:
        with self.assertRaises(ValidationError):
            UserService.set_budget(self.db, self.user_id, -1)
        self.db.collection().document().update.assert_not_called()

    def test_set_budget_rejects_non_finite(self) -> None:
        for amount in (float("inf"), float("nan")):
            with self.subTest(amount=amount):
                with self.assertRaises(ValidationError):
                    UserService.set_budget(self.db, self.user_id, amount)
        self.db.collection().document().update.assert_not_called()

    def test_create_initial_user_document(self) -> None:
        user = MagicMock(uid="u1", email="u1@example.com", photo_url=None)

        UserService.create_initial_user_document(self.db, user, "New User")

        data = self.db.collection().document().set.call_args[0][0]
        self.assertEqual(data["uid"], "u1")
        self.assertEqual(data["displayName"], "New User")
        self.assertIsNone(data["username"])
        self.assertEqual(data["email"], "u1@example.com")
        self.assertEqual(data["categories"], DEFAULT_CATEGORIES)
        self.assertEqual(data["budget"], 0)
        self.assertFalse(data["budgetIsSet"])
        self.assertIsNone(data["photoURL"])
        self.assertEqual(data["primaryColor"], DEFAULT_PRIMARY_COLOR)
        self.assertEqual(
            data["businessProfile"], {"isSetup": False, "name": "", "logoUrl": None}
        )
        self.assertIsNone(data["accountType"])

    def test_create_initial_user_doc_for_google(self) -> None:
        user = MagicMock(
            uid="g1",
            email="g1@gmail.com",
            display_name="Google User",
            photo_url="https://lh3.example/photo.jpg",
        )

        UserService.create_initial_user_doc_for_google(self.db, user)

        data = self.db.collection().document().set.call_args[0][0]
        self.assertEqual(data["displayName"], "Google User")
        self.assertEqual(data["photoURL"], "https://lh3.example/photo.jpg")
        self.assertNotIn("businessProfile", data)


class SearchUsersTestCase(FirestoreTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.create_user("u1", "Alice", email="alice@example.com", username="alice")
        self.create_user("u2", "Shared One", email="shared@example.com")
        self.create_user("u3", "Shared Two", email="shared@example.com")

    def test_username_match_short_circuits(self) -> None:
        db = MagicMock(wraps=self.db)

        results = UserService.search_users(db, "ALICE")

        self.assertEqual(len(results), 1)
        self.assertEqual(results[0]["uid"], "u1")
        self.assertEqual(results[0]["username"], "alice")
        queried = [call.args[0] for call in db.collection.call_args_list]
        self.assertEqual(queried, ["usernames", "users"])

    def test_email_fallback(self) -> None:
        results = UserService.search_users(self.db, "shared@example.com")

        self.assertEqual({r["uid"] for r in results}, {"u2", "u3"})
        self.assertEqual(
            set(results[0]), {"uid", "displayName", "email", "photoURL", "username"}
        )

    def test_email_query_is_exact_and_capped(self) -> None:
        db = MagicMock()
        where = db.collection.return_value.where
        where.return_value.limit.return_value.stream.return_value = []

        UserService.search_users(db, "a@b.com")

        where.return_value.limit.assert_called_once_with(10)
        field_filter = where.call_args.kwargs["filter"]
        self.assertEqual(field_filter.field_path, "email")
        self.assertEqual(field_filter.op_string, "==")
        self.assertEqual(field_filter.value, "a@b.com")

    def test_email_match_is_case_sensitive(self) -> None:
        self.assertEqual(UserService.search_users(self.db, "Shared@Example.com"), [])

    def test_no_match(self) -> None:
        self.assertEqual(UserService.search_users(self.db, "nobody"), [])

    def test_blank_term(self) -> None:
        self.assertEqual(UserService.search_users(self.db, "   "), [])


class BudgetTestCase(FirestoreTestCase):
    def test_set_budget(self) -> None:
        self.create_user("u1", "Alice")

        UserService.set_budget(self.db, "u1", 1500.5)

        user = self.doc("users", "u1")
        self.assertEqual(user["budget"], 1500.5)
        self.assertTrue(user["budgetIsSet"])


if __name__ == "__main__":
    unittest.main()
