"""Data models for the user blueprint."""

from __future__ import annotations

from typing import Any, TypedDict

from spendwise.core.types import FirestoreDocument


class Category(TypedDict):
    """A spending category with its display color."""

    name: str
    color: str


class BusinessProfile(TypedDict, total=False):
    """Optional business details attached to an account."""

    isSetup: bool
    name: str
    logoUrl: str | None


class User(FirestoreDocument, total=False):
    """A user document in Firestore."""

    uid: str
    displayName: str
    username: str | None
    email: str
    categories: list[Category]
    budget: float
    budgetIsSet: bool
    photoURL: str | None
    primaryColor: str
    businessProfile: BusinessProfile
    accountType: str | None


class UserProfile(TypedDict):
    """The public projection of a user returned by lookups and search."""

    uid: str
    displayName: str | None
    email: str | None
    photoURL: str | None
    username: str | None


class MemberSnapshot(TypedDict, total=False):
    """A denormalized copy of a user's display fields."""

    displayName: str
    photoURL: str | None


class DeletionMarker(TypedDict, total=False):
    """Progress of an account deletion, persisted between stages."""

    stage: str
    username: str | None
    startedAt: Any
    updatedAt: Any


def to_public_profile(data: dict[str, Any]) -> UserProfile:
    """Project a user document onto the fields other users may see."""
    return {
        "uid": data.get("uid"),
        "displayName": data.get("displayName"),
        "email": data.get("email"),
        "photoURL": data.get("photoURL") or None,
        "username": data.get("username"),
    }
