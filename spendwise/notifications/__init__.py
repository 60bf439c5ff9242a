"""Notifications addressed to a user."""
