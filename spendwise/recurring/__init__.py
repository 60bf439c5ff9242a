"""Recurring expenses owned by a user."""
