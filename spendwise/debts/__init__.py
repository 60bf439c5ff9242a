"""Settlements between users."""
