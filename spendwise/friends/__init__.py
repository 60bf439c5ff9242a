"""Friendships and friend requests between users."""
