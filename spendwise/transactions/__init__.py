"""Transaction records owned by a user."""
