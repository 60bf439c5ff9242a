"""Circles: named groups of users sharing expenses."""
