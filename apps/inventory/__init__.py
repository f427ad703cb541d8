"""Inventory app package: rentable items and their availability."""
