"""Adapters for version-control history and the persisted changelog."""
