"""Persistence layer"""

from taskdeck.db.session import DocumentStore, get_store

__all__ = ["DocumentStore", "get_store"]
