"""Infrastructure adapters: the persistent verse store and text providers."""

from .verse_store import TinyDBVerseStore

__all__ = ["TinyDBVerseStore"]
