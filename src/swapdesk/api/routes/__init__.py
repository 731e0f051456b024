"""Route group exports."""

from . import auth, collections, health, history, stats, swaps

__all__ = ["auth", "collections", "health", "history", "stats", "swaps"]
