from .api import ReadingStateStore, make_store

__all__ = ["ReadingStateStore", "make_store"]
