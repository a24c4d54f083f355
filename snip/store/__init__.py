from .db import SnipDB

__all__ = ["SnipDB"]
