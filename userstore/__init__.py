"""In-memory user record store served over HTTP."""
from .store import User, UserStore
from .rwlock import ReadWriteLock

__all__ = ["User", "UserStore", "ReadWriteLock"]
