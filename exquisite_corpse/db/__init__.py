"""
Database package for Exquisite Corpse.
"""

from .base import Base, get_db, get_engine, get_session_local, init_database
from .models import PoemLineModel, PoemModel
from .store import PoemStore

__all__ = [
    "Base",
    "get_db",
    "get_engine",
    "get_session_local",
    "init_database",
    "PoemModel",
    "PoemLineModel",
    "PoemStore",
]
