"""
Database infrastructure for the sponsorship platform.
"""

from .database import engine, SessionLocal, get_db, Base, build_engine, create_tables, drop_tables

__all__ = [
    "engine",
    "SessionLocal",
    "get_db",
    "Base",
    "build_engine",
    "create_tables",
    "drop_tables",
]
