"""
Infrastructure module: database sessions, request correlation and events.

Provides:
- Database sessions and transactions (db.py)
- Correlation ids for logs and responses (correlation.py)
- Redis pub/sub notification port and adapters (events/)
"""

from shared.infrastructure.db import (
    engine,
    SessionLocal,
    get_db,
    get_db_context,
    safe_commit,
)

__all__ = [
    "engine",
    "SessionLocal",
    "get_db",
    "get_db_context",
    "safe_commit",
]
