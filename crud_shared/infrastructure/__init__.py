"""
Infrastructure module: Database sessions and request correlation.

Provides:
- Async database engine and sessions (db.py)
- Correlation ID middleware and logging filter (correlation.py)
"""

from crud_shared.infrastructure.db import (
    get_engine,
    get_sessionmaker,
    get_session,
    safe_commit,
    dispose_engine,
)
from crud_shared.infrastructure.correlation import (
    CorrelationIdMiddleware,
    CorrelationIdFilter,
    get_request_id,
)

__all__ = [
    # db
    "get_engine",
    "get_sessionmaker",
    "get_session",
    "safe_commit",
    "dispose_engine",
    # correlation
    "CorrelationIdMiddleware",
    "CorrelationIdFilter",
    "get_request_id",
]
