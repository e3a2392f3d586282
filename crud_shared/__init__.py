"""
Shared support code for the generic server.

STRUCTURE:
- crud_shared.config: Configuration
  - settings.py: Environment config (pydantic-settings)
  - logging.py: Structured logging

- crud_shared.infrastructure: Database and request plumbing
  - db.py: Async SQLAlchemy engine, sessions, safe_commit()
  - correlation.py: X-Request-ID middleware and logging filter

- crud_shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging

IMPORT EXAMPLES:
    from crud_shared.infrastructure.db import get_session, safe_commit
    from crud_shared.config.settings import settings
    from crud_shared.utils.exceptions import NotFoundError, ValidationError
"""
