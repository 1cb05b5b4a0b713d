"""
Shared module for common utilities used by the cafe API and the CLI.

STRUCTURE:
- shared.security: Authentication and authorization
  - auth.py: JWT signing/verification, current_user_context, authorization gate
  - password.py: Bcrypt hashing
  - rate_limit.py: slowapi limiter

- shared.infrastructure: Database and messaging
  - db.py: SQLAlchemy sessions, safe_commit()
  - correlation.py: Request correlation ids
  - events/: Redis pub/sub notification port and adapters

- shared.config: Configuration
  - settings.py: Environment config (pydantic-settings)
  - logging.py: Structured logging
  - constants.py: Roles, OrderStatus, transition table, operation allow-lists

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - validators.py: URL and slug validation
  - schemas.py / admin_schemas.py: Pydantic request/response models

IMPORT EXAMPLES:
    from shared.security.auth import current_user_context, require_operation
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import Roles, OrderStatus
    from shared.utils.exceptions import NotFoundError, ForbiddenError
"""
