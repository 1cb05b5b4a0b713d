"""
Utilities module: exceptions, validators, schemas.
"""

from shared.utils.exceptions import (
    NotFoundError,
    UnauthorizedError,
    ForbiddenError,
    ValidationError,
    InvalidTransitionError,
    ConflictError,
)
from shared.utils.validators import validate_image_url, slugify, validate_slug
from shared.utils.schemas import ErrorResponse

__all__ = [
    # exceptions
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "ValidationError",
    "InvalidTransitionError",
    "ConflictError",
    # validators
    "validate_image_url",
    "slugify",
    "validate_slug",
    # schemas
    "ErrorResponse",
]
