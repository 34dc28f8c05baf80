"""Domain layer: errors, schemas and constants."""

from .errors import ApiError, ConfigError, ErrorCodes
from .schemas import (
    MessageLevel,
    RatingScale,
    Role,
    SessionContext,
    TemplateSummary,
    ViewMessage,
)

__all__ = [
    "ApiError",
    "ConfigError",
    "ErrorCodes",
    "MessageLevel",
    "RatingScale",
    "Role",
    "SessionContext",
    "TemplateSummary",
    "ViewMessage",
]
