"""Core module exports."""

from persistent_enum.core.errors import (
    ConfigError,
    ErrorCode,
    FrozenMemberError,
    InternalError,
    MissingAttributesError,
    NotInitializedError,
    PersistentEnumError,
    ReadOnlyMemberError,
    UnknownMemberError,
    UnresolvableTypeError,
    UnsafeInitializationError,
)
from persistent_enum.core.logging import configure_logging, get_log_file_path, get_logger

__all__ = [
    # Errors
    "ErrorCode",
    "PersistentEnumError",
    "ConfigError",
    "MissingAttributesError",
    "UnknownMemberError",
    "UnresolvableTypeError",
    "ReadOnlyMemberError",
    "FrozenMemberError",
    "UnsafeInitializationError",
    "NotInitializedError",
    "InternalError",
    # Logging
    "configure_logging",
    "get_log_file_path",
    "get_logger",
]
