"""persistent-enum error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Declaration and lookup
- 4xxx: Read-only enforcement
- 5xxx: Initialization lifecycle
- 9xxx: Internal

Each concrete error also derives from the builtin exception that callers
would naturally catch for that condition (ValueError for bad declaration
arguments, NameError for unknown names, RuntimeError for lifecycle misuse).
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Declaration and lookup (3xxx)
    MISSING_ATTRIBUTES = 3001
    UNKNOWN_MEMBER = 3002
    UNRESOLVABLE_TYPE = 3003

    # Read-only enforcement (4xxx)
    READ_ONLY_RECORD = 4001
    FROZEN_MEMBER = 4002

    # Lifecycle (5xxx)
    UNSAFE_INITIALIZATION = 5001
    NOT_INITIALIZED = 5002

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, eq=False)
class PersistentEnumError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'UNKNOWN_MEMBER')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(PersistentEnumError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class MissingAttributesError(PersistentEnumError, ValueError):
    """A required column has no value and no default."""

    @classmethod
    def for_member(
        cls, model: str, member: str, attributes: list[str]
    ) -> "MissingAttributesError":
        missing = ", ".join(attributes)
        return cls(
            code=ErrorCode.MISSING_ATTRIBUTES,
            message=f"{model}: member '{member}' is missing required attributes: {missing}",
            details={"model": model, "member": member, "attributes": attributes},
        )


class UnknownMemberError(PersistentEnumError, NameError):
    @classmethod
    def for_name(cls, model: str, name: str) -> "UnknownMemberError":
        return cls(
            code=ErrorCode.UNKNOWN_MEMBER,
            message=f"{model}: Invalid member '{name}'",
            details={"model": model, "name": name},
        )


class UnresolvableTypeError(PersistentEnumError, NameError):
    @classmethod
    def after_reload(cls, type_name: str) -> "UnresolvableTypeError":
        return cls(
            code=ErrorCode.UNRESOLVABLE_TYPE,
            message=f"Could not resolve enum type '{type_name}' after reload",
            details={"type_name": type_name},
        )


class ReadOnlyMemberError(PersistentEnumError):
    """Write attempted through an initialized enum type."""

    @classmethod
    def for_operation(cls, model: str, operation: str) -> "ReadOnlyMemberError":
        return cls(
            code=ErrorCode.READ_ONLY_RECORD,
            message=f"{model} is a read-only enum: {operation} is not permitted",
            details={"model": model, "operation": operation},
        )

    @classmethod
    def for_attach(cls, model: str) -> "ReadOnlyMemberError":
        return cls(
            code=ErrorCode.READ_ONLY_RECORD,
            message=(
                f"{model} members are shared and cannot join a session; "
                "use member.in_session(session) to reference one"
            ),
            details={"model": model, "operation": "attach"},
        )


class FrozenMemberError(PersistentEnumError, AttributeError):
    @classmethod
    def for_attribute(cls, model: str, attribute: str) -> "FrozenMemberError":
        return cls(
            code=ErrorCode.FROZEN_MEMBER,
            message=f"can't modify frozen {model} member: '{attribute}'",
            details={"model": model, "attribute": attribute},
        )


class UnsafeInitializationError(PersistentEnumError, RuntimeError):
    @classmethod
    def in_transaction(cls, model: str) -> "UnsafeInitializationError":
        return cls(
            code=ErrorCode.UNSAFE_INITIALIZATION,
            message=f"{model}: unsafe class initialization during transaction",
            details={"model": model},
        )


class NotInitializedError(PersistentEnumError, RuntimeError):
    @classmethod
    def for_model(cls, model: str) -> "NotInitializedError":
        return cls(
            code=ErrorCode.NOT_INITIALIZED,
            message=f"Cannot refresh enum type {model}: not already initialized!",
            details={"model": model},
        )

    @classmethod
    def for_lookup(cls, model: str) -> "NotInitializedError":
        return cls(
            code=ErrorCode.NOT_INITIALIZED,
            message=f"{model} has not been declared as an enum",
            details={"model": model},
        )


class InternalError(PersistentEnumError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
