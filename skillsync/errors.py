from enum import Enum
from pathlib import Path
from typing import ClassVar


class ErrorKind(str, Enum):
    CONFIG_INVALID = "config-invalid"

    OPERATION_DISABLED = "operation-disabled"
    INSUFFICIENT_PERMISSION_LEVEL = "insufficient-permission-level"
    SCOPE_WRITE_DISABLED = "scope-write-disabled"
    SCOPE_ALWAYS_READONLY = "scope-always-readonly"
    UNKNOWN_SCOPE = "unknown-scope"

    CONFIRMATION_IO_FAILURE = "confirmation-io-failure"
    OPERATION_CANCELLED_BY_USER = "operation-cancelled-by-user"

    EMPTY_NAME = "empty-name"
    EMPTY_PATH = "empty-path"
    BAD_EXTENSION = "bad-extension"
    DUPLICATE_NAME = "duplicate-name"
    EMPTY_CONTENT_STRICT = "empty-content-strict"
    PLATFORM_MISMATCH = "platform-mismatch"

    UNKNOWN_PLATFORM = "unknown-platform"
    PATH_MISSING = "path-missing"
    PATH_NOT_DIRECTORY = "path-not-directory"
    PATH_UNREADABLE = "path-unreadable"
    WRITE_PERMISSION_DENIED = "write-permission-denied"
    # Warning-only kinds label entries of ValidationResult.warnings; no error carries them.
    TARGET_FILE_EXISTS = "target-file-exists"

    SENSITIVE_CONTENT_ERROR = "sensitive-content-error"
    # Warning-only; labels warning-severity detections.
    SENSITIVE_CONTENT_WARNING = "sensitive-content-warning"


SKILL_INVALID_KINDS: frozenset[ErrorKind] = frozenset(
    {
        ErrorKind.EMPTY_NAME,
        ErrorKind.EMPTY_PATH,
        ErrorKind.BAD_EXTENSION,
        ErrorKind.DUPLICATE_NAME,
        ErrorKind.EMPTY_CONTENT_STRICT,
        ErrorKind.PLATFORM_MISMATCH,
    }
)


class SkillSyncError(Exception):
    """Base user-facing application error."""

    kind: ClassVar[ErrorKind | None] = None


class ConfigInvalidError(SkillSyncError):
    kind = ErrorKind.CONFIG_INVALID

    def __init__(self, path: Path | None, detail: str) -> None:
        self.path = path
        self.detail = detail
        if path is None:
            super().__init__(f"Invalid permissions config ({detail})")
        else:
            super().__init__(f"Invalid permissions config ({detail}): {path}")


class PermissionDeniedError(SkillSyncError):
    """An operation or scope is not permitted by the current configuration."""


class OperationDisabledError(PermissionDeniedError):
    kind = ErrorKind.OPERATION_DISABLED

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"operation {operation!r} is disabled by configuration")


class InsufficientPermissionLevelError(PermissionDeniedError):
    kind = ErrorKind.INSUFFICIENT_PERMISSION_LEVEL

    def __init__(self, operation: str, required: str, current: str) -> None:
        self.operation = operation
        self.required = required
        self.current = current
        super().__init__(
            f"operation {operation!r} requires permission level {required!r}, "
            f"but current level is {current!r}"
        )


class ScopeWriteDisabledError(PermissionDeniedError):
    kind = ErrorKind.SCOPE_WRITE_DISABLED

    def __init__(self, scope: str, message: str) -> None:
        self.scope = scope
        super().__init__(message)


class ScopeReadOnlyError(PermissionDeniedError):
    kind = ErrorKind.SCOPE_ALWAYS_READONLY

    def __init__(self, scope: str) -> None:
        self.scope = scope
        super().__init__(f"writes to {scope} scope are never allowed")


class UnknownScopeError(PermissionDeniedError):
    kind = ErrorKind.UNKNOWN_SCOPE

    def __init__(self, scope: object) -> None:
        self.scope = scope
        super().__init__(f"unknown scope: {scope}")


class ConfirmationIOError(SkillSyncError):
    kind = ErrorKind.CONFIRMATION_IO_FAILURE

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"failed to read confirmation: {detail}")


class OperationCancelledError(SkillSyncError):
    kind = ErrorKind.OPERATION_CANCELLED_BY_USER

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__("operation cancelled by user")


class PlatformPathError(SkillSyncError):
    kind = ErrorKind.UNKNOWN_PLATFORM

    def __init__(self, message: str) -> None:
        super().__init__(message)
