from skillsync.permissions.checker import PermissionChecker
from skillsync.permissions.config import (
    ConfirmationConfig,
    OperationConfig,
    PermissionsConfig,
    ScopePermissionsConfig,
)
from skillsync.permissions.levels import OperationType, PermissionLevel

__all__ = [
    "ConfirmationConfig",
    "OperationConfig",
    "OperationType",
    "PermissionChecker",
    "PermissionLevel",
    "PermissionsConfig",
    "ScopePermissionsConfig",
]
