import logging
import sys
from typing import Optional, TextIO

from skillsync.errors import (
    ConfirmationIOError,
    InsufficientPermissionLevelError,
    OperationCancelledError,
    OperationDisabledError,
    ScopeReadOnlyError,
    ScopeWriteDisabledError,
    UnknownScopeError,
)
from skillsync.models import Scope
from skillsync.permissions.config import ConfirmationConfig, PermissionsConfig
from skillsync.permissions.levels import OperationType, level_allows

logger = logging.getLogger(__name__)

WARNING_GLYPH = "⚠️ "

PROMPT_TEMPLATES: dict[OperationType, str] = {
    OperationType.DELETE: (
        "{glyph} Delete operation: {details}\n"
        "   This will permanently remove files. Continue?"
    ),
    OperationType.OVERWRITE: (
        "{glyph} Overwrite operation: {details}\n"
        "   This will replace existing content. Continue?"
    ),
    OperationType.BACKUP_DELETE: (
        "{glyph} Delete backup: {details}\n"
        "   This will permanently remove backup files. Continue?"
    ),
}
GENERIC_PROMPT_TEMPLATE = "{glyph} {operation} operation: {details}\n   Continue?"
PROMPT_SUFFIX = " [y/N]: "

_CONFIRM_ANSWERS = frozenset({"y", "yes"})

_CONFIRMATION_FIELDS: dict[OperationType, str] = {
    OperationType.DELETE: "delete",
    OperationType.OVERWRITE: "overwrite",
    OperationType.BACKUP_DELETE: "backup_delete",
}


class PermissionChecker:
    def __init__(
        self,
        config: Optional[PermissionsConfig] = None,
        stdin: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> None:
        self._config = config or PermissionsConfig.default()
        self._stdin = stdin
        self._stderr = stderr

    @property
    def config(self) -> PermissionsConfig:
        return self._config

    def check_operation(self, op: OperationType) -> None:
        op_config = self._config.operation(op)
        if op_config is not None and not op_config.enabled:
            raise OperationDisabledError(op.value)

        required = op.required_level
        if not level_allows(self._config.default_level, required):
            current = getattr(self._config.default_level, "value", self._config.default_level)
            raise InsufficientPermissionLevelError(op.value, required.value, str(current))

    def check_scope(self, scope: Scope | str) -> None:
        try:
            scope_id = Scope(scope)
        except ValueError:
            raise UnknownScopeError(scope) from None

        scopes = self._config.scope_permissions
        if scope_id == Scope.USER:
            if not scopes.allow_user_scope:
                raise ScopeWriteDisabledError(scope_id.value, "writes to user scope are disabled")
        elif scope_id == Scope.REPO:
            if not scopes.allow_repo_scope:
                raise ScopeWriteDisabledError(scope_id.value, "writes to repo scope are disabled")
        elif scope_id in (Scope.SYSTEM, Scope.ADMIN):
            # Admin shares the system flag.
            if not scopes.allow_system_scope:
                raise ScopeWriteDisabledError(
                    scope_id.value,
                    "writes to system/admin scope are disabled (and should remain so)",
                )
        elif scope_id in (Scope.BUILTIN, Scope.PLUGIN):
            raise ScopeReadOnlyError(scope_id.value)

    def requires_confirmation(self, op: OperationType) -> bool:
        op_config = self._config.operation(op)
        if op_config is not None and op_config.require_confirmation is not None:
            return op_config.require_confirmation

        field_name = _CONFIRMATION_FIELDS.get(op)
        if field_name is not None:
            confirmation: ConfirmationConfig = self._config.require_confirmation
            return bool(getattr(confirmation, field_name))
        return op.requires_confirmation

    def request_confirmation(self, op: OperationType, details: str) -> bool:
        if not self.requires_confirmation(op):
            return True

        template = PROMPT_TEMPLATES.get(op, GENERIC_PROMPT_TEMPLATE)
        prompt = template.format(glyph=WARNING_GLYPH, operation=op.value, details=details)
        return self._confirm_prompt(prompt)

    def check_and_confirm(self, op: OperationType, details: str) -> None:
        self.check_operation(op)
        if not self.requires_confirmation(op):
            return
        if not self.request_confirmation(op, details):
            raise OperationCancelledError(op.value)

    def _confirm_prompt(self, message: str) -> bool:
        stderr = self._stderr or sys.stderr
        stdin = self._stdin or sys.stdin

        stderr.write(f"{message}{PROMPT_SUFFIX}")
        stderr.flush()
        try:
            response = stdin.readline()
        except OSError as exc:
            raise ConfirmationIOError(str(exc)) from exc

        confirmed = response.strip().lower() in _CONFIRM_ANSWERS
        if not confirmed:
            logger.info("operation cancelled by user")
        return confirmed
