import io
import logging

import pytest

from skillsync.errors import (
    ConfirmationIOError,
    ErrorKind,
    InsufficientPermissionLevelError,
    OperationCancelledError,
    OperationDisabledError,
    ScopeReadOnlyError,
    ScopeWriteDisabledError,
    UnknownScopeError,
)
from skillsync.models import Scope
from skillsync.permissions import (
    OperationType,
    PermissionChecker,
    PermissionLevel,
    PermissionsConfig,
)


class BrokenInput(io.StringIO):
    def readline(self, *args, **kwargs) -> str:  # type: ignore[override]
        raise OSError("stdin closed")


def _checker(config=None, answer: str = "") -> tuple[PermissionChecker, io.StringIO]:
    stderr = io.StringIO()
    return PermissionChecker(config, stdin=io.StringIO(answer), stderr=stderr), stderr


def test_check_and_confirm_accepts_yes() -> None:
    checker, stderr = _checker(answer="y\n")

    checker.check_and_confirm(OperationType.DELETE, "ok")

    prompt = stderr.getvalue()
    assert "Delete operation: ok" in prompt
    assert "permanently remove files" in prompt
    assert prompt.endswith(" [y/N]: ")


def test_check_and_confirm_declined_is_cancelled(caplog) -> None:
    checker, _ = _checker(answer="n\n")

    with caplog.at_level(logging.INFO, logger="skillsync"):
        with pytest.raises(OperationCancelledError) as excinfo:
            checker.check_and_confirm(OperationType.DELETE, "ok")

    assert excinfo.value.kind == ErrorKind.OPERATION_CANCELLED_BY_USER
    assert "operation cancelled by user" in caplog.text


@pytest.mark.parametrize("answer", ["yes\n", "  YES  \n", "Y\n"])
def test_confirmation_accepts_yes_variants(answer: str) -> None:
    checker, _ = _checker(answer=answer)

    assert checker.request_confirmation(OperationType.DELETE, "remove skill") is True


@pytest.mark.parametrize("answer", ["", "\n", "no\n", "yep\n", "n\n"])
def test_confirmation_rejects_everything_else(answer: str) -> None:
    checker, _ = _checker(answer=answer)

    assert checker.request_confirmation(OperationType.DELETE, "remove skill") is False


def test_confirmation_read_failure_is_surfaced() -> None:
    checker = PermissionChecker(stdin=BrokenInput(), stderr=io.StringIO())

    with pytest.raises(ConfirmationIOError) as excinfo:
        checker.request_confirmation(OperationType.BACKUP_DELETE, "old backups")

    assert excinfo.value.kind == ErrorKind.CONFIRMATION_IO_FAILURE


def test_no_prompt_when_confirmation_not_required() -> None:
    checker, stderr = _checker()

    assert checker.request_confirmation(OperationType.WRITE, "write skill") is True
    checker.check_and_confirm(OperationType.OVERWRITE, "replace skill")
    assert stderr.getvalue() == ""


def test_insufficient_level_for_write() -> None:
    config = PermissionsConfig(default_level=PermissionLevel.READ_ONLY)
    checker = PermissionChecker(config)

    with pytest.raises(InsufficientPermissionLevelError) as excinfo:
        checker.check_operation(OperationType.WRITE)

    assert excinfo.value.kind == ErrorKind.INSUFFICIENT_PERMISSION_LEVEL
    assert excinfo.value.required == "write"
    assert excinfo.value.current == "read-only"
    checker.check_operation(OperationType.READ)


def test_disabled_operation_is_rejected_before_level() -> None:
    config = PermissionsConfig(default_level=PermissionLevel.READ_ONLY)
    config.set_operation(OperationType.DELETE, enabled=False)

    with pytest.raises(OperationDisabledError) as excinfo:
        PermissionChecker(config).check_operation(OperationType.DELETE)

    assert excinfo.value.kind == ErrorKind.OPERATION_DISABLED


def test_check_and_confirm_checks_operation_first() -> None:
    config = PermissionsConfig.default()
    config.set_operation(OperationType.DELETE, enabled=False)
    checker, stderr = _checker(config, answer="y\n")

    with pytest.raises(OperationDisabledError):
        checker.check_and_confirm(OperationType.DELETE, "skill")
    assert stderr.getvalue() == ""


def test_check_operation_is_idempotent() -> None:
    checker = PermissionChecker()

    for _ in range(3):
        checker.check_operation(OperationType.DELETE)


def test_requires_confirmation_resolution_order() -> None:
    config = PermissionsConfig.default()
    checker = PermissionChecker(config)

    assert checker.requires_confirmation(OperationType.DELETE) is True
    assert checker.requires_confirmation(OperationType.OVERWRITE) is False
    assert checker.requires_confirmation(OperationType.BACKUP_DELETE) is True
    assert checker.requires_confirmation(OperationType.WRITE) is False

    config.require_confirmation.overwrite = True
    assert checker.requires_confirmation(OperationType.OVERWRITE) is True

    config.set_operation(OperationType.OVERWRITE, enabled=True, require_confirmation=False)
    assert checker.requires_confirmation(OperationType.OVERWRITE) is False

    config.set_operation(OperationType.WRITE, enabled=True, require_confirmation=True)
    assert checker.requires_confirmation(OperationType.WRITE) is True


def test_unset_override_falls_through_to_defaults() -> None:
    config = PermissionsConfig.default()
    config.set_operation(OperationType.DELETE, enabled=True)

    assert PermissionChecker(config).requires_confirmation(OperationType.DELETE) is True


def test_generic_prompt_for_other_operations() -> None:
    config = PermissionsConfig.default()
    config.set_operation(OperationType.BACKUP, enabled=True, require_confirmation=True)
    checker, stderr = _checker(config, answer="yes\n")

    assert checker.request_confirmation(OperationType.BACKUP, "nightly") is True
    assert "backup operation: nightly" in stderr.getvalue()


@pytest.mark.parametrize("scope", [Scope.BUILTIN, Scope.PLUGIN, "builtin", "plugin"])
def test_builtin_and_plugin_scopes_always_fail(scope) -> None:
    config = PermissionsConfig.default()
    config.scope_permissions.allow_system_scope = True

    with pytest.raises(ScopeReadOnlyError) as excinfo:
        PermissionChecker(config).check_scope(scope)

    assert excinfo.value.kind == ErrorKind.SCOPE_ALWAYS_READONLY


def test_default_scope_flags() -> None:
    checker = PermissionChecker()

    checker.check_scope(Scope.USER)
    checker.check_scope("repo")
    with pytest.raises(ScopeWriteDisabledError):
        checker.check_scope(Scope.SYSTEM)


def test_admin_follows_system_flag() -> None:
    config = PermissionsConfig.default()
    checker = PermissionChecker(config)

    with pytest.raises(ScopeWriteDisabledError):
        checker.check_scope(Scope.ADMIN)

    config.scope_permissions.allow_system_scope = True
    checker.check_scope(Scope.ADMIN)
    checker.check_scope(Scope.SYSTEM)


def test_disabled_user_and_repo_scopes() -> None:
    config = PermissionsConfig.default()
    config.scope_permissions.allow_user_scope = False
    config.scope_permissions.allow_repo_scope = False
    checker = PermissionChecker(config)

    with pytest.raises(ScopeWriteDisabledError, match="user scope"):
        checker.check_scope(Scope.USER)
    with pytest.raises(ScopeWriteDisabledError, match="repo scope"):
        checker.check_scope(Scope.REPO)


def test_unknown_scope_fails() -> None:
    with pytest.raises(UnknownScopeError) as excinfo:
        PermissionChecker().check_scope("galaxy")

    assert excinfo.value.kind == ErrorKind.UNKNOWN_SCOPE
