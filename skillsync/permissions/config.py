"""Permissions configuration: defaults, YAML persistence and validation."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml
from jsonschema import Draft202012Validator

from skillsync.constants import CONFIG_DIR_MODE, CONFIG_FILE_MODE
from skillsync.errors import ConfigInvalidError, ErrorKind
from skillsync.paths import permissions_config_path
from skillsync.permissions.levels import OperationType, PermissionLevel
from skillsync.validation.result import ValidationResult

logger = logging.getLogger(__name__)

_BOOL = {"type": "boolean"}

PERMISSIONS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["default_level"],
    "properties": {
        "default_level": {"type": "string"},
        "operations": {
            "type": ["object", "null"],
            "additionalProperties": {
                "type": "object",
                "required": ["enabled"],
                "properties": {
                    "enabled": _BOOL,
                    "require_confirmation": {"type": ["boolean", "null"]},
                },
                "additionalProperties": False,
            },
        },
        "require_confirmation": {
            "type": ["object", "null"],
            "properties": {
                "delete": _BOOL,
                "overwrite": _BOOL,
                "backup_delete": _BOOL,
                "promote_with_removal": _BOOL,
            },
            "additionalProperties": False,
        },
        "scope_permissions": {
            "type": ["object", "null"],
            "properties": {
                "allow_user_scope": _BOOL,
                "allow_repo_scope": _BOOL,
                "allow_system_scope": _BOOL,
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}

_VALIDATOR = Draft202012Validator(PERMISSIONS_SCHEMA)


def format_schema_error(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


@dataclass
class OperationConfig:
    enabled: bool = True
    # None means "not set": fall through to the confirmation defaults.
    require_confirmation: Optional[bool] = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"enabled": self.enabled}
        if self.require_confirmation is not None:
            payload["require_confirmation"] = self.require_confirmation
        return payload


@dataclass
class ConfirmationConfig:
    delete: bool = True
    overwrite: bool = False
    backup_delete: bool = True
    promote_with_removal: bool = True

    def to_dict(self) -> dict[str, bool]:
        return {
            "delete": self.delete,
            "overwrite": self.overwrite,
            "backup_delete": self.backup_delete,
            "promote_with_removal": self.promote_with_removal,
        }


@dataclass
class ScopePermissionsConfig:
    allow_user_scope: bool = True
    allow_repo_scope: bool = True
    allow_system_scope: bool = False

    def to_dict(self) -> dict[str, bool]:
        return {
            "allow_user_scope": self.allow_user_scope,
            "allow_repo_scope": self.allow_repo_scope,
            "allow_system_scope": self.allow_system_scope,
        }


@dataclass
class PermissionsConfig:
    default_level: PermissionLevel | str = PermissionLevel.DESTRUCTIVE
    operations: dict[str, OperationConfig] = field(default_factory=dict)
    require_confirmation: ConfirmationConfig = field(default_factory=ConfirmationConfig)
    scope_permissions: ScopePermissionsConfig = field(
        default_factory=ScopePermissionsConfig
    )

    @classmethod
    def default(cls) -> "PermissionsConfig":
        return cls()

    def operation(self, op: OperationType | str) -> Optional[OperationConfig]:
        key = op.value if isinstance(op, OperationType) else str(op)
        return self.operations.get(key)

    def set_operation(
        self,
        op: OperationType | str,
        enabled: bool = True,
        require_confirmation: Optional[bool] = None,
    ) -> None:
        key = op.value if isinstance(op, OperationType) else str(op)
        self.operations[key] = OperationConfig(
            enabled=enabled, require_confirmation=require_confirmation
        )

    def validate(self) -> ValidationResult:
        result = ValidationResult()

        if not PermissionLevel.is_valid(self.default_level):
            result.add_error(
                "default_level",
                f"invalid permission level: {_raw_value(self.default_level)!r}",
                kind=ErrorKind.CONFIG_INVALID,
            )

        for key, op_config in self.operations.items():
            if key not in _OPERATION_KEYS:
                result.add_warning(f"unknown operation type: {key!r}")
            if not op_config.enabled and op_config.require_confirmation is not None:
                result.add_warning(
                    f"operation {key!r} is disabled but has confirmation settings"
                )

        scopes = self.scope_permissions
        if scopes.allow_system_scope:
            result.add_warning("system scope writes are enabled - this can be dangerous")
        if not scopes.allow_user_scope and not scopes.allow_repo_scope:
            result.add_warning(
                "all writable scopes are disabled - sync and write operations will fail"
            )

        return result

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"default_level": _raw_value(self.default_level)}
        if self.operations:
            payload["operations"] = {
                key: value.to_dict() for key, value in self.operations.items()
            }
        payload["require_confirmation"] = self.require_confirmation.to_dict()
        payload["scope_permissions"] = self.scope_permissions.to_dict()
        return payload

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "PermissionsConfig":
        config = cls.default()
        config.default_level = _coerce_level(payload["default_level"])

        for key, raw in (payload.get("operations") or {}).items():
            config.operations[str(key)] = OperationConfig(
                enabled=bool(raw["enabled"]),
                require_confirmation=raw.get("require_confirmation"),
            )

        confirmation = payload.get("require_confirmation") or {}
        for name, value in confirmation.items():
            setattr(config.require_confirmation, name, bool(value))

        scopes = payload.get("scope_permissions") or {}
        for name, value in scopes.items():
            setattr(config.scope_permissions, name, bool(value))

        return config

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "PermissionsConfig":
        config_path = path or permissions_config_path()
        try:
            text = config_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("no permissions config at %s, using defaults", config_path)
            return cls.default()
        except OSError as exc:
            raise ConfigInvalidError(config_path, f"cannot read file: {exc}") from exc

        try:
            payload = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigInvalidError(config_path, f"malformed YAML: {exc}") from exc

        if payload is None:
            return cls.default()

        error = next(iter(_VALIDATOR.iter_errors(payload)), None)
        if error is not None:
            raise ConfigInvalidError(config_path, format_schema_error(error))

        config = cls.from_dict(payload)
        result = config.validate()
        if not result.valid:
            raise ConfigInvalidError(config_path, str(result.error()))
        for warning in result.warnings:
            logger.warning("%s: %s", config_path, warning)
        return config

    def save(self, path: Optional[Path] = None) -> Path:
        config_path = path or permissions_config_path()
        result = self.validate()
        if not result.valid:
            raise ConfigInvalidError(config_path, f"cannot save invalid config: {result.error()}")

        config_path.parent.mkdir(mode=CONFIG_DIR_MODE, parents=True, exist_ok=True)
        text = yaml.safe_dump(self.to_dict(), default_flow_style=False, sort_keys=False)
        config_path.write_text(text, encoding="utf-8")
        os.chmod(config_path, CONFIG_FILE_MODE)
        logger.debug("saved permissions config to %s", config_path)
        return config_path


_OPERATION_KEYS: frozenset[str] = frozenset(op.value for op in OperationType)


def _coerce_level(value: Any) -> PermissionLevel | str:
    if PermissionLevel.is_valid(value):
        return PermissionLevel(value)
    return str(value)


def _raw_value(value: PermissionLevel | str) -> str:
    return value.value if isinstance(value, PermissionLevel) else str(value)
