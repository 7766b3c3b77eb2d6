"""Shared validation outcome carrier.

Every analysis component reports through ``ValidationResult`` instead of
raising: errors are structured ``ValidationError`` values tagged with a dotted
field selector (``skills[0].name``, ``skill:<name>:content``), warnings are
plain strings, and validity is derived from the error list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from skillsync.errors import SKILL_INVALID_KINDS, ErrorKind, SkillSyncError


class ValidationError(SkillSyncError):
    def __init__(
        self,
        field: str,
        message: str,
        cause: Optional[BaseException] = None,
        kind: Optional[ErrorKind] = None,
    ) -> None:
        self.field = field
        self.message = message
        self.cause = cause
        self.kind = kind  # type: ignore[misc]
        super().__init__(self._format())

    def __reduce__(self):
        return (ValidationError, (self.field, self.message, self.cause, self.kind))

    @property
    def is_skill_invalid(self) -> bool:
        return self.kind in SKILL_INVALID_KINDS

    def _format(self) -> str:
        if self.cause is not None:
            return f'validation failed for "{self.field}": {self.message}: {self.cause}'
        return f'validation failed for "{self.field}": {self.message}'

    def with_field(self, field: str) -> "ValidationError":
        return ValidationError(field, self.message, cause=self.cause, kind=self.kind)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return (
            self.field == other.field
            and self.message == other.message
            and self.kind == other.kind
        )

    def __hash__(self) -> int:
        return hash((self.field, self.message, self.kind))


class ValidationErrors(SkillSyncError):
    def __init__(self, errors: list[ValidationError]) -> None:
        self.errors = list(errors)
        super().__init__(self._format())

    def __reduce__(self):
        return (ValidationErrors, (self.errors,))

    def _format(self) -> str:
        if not self.errors:
            return "no validation errors"
        if len(self.errors) == 1:
            return str(self.errors[0])
        lines = "\n".join(f"- {error}" for error in self.errors)
        return f"{len(self.errors)} validation errors:\n{lines}"


@dataclass
class ValidationResult:
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def add_error(
        self,
        field: str,
        message: str,
        cause: Optional[BaseException] = None,
        kind: Optional[ErrorKind] = None,
    ) -> ValidationError:
        error = ValidationError(field, message, cause=cause, kind=kind)
        self.errors.append(error)
        return error

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def has_errors(self) -> bool:
        return bool(self.errors)

    def error(self) -> ValidationError | ValidationErrors | None:
        if not self.errors:
            return None
        if len(self.errors) == 1:
            return self.errors[0]
        return ValidationErrors(self.errors)

    def summary(self) -> str:
        if self.valid and not self.warnings:
            return "All validations passed"
        message = "Validation passed with warnings" if self.valid else "Validation failed"
        if self.warnings:
            message += f" ({len(self.warnings)} warning(s))"
        return message

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        return ValidationResult(
            errors=[*self.errors, *other.errors],
            warnings=[*self.warnings, *other.warnings],
        )

    def extend(self, other: "ValidationResult") -> None:
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
