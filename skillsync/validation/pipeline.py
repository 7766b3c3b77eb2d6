"""Pre-flight validation for sync operations.

The pipeline never raises for findings: every check appends to a
``ValidationResult`` and the walk always runs to the end, so callers get the
full list of problems in one pass. Check order is source directory, target
directory, per-skill checks, name uniqueness, target conflicts and finally the
write-permission check.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from skillsync.constants import WRITE_TEST_PREFIX
from skillsync.errors import ErrorKind, PlatformPathError
from skillsync.models import Platform, Skill, platform_metadata
from skillsync.paths import get_platform_path
from skillsync.security.detector import validate_skill_content
from skillsync.validation.result import ValidationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationOptions:
    strict_mode: bool = False
    check_conflicts: bool = True
    require_write_permission: bool = True
    detect_sensitive: bool = True


def validate_source_target(
    source: Platform | str,
    target: Platform | str,
    skills: Sequence[Skill],
    options: Optional[ValidationOptions] = None,
) -> ValidationResult:
    opts = options or ValidationOptions()
    result = ValidationResult()

    logger.debug("validating source platform %s", getattr(source, "value", source))
    _check_platform_dir(result, source, role="source", must_exist=True)

    logger.debug("validating target platform %s", getattr(target, "value", target))
    target_path = _check_platform_dir(result, target, role="target", must_exist=False)

    logger.debug("validating %d skill(s)", len(skills))
    for index, skill in enumerate(skills):
        _check_skill(result, index, skill, opts, check_filesystem=True)
        if opts.detect_sensitive and skill.content:
            result.extend(validate_skill_content(skill.content, skill.name or f"skills[{index}]"))
    _check_unique_names(result, skills)

    if target_path is not None:
        if opts.check_conflicts:
            _check_conflicts(result, target_path, skills)
        if opts.require_write_permission:
            _check_write_permission(result, target_path)

    if not skills:
        result.add_warning("No skills found to sync")

    logger.debug("validation finished: %s", result.summary())
    return result


def validate_skills_format(
    skills: Sequence[Skill],
    platform: Platform | str,
    options: Optional[ValidationOptions] = None,
) -> ValidationResult:
    opts = options or ValidationOptions()
    result = ValidationResult()

    if not skills:
        result.add_warning("No skills to validate")
        return result

    expected = getattr(platform, "value", platform)
    for index, skill in enumerate(skills):
        _check_skill(result, index, skill, opts, check_filesystem=False)
        actual = getattr(skill.platform, "value", skill.platform)
        if actual != expected:
            result.add_error(
                f"skills[{index}].platform",
                f"skill platform {actual!r} does not match expected platform {expected!r}",
                kind=ErrorKind.PLATFORM_MISMATCH,
            )
    _check_unique_names(result, skills)
    return result


def validate_path(path: Path | str, platform: Platform | str) -> ValidationResult:
    result = ValidationResult()

    try:
        Platform(platform)
    except ValueError:
        result.add_error(
            "platform",
            f"unsupported platform {getattr(platform, 'value', platform)!r}",
            kind=ErrorKind.UNKNOWN_PLATFORM,
        )

    if not str(path):
        result.add_error("path", "path cannot be empty", kind=ErrorKind.EMPTY_PATH)
        return result

    abs_path = Path(path).expanduser().absolute()
    _check_directory(result, "path", abs_path, must_exist=True)
    return result


def _check_platform_dir(
    result: ValidationResult,
    platform: Platform | str,
    role: str,
    must_exist: bool,
) -> Optional[Path]:
    field = f"{role}.platform"
    try:
        path = get_platform_path(platform)
    except PlatformPathError as exc:
        result.add_error(
            field,
            f"cannot determine {role} platform path",
            cause=exc,
            kind=ErrorKind.UNKNOWN_PLATFORM,
        )
        return None

    _check_directory(result, field, path, must_exist=must_exist)
    return path


def _check_directory(
    result: ValidationResult, field: str, path: Path, must_exist: bool
) -> None:
    if not path.exists():
        if must_exist:
            result.add_error(
                field, f"path does not exist: {path}", kind=ErrorKind.PATH_MISSING
            )
        return
    if not path.is_dir():
        result.add_error(
            field, f"path is not a directory: {path}", kind=ErrorKind.PATH_NOT_DIRECTORY
        )
        return
    if not os.access(path, os.R_OK | os.X_OK):
        result.add_error(
            field, f"cannot access path: {path}", kind=ErrorKind.PATH_UNREADABLE
        )


def _skill_path(skill: Skill) -> Optional[Path]:
    if skill.path is None or not str(skill.path):
        return None
    return Path(skill.path)


def _check_skill(
    result: ValidationResult,
    index: int,
    skill: Skill,
    opts: ValidationOptions,
    check_filesystem: bool,
) -> None:
    prefix = f"skills[{index}]"
    label = skill.name or prefix

    if not skill.name:
        result.add_error(
            f"{prefix}.name", "skill name cannot be empty", kind=ErrorKind.EMPTY_NAME
        )

    path = _skill_path(skill)
    if path is None:
        result.add_error(
            f"{prefix}.path", "skill path cannot be empty", kind=ErrorKind.EMPTY_PATH
        )
    elif check_filesystem and not _is_readable_file(path):
        message = f"skill {label!r} path not accessible: {path}"
        if opts.strict_mode:
            result.add_error(f"{prefix}.path", message, kind=ErrorKind.PATH_UNREADABLE)
        else:
            result.add_warning(message)

    if path is not None:
        _check_extension(result, prefix, skill, path)

    if not skill.content:
        if opts.strict_mode:
            result.add_error(
                f"{prefix}.content",
                "skill content cannot be empty in strict mode",
                kind=ErrorKind.EMPTY_CONTENT_STRICT,
            )
        else:
            result.add_warning(f"skill {label!r} has empty content")


def _check_extension(
    result: ValidationResult, prefix: str, skill: Skill, path: Path
) -> None:
    try:
        metadata = platform_metadata(skill.platform)
    except ValueError:
        result.add_error(
            f"{prefix}.platform",
            f"unsupported platform {getattr(skill.platform, 'value', skill.platform)!r}",
            kind=ErrorKind.UNKNOWN_PLATFORM,
        )
        return

    extension = path.suffix
    if metadata.accepts_extension(extension):
        return
    expected = ", ".join(ext or "no extension" for ext in metadata.extensions)
    result.add_error(
        f"{prefix}.extension",
        f"invalid file extension {extension!r} for {metadata.label} skill (expected {expected})",
        kind=ErrorKind.BAD_EXTENSION,
    )


def _check_unique_names(result: ValidationResult, skills: Sequence[Skill]) -> None:
    seen: set[str] = set()
    for index, skill in enumerate(skills):
        if not skill.name:
            continue
        if skill.name in seen:
            result.add_error(
                f"skills[{index}].name",
                f"duplicate skill name {skill.name!r}",
                kind=ErrorKind.DUPLICATE_NAME,
            )
        seen.add(skill.name)


def _check_conflicts(
    result: ValidationResult, target_path: Path, skills: Sequence[Skill]
) -> None:
    if not target_path.is_dir():
        return
    for skill in skills:
        path = _skill_path(skill)
        if path is None:
            continue
        candidate = target_path / path.name
        if candidate.exists():
            result.add_warning(
                f"{ErrorKind.TARGET_FILE_EXISTS.value}: skill {skill.name!r} "
                f"already exists in target as {candidate} (may be overwritten)"
            )


def _check_write_permission(result: ValidationResult, target_path: Path) -> None:
    check_dir = _nearest_existing_dir(target_path)
    if check_dir is None:
        return
    try:
        handle, scratch = tempfile.mkstemp(prefix=WRITE_TEST_PREFIX, dir=check_dir)
    except OSError as exc:
        result.add_error(
            "target.write_permission",
            f"target directory is not writable: {check_dir}",
            cause=exc,
            kind=ErrorKind.WRITE_PERMISSION_DENIED,
        )
        return
    os.close(handle)
    os.unlink(scratch)


def _nearest_existing_dir(path: Path) -> Optional[Path]:
    for candidate in (path, *path.parents):
        if candidate.exists():
            return candidate if candidate.is_dir() else None
    return None


def _is_readable_file(path: Path) -> bool:
    return path.is_file() and os.access(path, os.R_OK)
