"""On-disk locations for platform skill directories and skillsync config."""

import os
import re
from pathlib import Path
from typing import Optional

from skillsync.constants import (
    GIT_DIRNAME,
    PERMISSIONS_FILENAME,
    PLATFORM_PATH_ENV_PREFIX,
    PLATFORM_PATH_ENV_SUFFIX,
    SKILLS_DIRNAME,
    SKILLSYNC_DIRNAME,
    SKILLSYNC_HOME_ENV,
)
from skillsync.errors import PlatformPathError
from skillsync.models import Platform, Scope, platform_metadata

_ENV_UNSAFE_RE = re.compile(r"[^A-Z0-9]")

RESOLVABLE_SCOPES: tuple[Scope, ...] = (Scope.USER, Scope.REPO)


def platform_env_var(platform: Platform | str) -> str:
    value = platform.value if isinstance(platform, Platform) else str(platform)
    name = _ENV_UNSAFE_RE.sub("_", value.upper())
    return f"{PLATFORM_PATH_ENV_PREFIX}{name}{PLATFORM_PATH_ENV_SUFFIX}"


def find_repo_root(start: Optional[Path] = None) -> Optional[Path]:
    current = (start or Path.cwd()).absolute()
    for candidate in (current, *current.parents):
        marker = candidate / GIT_DIRNAME
        if marker.is_dir() or marker.is_file():
            return candidate
    return None


def get_platform_path(platform: Platform | str) -> Path:
    return get_platform_path_for_scope(platform, Scope.USER)


def get_platform_path_for_scope(
    platform: Platform | str,
    scope: Scope | str,
    cwd: Optional[Path] = None,
) -> Path:
    platform_id = _coerce_platform(platform)
    scope_id = _coerce_scope(scope)
    if scope_id not in RESOLVABLE_SCOPES:
        raise PlatformPathError(
            f"scope {scope_id.value!r} has no resolvable path for {platform_id.value}"
        )

    override = os.environ.get(platform_env_var(platform_id), "")
    if override:
        return Path(override)

    dir_name = platform_metadata(platform_id).config_dir_name
    if scope_id == Scope.USER:
        return Path.home() / dir_name / SKILLS_DIRNAME

    repo_root = find_repo_root(cwd)
    if repo_root is None:
        raise PlatformPathError(
            f"not inside a git repository; cannot resolve repo scope for {platform_id.value}"
        )
    return (repo_root / dir_name / SKILLS_DIRNAME).resolve()


def skillsync_config_dir() -> Path:
    override = os.environ.get(SKILLSYNC_HOME_ENV, "")
    if override:
        return Path(override)
    return Path.home() / SKILLSYNC_DIRNAME


def permissions_config_path() -> Path:
    return skillsync_config_dir() / PERMISSIONS_FILENAME


def _coerce_platform(platform: Platform | str) -> Platform:
    if isinstance(platform, Platform):
        return platform
    try:
        return Platform(platform)
    except ValueError:
        raise PlatformPathError(f"unsupported platform: {platform}") from None


def _coerce_scope(scope: Scope | str) -> Scope:
    if isinstance(scope, Scope):
        return scope
    try:
        return Scope(scope)
    except ValueError:
        raise PlatformPathError(f"unknown scope: {scope}") from None
