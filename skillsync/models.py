from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class Platform(str, Enum):
    CLAUDE_CODE = "claude-code"
    CURSOR = "cursor"
    CODEX = "codex"


class Scope(str, Enum):
    USER = "user"
    REPO = "repo"
    SYSTEM = "system"
    ADMIN = "admin"
    BUILTIN = "builtin"
    PLUGIN = "plugin"

    @property
    def description(self) -> str:
        return SCOPE_DESCRIPTIONS[self]


SCOPE_DESCRIPTIONS: dict[Scope, str] = {
    Scope.USER: "User-level skills in the user's home directory",
    Scope.REPO: "Repository-level skills local to a specific project",
    Scope.SYSTEM: "System-wide skills installed at the system level",
    Scope.ADMIN: "Administrator-defined skills",
    Scope.BUILTIN: "Built-in skills that ship with the platform",
    Scope.PLUGIN: "Skills installed through a platform plugin",
}

_SCOPE_ALIASES: dict[str, Scope] = {
    "repository": Scope.REPO,
    "project": Scope.REPO,
    "local": Scope.REPO,
    "global": Scope.USER,
    "home": Scope.USER,
    "administrator": Scope.ADMIN,
    "sys": Scope.SYSTEM,
    "default": Scope.BUILTIN,
    "built-in": Scope.BUILTIN,
}

_PLATFORM_ALIASES: dict[str, Platform] = {
    "claude": Platform.CLAUDE_CODE,
    "claudecode": Platform.CLAUDE_CODE,
    "claude_code": Platform.CLAUDE_CODE,
}


@dataclass(frozen=True)
class PlatformMetadata:
    platform: Platform
    label: str
    config_dir_name: str
    extensions: tuple[str, ...]

    def accepts_extension(self, extension: str) -> bool:
        return extension in self.extensions


PLATFORM_CATALOG: dict[Platform, PlatformMetadata] = {
    Platform.CLAUDE_CODE: PlatformMetadata(
        platform=Platform.CLAUDE_CODE,
        label="Claude Code",
        config_dir_name=".claude",
        extensions=(".md", ".txt", ""),
    ),
    Platform.CURSOR: PlatformMetadata(
        platform=Platform.CURSOR,
        label="Cursor",
        config_dir_name=".cursor",
        extensions=(".md", ".mdc"),
    ),
    Platform.CODEX: PlatformMetadata(
        platform=Platform.CODEX,
        label="Codex",
        config_dir_name=".codex",
        extensions=(".json",),
    ),
}


def platform_metadata(platform: Platform | str) -> PlatformMetadata:
    platform_id = platform if isinstance(platform, Platform) else Platform(platform)
    return PLATFORM_CATALOG[platform_id]


def platform_label(platform: Platform | str) -> str:
    return platform_metadata(platform).label


def parse_platform(value: str) -> Platform:
    normalized = value.strip().lower()
    try:
        return Platform(normalized)
    except ValueError:
        pass
    if normalized in _PLATFORM_ALIASES:
        return _PLATFORM_ALIASES[normalized]
    valid = ", ".join(item.value for item in Platform)
    raise ValueError(f"unknown platform {value!r} (valid: {valid})")


def parse_scope(value: str) -> Scope:
    normalized = value.strip().lower()
    try:
        return Scope(normalized)
    except ValueError:
        pass
    if normalized in _SCOPE_ALIASES:
        return _SCOPE_ALIASES[normalized]
    valid = ", ".join(item.value for item in Scope)
    raise ValueError(f"unknown scope {value!r} (valid: {valid})")


@dataclass(frozen=True)
class Skill:
    name: str
    platform: Platform | str
    path: Optional[Path] = None
    content: str = ""
    metadata: dict[str, str] = field(default_factory=dict)
    scope: Optional[Scope] = None

    @property
    def extension(self) -> str:
        if self.path is None:
            return ""
        return self.path.suffix

    @property
    def basename(self) -> str:
        if self.path is None:
            return ""
        return self.path.name
