"""Load skill files (optionally with YAML frontmatter) from platform directories."""

from __future__ import annotations

import logging
import re
from pathlib import Path

import yaml

from skillsync.constants import SKILL_FILENAME
from skillsync.models import Platform, Skill, platform_metadata

logger = logging.getLogger(__name__)

_FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*\n", re.DOTALL)


def split_frontmatter(text: str) -> tuple[dict, str]:
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        raw = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as exc:
        logger.debug("ignoring malformed frontmatter: %s", exc)
        return {}, text
    if not isinstance(raw, dict):
        return {}, text
    return raw, text[match.end() :]


def parse_skill(path: Path, platform: Platform) -> Skill:
    text = path.read_text(encoding="utf-8")
    default_name = path.parent.name if path.name == SKILL_FILENAME else path.stem

    raw, content = split_frontmatter(text)
    metadata = {
        str(key): str(value)
        for key, value in raw.items()
        if isinstance(value, (str, int, float, bool))
    }
    name = str(raw.get("name") or default_name)
    return Skill(
        name=name,
        platform=platform,
        path=path,
        content=content,
        metadata=metadata,
    )


def discover_skills(root: Path, platform: Platform) -> list[Skill]:
    if not root.exists() or not root.is_dir():
        return []

    extensions = platform_metadata(platform).extensions
    skills: list[Skill] = []
    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        if any(part.startswith(".") for part in path.relative_to(root).parts):
            continue
        if path.suffix not in extensions:
            continue
        try:
            skills.append(parse_skill(path, platform))
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("skipping unreadable skill file %s: %s", path, exc)
    return skills
