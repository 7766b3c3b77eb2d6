"""Line-oriented scanner for secrets embedded in skill content."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from skillsync.constants import SNIPPET_MAX_LEN
from skillsync.errors import ErrorKind
from skillsync.security.patterns import SensitivePattern, Severity, default_patterns
from skillsync.validation.result import ValidationResult

CONTENT_FIELD = "content"

_COMMENT_PREFIXES = ("#", "//", "/*", "*")
_VALUE_SEPARATOR_RE = re.compile(r"[:=]")
_PLACEHOLDER_MARKERS = ("your_", "<your", "placeholder", "example_")
_PLACEHOLDER_PREFIXES = ('"xxx', "'xxx")
_PLACEHOLDER_EXACT = "xxxxxxxxxxxxx"


@dataclass(frozen=True)
class Detection:
    pattern: str
    line: int
    column: int
    content: str
    severity: Severity
    description: str

    @property
    def message(self) -> str:
        return f"{self.description} at line {self.line}: {self.content}"

    @property
    def kind(self) -> ErrorKind:
        if self.severity == Severity.ERROR:
            return ErrorKind.SENSITIVE_CONTENT_ERROR
        return ErrorKind.SENSITIVE_CONTENT_WARNING


class Detector:
    def __init__(self, patterns: Optional[Iterable[SensitivePattern]] = None) -> None:
        selected = list(patterns or [])
        self._patterns: tuple[SensitivePattern, ...] = tuple(selected or default_patterns())

    @property
    def patterns(self) -> tuple[SensitivePattern, ...]:
        return self._patterns

    def detect(self, content: str) -> list[Detection]:
        if not content:
            return []

        detections: list[Detection] = []
        for line_number, line in enumerate(content.split("\n"), start=1):
            if is_false_positive(line):
                continue
            for pattern in self._patterns:
                match = pattern.pattern.search(line)
                if match is None:
                    continue
                detections.append(
                    Detection(
                        pattern=pattern.name,
                        line=line_number,
                        column=match.start() + 1,
                        content=truncate_line(line, SNIPPET_MAX_LEN),
                        severity=Severity(pattern.severity),
                        description=pattern.description,
                    )
                )
        return detections

    def scan(self, content: str) -> ValidationResult:
        result = ValidationResult()
        for detection in self.detect(content):
            if detection.severity == Severity.ERROR:
                result.add_error(
                    CONTENT_FIELD,
                    detection.message,
                    kind=detection.kind,
                )
            else:
                result.add_warning(detection.message)
        return result


def is_false_positive(line: str) -> bool:
    trimmed = line.strip()

    if trimmed.startswith(_COMMENT_PREFIXES):
        return True

    if ":" not in trimmed and "=" not in trimmed:
        return False

    parts = [part for part in _VALUE_SEPARATOR_RE.split(trimmed) if part]
    if len(parts) < 2:
        return False

    value = parts[1].strip().lower()
    if any(marker in value for marker in _PLACEHOLDER_MARKERS):
        return True
    if value.startswith(_PLACEHOLDER_PREFIXES):
        return True
    return value == _PLACEHOLDER_EXACT


def truncate_line(line: str, max_len: int = SNIPPET_MAX_LEN) -> str:
    trimmed = line.strip()
    if len(trimmed) <= max_len:
        return trimmed
    return trimmed[: max_len - 3] + "..."


def scan_content(content: str) -> ValidationResult:
    return Detector().scan(content)


def validate_skill_content(content: str, skill_name: str) -> ValidationResult:
    result = Detector().scan(content)
    result.errors = [
        error.with_field(f"skill:{skill_name}:{error.field}") for error in result.errors
    ]
    return result
