"""Built-in catalogue of sensitive-data patterns."""

import re
from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class SensitivePattern:
    name: str
    pattern: re.Pattern[str]
    description: str
    severity: Severity


def default_patterns() -> list[SensitivePattern]:
    return [
        SensitivePattern(
            name="API Key",
            pattern=re.compile(
                r"(?i)(api[_-]?key|apikey)\s*[:=]\s*['\"]?[a-zA-Z0-9_\-]{16,}['\"]?"
            ),
            description="API key pattern detected",
            severity=Severity.WARNING,
        ),
        SensitivePattern(
            name="Token",
            pattern=re.compile(
                r"(?i)(token|access[_-]?token|auth[_-]?token)\s*[:=]\s*['\"]?[a-zA-Z0-9_\-\.]{16,}['\"]?"
            ),
            description="Authentication token pattern detected",
            severity=Severity.WARNING,
        ),
        SensitivePattern(
            name="Password",
            pattern=re.compile(
                r"(?i)(password|passwd|pwd)\s*[:=]\s*['\"]?[a-zA-Z0-9_\-@!#$%^&*()]{8,}['\"]?"
            ),
            description="Password pattern detected",
            severity=Severity.WARNING,
        ),
        SensitivePattern(
            name="AWS Access Key",
            pattern=re.compile(
                r"(?i)(aws[_-]?access[_-]?key[_-]?id|aws[_-]?key)\s*[:=]\s*['\"]?AKIA[A-Z0-9]{16}['\"]?"
            ),
            description="AWS access key detected",
            severity=Severity.ERROR,
        ),
        SensitivePattern(
            name="AWS Secret Key",
            pattern=re.compile(
                r"(?i)(aws[_-]?secret[_-]?access[_-]?key|aws[_-]?secret)\s*[:=]\s*['\"]?[a-zA-Z0-9/+]{40}['\"]?"
            ),
            description="AWS secret key detected",
            severity=Severity.ERROR,
        ),
        SensitivePattern(
            name="GitHub Token",
            pattern=re.compile(
                r"(?i)(github[_-]?token|gh[_-]?token)\s*[:=]\s*['\"]?ghp_[a-zA-Z0-9]{36,}['\"]?"
            ),
            description="GitHub personal access token detected",
            severity=Severity.ERROR,
        ),
        SensitivePattern(
            name="Private Key",
            pattern=re.compile(r"-----BEGIN\s+(RSA\s+)?PRIVATE\s+KEY-----"),
            description="Private key detected",
            severity=Severity.ERROR,
        ),
        SensitivePattern(
            name="Generic Secret",
            pattern=re.compile(
                r"(?i)(secret|secret[_-]?key)\s*[:=]\s*['\"]?[a-zA-Z0-9_\-]{16,}['\"]?"
            ),
            description="Generic secret pattern detected",
            severity=Severity.WARNING,
        ),
        SensitivePattern(
            name="Bearer Token",
            pattern=re.compile(r"(?i)bearer\s+[a-zA-Z0-9_\-\.]{20,}"),
            description="Bearer token detected",
            severity=Severity.WARNING,
        ),
        SensitivePattern(
            name="Database Connection String",
            pattern=re.compile(r"(?i)(postgres|mysql|mongodb|redis)://[^:]+:[^@]+@"),
            description="Database connection string with credentials detected",
            severity=Severity.ERROR,
        ),
    ]
