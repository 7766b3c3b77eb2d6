from skillsync.security.detector import (
    Detection,
    Detector,
    scan_content,
    validate_skill_content,
)
from skillsync.security.patterns import SensitivePattern, Severity, default_patterns

__all__ = [
    "Detection",
    "Detector",
    "SensitivePattern",
    "Severity",
    "default_patterns",
    "scan_content",
    "validate_skill_content",
]
