from skillsync.validation.result import (
    ValidationError,
    ValidationErrors,
    ValidationResult,
)
from skillsync.validation.pipeline import (
    ValidationOptions,
    validate_path,
    validate_skills_format,
    validate_source_target,
)

__all__ = [
    "ValidationError",
    "ValidationErrors",
    "ValidationOptions",
    "ValidationResult",
    "validate_path",
    "validate_skills_format",
    "validate_source_target",
]
