import copy
import pickle

from skillsync.errors import ErrorKind
from skillsync.validation import ValidationError, ValidationErrors, ValidationResult


def test_empty_result_is_valid() -> None:
    result = ValidationResult()

    assert result.valid is True
    assert result.has_errors() is False
    assert result.error() is None
    assert result.summary() == "All validations passed"


def test_warning_never_flips_validity() -> None:
    result = ValidationResult()
    result.add_warning("something looks off")

    assert result.valid is True
    assert result.summary() == "Validation passed with warnings (1 warning(s))"


def test_add_error_marks_result_invalid() -> None:
    result = ValidationResult()
    error = result.add_error("skills[0].name", "skill name cannot be empty", kind=ErrorKind.EMPTY_NAME)

    assert result.valid is False
    assert result.has_errors() is True
    assert error.field == "skills[0].name"
    assert error.kind == ErrorKind.EMPTY_NAME
    assert str(error) == 'validation failed for "skills[0].name": skill name cannot be empty'


def test_summary_when_failed_counts_warnings() -> None:
    result = ValidationResult()
    result.add_error("path", "missing")
    assert result.summary() == "Validation failed"

    result.add_warning("w1")
    result.add_warning("w2")
    assert result.summary() == "Validation failed (2 warning(s))"


def test_error_includes_cause() -> None:
    result = ValidationResult()
    result.add_error("target.write_permission", "not writable", cause=PermissionError("denied"))

    assert str(result.error()) == 'validation failed for "target.write_permission": not writable: denied'


def test_error_collapses_multiple_errors() -> None:
    result = ValidationResult()
    result.add_error("a", "first")
    result.add_error("b", "second")

    collapsed = result.error()

    assert isinstance(collapsed, ValidationErrors)
    assert len(collapsed.errors) == 2
    text = str(collapsed)
    assert text.startswith("2 validation errors:")
    assert '- validation failed for "a": first' in text
    assert '- validation failed for "b": second' in text


def test_merge_concatenates_and_ands_validity() -> None:
    left = ValidationResult()
    left.add_warning("left warning")
    right = ValidationResult()
    right.add_error("x", "broken")
    right.add_warning("right warning")

    merged = left.merge(right)

    assert merged.valid is False
    assert merged.warnings == ["left warning", "right warning"]
    assert [error.field for error in merged.errors] == ["x"]
    assert left.valid is True
    assert left.warnings == ["left warning"]


def test_extend_updates_in_place() -> None:
    result = ValidationResult()
    other = ValidationResult()
    other.add_error("y", "bad")

    result.extend(other)

    assert result.valid is False
    assert result.errors == [ValidationError("y", "bad")]


def test_with_field_keeps_message_and_kind() -> None:
    error = ValidationError("content", "Private key detected", kind=ErrorKind.SENSITIVE_CONTENT_ERROR)

    moved = error.with_field("skill:deploy:content")

    assert moved.field == "skill:deploy:content"
    assert moved.message == "Private key detected"
    assert moved.kind == ErrorKind.SENSITIVE_CONTENT_ERROR
    assert error.field == "content"


def test_result_survives_deepcopy_and_pickle() -> None:
    result = ValidationResult()
    result.add_error("skills[0].name", "skill name cannot be empty", kind=ErrorKind.EMPTY_NAME)
    result.add_error(
        "target.write_permission",
        "not writable",
        cause=PermissionError("denied"),
        kind=ErrorKind.WRITE_PERMISSION_DENIED,
    )
    result.add_warning("skill 'x' has empty content")

    for restored in (copy.deepcopy(result), pickle.loads(pickle.dumps(result))):
        assert restored.valid is False
        assert restored.warnings == ["skill 'x' has empty content"]
        assert [(e.field, e.message, e.kind) for e in restored.errors] == [
            ("skills[0].name", "skill name cannot be empty", ErrorKind.EMPTY_NAME),
            ("target.write_permission", "not writable", ErrorKind.WRITE_PERMISSION_DENIED),
        ]
        assert str(restored.errors[1]) == str(result.errors[1])


def test_collapsed_errors_pickle() -> None:
    result = ValidationResult()
    result.add_error("a", "first", kind=ErrorKind.EMPTY_PATH)
    result.add_error("b", "second")

    restored = pickle.loads(pickle.dumps(result.error()))

    assert isinstance(restored, ValidationErrors)
    assert restored.errors == result.errors
    assert str(restored) == str(result.error())


def test_kind_is_per_instance() -> None:
    error = ValidationError("path", "missing", kind=ErrorKind.PATH_MISSING)

    assert error.kind == ErrorKind.PATH_MISSING
    assert ValidationError("path", "missing").kind is None


def test_is_skill_invalid_covers_skill_kinds_only() -> None:
    assert ValidationError("skills[0].name", "empty", kind=ErrorKind.EMPTY_NAME).is_skill_invalid
    assert ValidationError("skills[1].path", "dup", kind=ErrorKind.DUPLICATE_NAME).is_skill_invalid
    assert not ValidationError("source.platform", "gone", kind=ErrorKind.PATH_MISSING).is_skill_invalid
    assert not ValidationError("x", "no kind").is_skill_invalid
