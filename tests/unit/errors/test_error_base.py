import pytest

from kestrel.errors import (
    INTERNAL,
    ErrorCategory,
    ErrorCode,
    ErrorRegistry,
    ErrorSeverity,
    KestrelError,
    registry,
)


class SampleError(KestrelError):
    pass


SAMPLE = ErrorCategory.get_or_create("SAMPLE")
SAMPLE_CHILD = ErrorCategory.get_or_create("SAMPLE_CHILD", SAMPLE)
SAMPLE_FAILED = ErrorCode.get_or_create("SAMPLE_FAILED", SAMPLE_CHILD)


def test_base_error_cannot_be_instantiated():
    with pytest.raises(TypeError):
        KestrelError("x", SAMPLE_FAILED)


def test_code_must_be_error_code():
    with pytest.raises(TypeError):
        SampleError("x", "SAMPLE_FAILED")  # type: ignore[arg-type]


def test_error_attributes():
    error = SampleError("went wrong", SAMPLE_FAILED, context={"a": 1}, b=2)

    assert error.message == "went wrong"
    assert error.category == SAMPLE_CHILD
    assert error.severity is ErrorSeverity.ERROR
    assert error.context == {"a": 1, "b": 2}
    assert str(error) == "SAMPLE_FAILED: went wrong"
    assert error.add_context("c", 3) is error
    assert error.to_dict()["context"] == {"a": 1, "b": 2, "c": 3}


def test_registry_is_a_singleton():
    assert ErrorRegistry() is registry


def test_categories_and_codes_are_interned():
    assert ErrorCategory.get_or_create("SAMPLE") is SAMPLE
    assert ErrorCode.get_or_create("SAMPLE_FAILED", SAMPLE_CHILD) is SAMPLE_FAILED
    assert ErrorCategory.get_by_name("SAMPLE_CHILD") is SAMPLE_CHILD


def test_category_hierarchy():
    assert SAMPLE_CHILD.is_subcategory_of(SAMPLE)
    assert not SAMPLE.is_subcategory_of(SAMPLE_CHILD)
    assert not SAMPLE.is_subcategory_of(INTERNAL)
    assert SAMPLE_FAILED in ErrorCode.filter_by_category(SAMPLE)


def test_unknown_code_lookup():
    with pytest.raises(ValueError):
        ErrorCode.get_by_code("NO_SUCH_CODE")
    assert ErrorCode.get_by_code("NO_SUCH_CODE", raise_if_missing=False) is None
