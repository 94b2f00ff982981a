"""Tests for privacy_assistant.utils.errors."""

from __future__ import annotations

from privacy_assistant.utils.errors import NormalizationError, PrivacyAssistantError, get_error_message


class TestGetErrorMessage:
    def test_exception_message(self) -> None:
        assert get_error_message(ValueError("bad input")) == "bad input"

    def test_empty_message_falls_back_to_class_name(self) -> None:
        assert get_error_message(RuntimeError()) == "RuntimeError"

    def test_non_exception(self) -> None:
        assert get_error_message("oops") == "Unknown error"
        assert get_error_message(None) == "Unknown error"


class TestHierarchy:
    def test_normalization_error_is_assistant_error(self) -> None:
        assert issubclass(NormalizationError, PrivacyAssistantError)
        assert get_error_message(NormalizationError("bad schema")) == "bad schema"
