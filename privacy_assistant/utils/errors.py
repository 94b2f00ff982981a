"""
Exception types and error message extraction.
"""


class PrivacyAssistantError(Exception):
    """Base class for errors raised outside the pure engines."""


class NormalizationError(PrivacyAssistantError):
    """A normalized analysis record failed structural validation."""


def get_error_message(error: BaseException | object) -> str:
    """
    Safely extract an error message from an unknown error type.

    Falls back to the exception class name when the message is empty.
    """
    if isinstance(error, Exception):
        return str(error) or type(error).__name__
    return "Unknown error"
