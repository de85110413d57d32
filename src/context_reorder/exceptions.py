"""Exception hierarchy for context-reorder."""


class ReorderError(Exception):
    """Base exception for all context-reorder errors."""


class ValidationError(ReorderError, ValueError):
    """Raised when configuration or chunk input is malformed.

    Always fatal to the current call and never retried.
    """


class TokenizerError(ReorderError):
    """Raised when token counting encounters an error."""
