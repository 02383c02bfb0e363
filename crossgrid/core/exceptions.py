"""Custom exception hierarchy for crossword solving."""


class CrosswordError(Exception):
    """Base exception for solver failures."""


class ConfigurationError(CrosswordError, ValueError):
    """Raised when solver or metric settings are out of range."""


class WordListError(CrosswordError, ValueError):
    """Raised when the word list is unreadable or holds blank entries."""


class ValidationError(CrosswordError):
    """Raised when the crossword integrity checks fail."""
