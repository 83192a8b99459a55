"""
QuizPulse exceptions.

The scoring and aggregation engines never raise; these are used by the
editor, the service layer and the storage backends.
"""


class QuizPulseError(Exception):
    """Base class for all QuizPulse errors."""
    pass


class QuizNotFoundError(QuizPulseError):
    """Raised when a quiz id does not resolve to a stored quiz."""

    def __init__(self, quiz_id: str):
        super().__init__(f"Quiz not found: {quiz_id}")
        self.quiz_id = quiz_id


class QuizValidationError(QuizPulseError):
    """Raised when a quiz cannot be saved or an edit is not allowed."""
    pass


class AccessDeniedError(QuizPulseError):
    """Raised by the demo-mode guard on a wrong or missing PIN."""
    pass


class StorageError(QuizPulseError):
    """Raised when a storage backend cannot complete an operation."""
    pass
