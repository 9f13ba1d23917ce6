"""Domain error types."""


class ScribeError(Exception):
    """Base class for every error raised by the capture/summarize pipeline."""


class ValidationError(ScribeError):
    """Raised when user-supplied input cannot be used to finish a session."""


class EmptyInputError(ScribeError):
    """Raised when a summarizer is asked to summarize an empty transcript."""


class SummarizationFailure(ScribeError):
    """Raised when the summarization backend could not produce a result. Retryable."""


class SummaryInProgressError(ScribeError):
    """Raised when finishing is requested while a summary is already pending."""
