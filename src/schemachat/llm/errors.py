from __future__ import annotations


class LLMError(RuntimeError):
    pass


class ConfigurationError(LLMError):
    """Raised at construction time when connection or auth settings are unusable."""


class EmptyCompletionError(LLMError):
    """Raised when the vendor response carries no completion message."""

    def __init__(self, message: str = "No completion message found in response"):
        super().__init__(message)


class ModelResponseError(LLMError):
    """The model answered, but the answer could not be turned into the expected type.

    This is the one failure where resubmitting the same (or an adjusted) prompt
    is a reasonable strategy. The underlying parse failure is kept in `detail`.
    """

    MESSAGE = (
        "The response could not be parsed as the expected type; "
        "retrying and/or adjusting the prompt may help."
    )

    def __init__(self, detail: BaseException):
        super().__init__(self.MESSAGE)
        self.detail = detail
