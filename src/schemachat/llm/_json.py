from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Iterator

from pydantic import ValidationError

from .errors import ModelResponseError

_JSON_FENCE = "```json"
_FENCE = "```"

_CONVERSION_ERRORS = (json.JSONDecodeError, ValidationError)
_CONVERSION_MARKER = "ConversionError"


def extract_json_block(text: str) -> str:
    """Locate the JSON payload inside a model answer.

    Prefers a ```json fence, then a bare ``` fence; the block ends at the last
    ``` in the text. Without both an opening and a closing marker the whole
    text is returned untouched.

    A text holding a single fence marker uses it as both start and end, which
    slices to an empty string.
    """

    start = text.find(_JSON_FENCE)
    delim_length = len(_JSON_FENCE)
    if start == -1:
        start = text.find(_FENCE)
        delim_length = len(_FENCE)

    end = text.rfind(_FENCE)

    if start == -1 or end == -1:
        return text
    return text[start + delim_length : end].strip()


def is_conversion_error(error: BaseException) -> bool:
    if isinstance(error, _CONVERSION_ERRORS):
        return True
    return _CONVERSION_MARKER in type(error).__name__ or _CONVERSION_MARKER in str(
        error
    )


def classify_error(error: BaseException) -> BaseException:
    """Rewrap JSON/type conversion failures as ModelResponseError.

    Any other failure is returned as-is so callers keep its original identity.
    """

    if isinstance(error, ModelResponseError):
        return error
    if is_conversion_error(error):
        return ModelResponseError(error)
    return error


@contextmanager
def classified_errors() -> Iterator[None]:
    try:
        yield
    except Exception as e:
        classified = classify_error(e)
        if classified is e:
            raise
        raise classified from e


def parse_completion(text: str) -> Any:
    """Extract and parse the JSON value from raw completion text.

    Every failure raised by the JSON parser is a ModelResponseError, including
    the int digit limit (ValueError) and deep nesting (RecursionError).
    """

    candidate = extract_json_block(text)
    try:
        return json.loads(candidate)
    except (ValueError, RecursionError) as e:
        raise ModelResponseError(e) from e
