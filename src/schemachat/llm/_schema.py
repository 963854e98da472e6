from __future__ import annotations

import json

from .types import JsonSchema, StructuredOutputDescriptor

_INSTRUCTIONS = (
    "\n\nThe output must be valid JSON that satisfies the JSON schema below. "
    "Wrap the JSON in a markdown code block that starts with ```json "
    "and ends with ```.\n\nJSON schema:\n"
)


def wrap_schema(schema: JsonSchema, *, strict: bool) -> StructuredOutputDescriptor:
    """Build the structured-output descriptor for a caller schema.

    The schema is passed through untouched; if it is not valid JSON Schema the
    vendor will reject the request, not us.
    """

    return StructuredOutputDescriptor(schema=schema, strict=strict)


def augment_prompt(prompt: str, schema: JsonSchema) -> str:
    """Append the fenced-JSON answer instructions and the serialized schema."""

    return prompt + _INSTRUCTIONS + json.dumps(schema)
