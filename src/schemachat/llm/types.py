from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal

Role = Literal["system", "user", "assistant"]

JsonSchema = Dict[str, Any]

SCHEMA_NAME = "LlmResponseSchema"


@dataclass(frozen=True)
class Message:
    role: Role
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class StructuredOutputDescriptor:
    """Vendor-neutral "structured output" request field."""

    schema: JsonSchema
    strict: bool
    name: str = SCHEMA_NAME
    kind: str = "json_schema"

    def to_response_format(self) -> dict[str, Any]:
        return {
            "type": self.kind,
            "json_schema": {
                "name": self.name,
                "schema": self.schema,
                "strict": self.strict,
            },
        }
