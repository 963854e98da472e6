from __future__ import annotations

from typing import Any, Optional

import httpx
from openai import OpenAI, OpenAIError

from schemachat import logger as logger_mod

from ._json import parse_completion
from ._schema import augment_prompt, wrap_schema
from .base import Model, completion_content
from .connection import (
    ConnectionConfig,
    api_key_from_auth,
    build_http_client,
    to_http_client_settings,
)
from .errors import ConfigurationError, ModelResponseError
from .types import JsonSchema, Message

log = logger_mod.get_logger()


class OpenAIModel(Model):
    """OpenAI chat completions with a json_schema response_format.

    The SDK client is supplied ready-made, or built by `from_connection`.
    """

    STRICT = False

    def __init__(self, client: Any, *, model: str):
        if not model:
            raise ConfigurationError("OpenAI model name is required")
        self._client = client
        self._model = model

    @classmethod
    def from_connection(
        cls,
        connection: ConnectionConfig,
        *,
        model: str,
        service_url: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "OpenAIModel":
        api_key = api_key_from_auth(connection.auth)
        settings = to_http_client_settings(connection)

        kwargs: dict[str, Any] = {
            "api_key": api_key,
            "http_client": build_http_client(settings, transport=transport),
        }
        base_url = service_url or connection.service_url
        if base_url:
            kwargs["base_url"] = base_url
        if settings.timeout is not None:
            kwargs["timeout"] = settings.timeout
        if settings.retries is not None:
            kwargs["max_retries"] = settings.retries

        try:
            client = OpenAI(**kwargs)
        except OpenAIError as e:
            raise ConfigurationError(f"Unable to create OpenAI client: {e}") from e
        return cls(client, model=model)

    @property
    def model(self) -> str:
        return self._model

    def call(self, prompt: str, schema: JsonSchema) -> Any:
        message = Message(role="user", content=augment_prompt(prompt, schema))
        response_format = wrap_schema(schema, strict=self.STRICT).to_response_format()

        log.debug("OpenAI chat completion request model=%s", self._model)
        resp = self._client.chat.completions.create(
            model=self._model,
            messages=[message.to_dict()],
            response_format=response_format,
        )

        content = completion_content(resp)
        try:
            return parse_completion(content)
        except ModelResponseError as e:
            log.warning("OpenAI response was not valid JSON. err=%s", e.detail)
            raise
