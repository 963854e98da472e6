from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

import httpx

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


class AzureOpenAIModel(Model):
    """Azure OpenAI deployment, called over plain HTTP.

    `http_client` must have the service URL (e.g.
    ``https://<resource>.openai.azure.com/openai``) as its base_url.
    """

    # Azure requests are sent with strict schemas, OpenAI ones are not.
    STRICT = True

    def __init__(
        self,
        http_client: httpx.Client,
        *,
        deployment_id: str,
        api_version: str,
        api_key: str,
    ):
        if not deployment_id:
            raise ConfigurationError("Azure OpenAI deployment id is required")
        if not api_version:
            raise ConfigurationError("Azure OpenAI api version is required")
        if not api_key:
            raise ConfigurationError("Azure OpenAI api key is required")

        self._http = http_client
        self._deployment_id = deployment_id
        self._api_version = api_version
        self._api_key = api_key
        self._path = f"/deployments/{quote(deployment_id, safe='')}/chat/completions"

    @classmethod
    def from_connection(
        cls,
        connection: ConnectionConfig,
        *,
        deployment_id: str,
        api_version: str,
        service_url: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "AzureOpenAIModel":
        base_url = service_url or connection.service_url
        if not base_url:
            raise ConfigurationError("Azure OpenAI requires a service URL")

        api_key = api_key_from_auth(connection.auth)
        settings = to_http_client_settings(connection)
        http_client = build_http_client(settings, base_url=base_url, transport=transport)
        return cls(
            http_client,
            deployment_id=deployment_id,
            api_version=api_version,
            api_key=api_key,
        )

    @property
    def deployment_id(self) -> str:
        return self._deployment_id

    def call(self, prompt: str, schema: JsonSchema) -> Any:
        message = Message(role="user", content=augment_prompt(prompt, schema))
        body = {
            "messages": [message.to_dict()],
            "response_format": wrap_schema(
                schema, strict=self.STRICT
            ).to_response_format(),
        }

        log.debug(
            "Azure OpenAI chat completion request deployment=%s api-version=%s",
            self._deployment_id,
            self._api_version,
        )
        resp = self._http.post(
            self._path,
            params={"api-version": self._api_version},
            headers={"api-key": self._api_key},
            json=body,
        )
        resp.raise_for_status()

        content = completion_content(resp.json())
        try:
            return parse_completion(content)
        except ModelResponseError as e:
            log.warning("Azure OpenAI response was not valid JSON. err=%s", e.detail)
            raise
