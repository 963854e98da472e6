from __future__ import annotations

from typing import Optional

import schemachat.config as config

from .azure_client import AzureOpenAIModel
from .base import Model
from .connection import ApiKeyAuth, ConnectionConfig, TimeoutConfig
from .errors import ConfigurationError
from .openai_client import OpenAIModel


def _default_connection(service_url: Optional[str], api_key: str) -> ConnectionConfig:
    return ConnectionConfig(
        service_url=service_url,
        auth=ApiKeyAuth(api_key) if api_key else None,
        timeout=TimeoutConfig(total_s=config.LLM_TIMEOUT_S),
    )


def build_model(
    *,
    provider: str,
    model: Optional[str] = None,
    deployment_id: Optional[str] = None,
    api_version: Optional[str] = None,
    connection: Optional[ConnectionConfig] = None,
) -> Model:
    """Factory for vendor adapters.

    Providers:
    - openai
    - azure

    Anything not passed explicitly is read from schemachat.config (env).
    """

    p = provider.lower().strip()
    if p == "openai":
        connection = connection or _default_connection(
            config.OPENAI_BASE_URL, config.OPENAI_API_KEY
        )
        return OpenAIModel.from_connection(
            connection, model=model or config.OPENAI_MODEL
        )

    if p in ("azure", "azure-openai", "azure_openai"):
        connection = connection or _default_connection(
            config.AZURE_OPENAI_ENDPOINT or None, config.AZURE_OPENAI_API_KEY
        )
        return AzureOpenAIModel.from_connection(
            connection,
            deployment_id=deployment_id or config.AZURE_OPENAI_DEPLOYMENT,
            api_version=api_version or config.AZURE_OPENAI_API_VERSION,
        )

    raise ConfigurationError(f"Unknown LLM provider: {provider}")
