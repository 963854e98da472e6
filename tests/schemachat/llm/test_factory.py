import pytest


def test_build_openai_model(monkeypatch):
    import schemachat.config as config
    from schemachat.llm.factory import build_model
    from schemachat.llm.openai_client import OpenAIModel

    monkeypatch.setattr(config, "OPENAI_API_KEY", "sk-env")
    monkeypatch.setattr(config, "OPENAI_BASE_URL", "https://llm.example.test/v1")
    monkeypatch.setattr(config, "OPENAI_MODEL", "gpt-env")

    model = build_model(provider=" OpenAI ")

    assert isinstance(model, OpenAIModel)
    assert model.model == "gpt-env"
    assert build_model(provider="openai", model="other").model == "other"


def test_build_azure_model(monkeypatch):
    import schemachat.config as config
    from schemachat.llm.azure_client import AzureOpenAIModel
    from schemachat.llm.factory import build_model

    monkeypatch.setattr(config, "AZURE_OPENAI_ENDPOINT", "https://res.openai.azure.com/openai")
    monkeypatch.setattr(config, "AZURE_OPENAI_API_KEY", "azure-env")
    monkeypatch.setattr(config, "AZURE_OPENAI_DEPLOYMENT", "gpt-4o")

    model = build_model(provider="azure")

    assert isinstance(model, AzureOpenAIModel)
    assert model.deployment_id == "gpt-4o"


def test_missing_key_is_configuration_error(monkeypatch):
    import schemachat.config as config
    from schemachat.llm.errors import ConfigurationError
    from schemachat.llm.factory import build_model

    monkeypatch.setattr(config, "OPENAI_API_KEY", "")

    with pytest.raises(ConfigurationError):
        build_model(provider="openai")


def test_unknown_provider():
    from schemachat.llm.errors import ConfigurationError
    from schemachat.llm.factory import build_model

    with pytest.raises(ConfigurationError):
        build_model(provider="gemini")
