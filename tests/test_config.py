# test_config.py

import json

import pytest

from tokenline.config import AppConfig, load_config
from tokenline.errors import ConfigurationError

SETTINGS = {
    "AzureOpenAI": {
        "Endpoint": "https://example.openai.azure.com",
        "ApiKey": "from-file",
        "DeploymentName": "o3-mini",
        "SystemPrompt": "You are a helpful assistant.",
    }
}


@pytest.fixture
def settings_file(tmp_path):
    path = tmp_path / "appsettings.json"
    path.write_text(json.dumps(SETTINGS), encoding="utf-8")
    return path


class TestLoadConfig:

    def test_reads_section(self, settings_file):
        config = load_config(str(settings_file), environ={})
        assert config.endpoint == "https://example.openai.azure.com"
        assert config.api_key == "from-file"
        assert config.deployment_name == "o3-mini"
        assert config.system_prompt == "You are a helpful assistant."
        assert config.api_version == "2024-12-01-preview"
        assert config.is_valid

    def test_environment_overrides_file(self, settings_file):
        config = load_config(str(settings_file), environ={
            "AZURE_OPENAI_API_KEY": "from-env",
            "AZURE_OPENAI_API_VERSION": "2025-01-01-preview",
        })
        assert config.api_key == "from-env"
        assert config.api_version == "2025-01-01-preview"
        assert config.endpoint == "https://example.openai.azure.com"

    def test_default_file_may_be_absent(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = load_config(environ={
            "AZURE_OPENAI_ENDPOINT": "https://e",
            "AZURE_OPENAI_API_KEY": "k",
            "AZURE_OPENAI_DEPLOYMENT_NAME": "d",
            "AZURE_OPENAI_SYSTEM_PROMPT": "p",
        })
        assert config.validate() is config

    def test_explicit_file_must_exist(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(str(tmp_path / "missing.json"), environ={})

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "appsettings.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            load_config(str(path), environ={})


class TestAppConfig:

    def test_validate_names_missing_fields(self):
        config = AppConfig(endpoint="https://e", api_key="  ", deployment_name="d")
        assert not config.is_valid
        with pytest.raises(ConfigurationError) as excinfo:
            config.validate()
        assert "api_key" in str(excinfo.value)
        assert "system_prompt" in str(excinfo.value)
        assert "endpoint" not in str(excinfo.value).split("missing:")[1]

    def test_repr_hides_api_key(self):
        config = AppConfig(endpoint="https://e", api_key="super-secret")
        assert "super-secret" not in repr(config)
        assert "https://e" in repr(config)

    def test_directory_path_is_configuration_error(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Cannot read"):
            load_config(str(tmp_path), environ={})

    def test_non_utf8_file_is_configuration_error(self, tmp_path):
        path = tmp_path / "appsettings.json"
        path.write_bytes(b'{"AzureOpenAI": {"SystemPrompt": "caf\xe9"}}')
        with pytest.raises(ConfigurationError, match="Cannot read"):
            load_config(str(path), environ={})
