# config.py

import json
import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

from .errors import ConfigurationError
from .stream.remote import DEFAULT_API_VERSION

SETTINGS_FILE = "appsettings.json"
SETTINGS_SECTION = "AzureOpenAI"

# settings key -> (AppConfig field, environment override)
_SETTINGS = {
    "Endpoint": ("endpoint", "AZURE_OPENAI_ENDPOINT"),
    "ApiKey": ("api_key", "AZURE_OPENAI_API_KEY"),
    "DeploymentName": ("deployment_name", "AZURE_OPENAI_DEPLOYMENT_NAME"),
    "SystemPrompt": ("system_prompt", "AZURE_OPENAI_SYSTEM_PROMPT"),
    "ApiVersion": ("api_version", "AZURE_OPENAI_API_VERSION"),
}

REQUIRED_FIELDS = ("endpoint", "api_key", "deployment_name", "system_prompt")


@dataclass
class AppConfig:
    endpoint: str = ""
    api_key: str = ""
    deployment_name: str = ""
    system_prompt: str = ""
    api_version: str = DEFAULT_API_VERSION

    @property
    def missing(self) -> list[str]:
        return [name for name in REQUIRED_FIELDS if not (getattr(self, name) or "").strip()]

    @property
    def is_valid(self) -> bool:
        return not self.missing

    def validate(self) -> "AppConfig":
        """Raise ConfigurationError naming every empty required setting."""
        if self.missing:
            raise ConfigurationError(
                "Azure OpenAI configuration is missing. Ensure Endpoint, ApiKey, "
                "SystemPrompt and DeploymentName are set in appsettings.json or "
                f"the environment (missing: {', '.join(self.missing)})."
            )
        return self

    def __repr__(self) -> str:
        # Never leak the key into logs
        shown = ", ".join(
            f"{f.name}={'***' if f.name == 'api_key' else getattr(self, f.name)!r}"
            for f in fields(self)
        )
        return f"AppConfig({shown})"


def _read_settings_file(path: str, required: bool) -> dict:
    if not os.path.exists(path):
        if required:
            raise ConfigurationError(f"Settings file not found: {path}")
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e
    section = data.get(SETTINGS_SECTION, {}) if isinstance(data, dict) else {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"'{SETTINGS_SECTION}' in {path} must be an object")
    return section


def load_config(path: Optional[str] = None,
                environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """
    Build an AppConfig from a JSON settings file overlaid with environment
    variables. An explicit `path` must exist; the default one may be absent.

    The result is not validated; call `AppConfig.validate()`.
    """
    environ = os.environ if environ is None else environ
    section = _read_settings_file(path or SETTINGS_FILE, required=path is not None)

    values = {}
    for key, (name, env_var) in _SETTINGS.items():
        value = environ.get(env_var) or section.get(key)
        if value is not None:
            values[name] = str(value)
    return AppConfig(**values)
