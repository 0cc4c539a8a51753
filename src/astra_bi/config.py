"""Runtime settings loaded from the environment and an optional YAML file."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from astra_bi.errors import ConfigError

GROQ_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_GROQ_MODEL = "llama-3.3-70b-versatile"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"

# Settings field -> environment variable
_ENV_VARS: dict[str, str] = {
    "monday_api_token": "MONDAY_API_TOKEN",
    "llm_provider": "ASTRA_BI_LLM_PROVIDER",
    "groq_api_key": "GROQ_API_KEY",
    "openai_api_key": "OPENAI_API_KEY",
    "llm_model": "ASTRA_BI_LLM_MODEL",
    "llm_base_url": "ASTRA_BI_LLM_BASE_URL",
    "timeout": "ASTRA_BI_TIMEOUT",
    "max_workers": "ASTRA_BI_MAX_WORKERS",
}


class Settings(BaseModel):
    """Credentials are passed through to the external services unchanged."""

    monday_api_token: Optional[str] = None

    llm_provider: Optional[str] = Field(
        default=None,
        description="groq | openai | stub; unset picks groq/openai by available key, else stub",
    )
    groq_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    llm_model: Optional[str] = None
    llm_base_url: Optional[str] = None
    llm_max_retries: int = Field(default=2, ge=0)

    timeout: float = Field(default=30.0, gt=0, description="Seconds per external call")
    max_workers: int = Field(default=4, ge=1, description="Parallel tool executions per round")

    @property
    def provider(self) -> str:
        """Resolved completion provider."""
        if self.llm_provider:
            return self.llm_provider.lower()
        if self.groq_api_key:
            return "groq"
        if self.openai_api_key:
            return "openai"
        return "stub"

    @classmethod
    def from_env(cls, **overrides) -> "Settings":
        """Build settings from environment variables; explicit overrides win."""
        data: dict = {}
        for field_name, env_var in _ENV_VARS.items():
            value = os.environ.get(env_var)
            if value:
                data[field_name] = value
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls._validate(data)

    @classmethod
    def from_yaml(cls, path: str | Path, **overrides) -> "Settings":
        """
        Load settings from YAML. Keys use the field names; values missing from
        the file are filled from the environment.
        """
        try:
            data = yaml.safe_load(Path(path).read_text()) or {}
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")

        merged: dict = {}
        for field_name, env_var in _ENV_VARS.items():
            value = os.environ.get(env_var)
            if value:
                merged[field_name] = value
        merged.update({k: v for k, v in data.items() if v is not None})
        merged.update({k: v for k, v in overrides.items() if v is not None})
        return cls._validate(merged)

    @classmethod
    def _validate(cls, data: dict) -> "Settings":
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings: {e}") from e
