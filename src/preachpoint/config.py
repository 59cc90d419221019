"""
Configuration management for the Preach Point server.
Uses Pydantic Settings with YAML configuration files and environment variable overrides.
"""

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dotenv import load_dotenv

from preachpoint.constants import TRANSLATION_CACHE_TTL_SECONDS


# Load .env file if it exists (primarily for local development)
load_dotenv()


class LangfuseConfig(BaseModel):
    """Langfuse observability configuration.

    Unset keys are read from the LANGFUSE_* environment variables.
    """

    model_config = ConfigDict(populate_by_name=True)

    public_key: str | None = Field(
        default_factory=lambda: os.getenv("LANGFUSE_PUBLIC_KEY"),
        validation_alias="LANGFUSE_PUBLIC_KEY",
    )
    secret_key: str | None = Field(
        default_factory=lambda: os.getenv("LANGFUSE_SECRET_KEY"),
        validation_alias="LANGFUSE_SECRET_KEY",
    )
    host: str = Field(
        default_factory=lambda: os.getenv("LANGFUSE_BASE_URL", "http://localhost:3000"),
        validation_alias="LANGFUSE_BASE_URL",
    )

    @property
    def enabled(self) -> bool:
        return self.public_key is not None and self.secret_key is not None


class ChatModel(BaseModel):
    """Chat model configuration used for translation or commentary generation."""

    name: str
    platform: Literal["openai", "ollama"]
    temperature: float = 0.0
    max_tokens: int | None = None
    context_window: int = 4096
    request_timeout: float = 360.0
    api_key: str | None = Field(default=None, validation_alias="OPENAI_API_KEY")
    other_kwargs: dict | None = None

    def __str__(self):
        return f"{self.platform}--{self.name}"


class LLMConfig(BaseModel):
    """LLM configuration for both generation tasks."""

    translation_model: ChatModel
    commentary_model: ChatModel


class CacheConfig(BaseModel):
    """Translation cache configuration."""

    ttl_seconds: int = Field(default=TRANSLATION_CACHE_TTL_SECONDS, gt=0)


class DataConfig(BaseModel):
    """Data paths configuration."""

    kjv_path: str = "data/kjv.json"

    @field_validator("kjv_path")
    @classmethod
    def resolve_path(cls, v: str) -> str:
        """Resolve relative paths to absolute paths."""
        path = Path(v)
        if not path.is_absolute():
            # Resolve relative to the current working directory (where the app is run from)
            path = Path.cwd() / v
        return str(path)


class PreachPointSettings(BaseSettings):
    """
    Root settings class for the Preach Point server.
    Loads configuration from YAML files based on the environment.
    """

    model_config = SettingsConfigDict(
        env_prefix="PREACHPOINT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows overrides like PREACHPOINT_CACHE__TTL_SECONDS
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    env: str = Field(validation_alias="PREACHPOINT_ENV")

    # Nested configuration groups
    llm: LLMConfig
    cache: CacheConfig = CacheConfig()
    langfuse: LangfuseConfig = Field(default_factory=LangfuseConfig)
    data: DataConfig

    def __init__(self, **kwargs):
        """
        Load configuration from YAML files and merge with environment variables.
        """
        # 1. Check for explicit env var
        config_dir_env = os.getenv("PREACHPOINT_CONFIG_DIR")
        if config_dir_env:
            config_dir = Path(config_dir_env)
        else:
            # 2. Fallback to the 'config' folder in the current working directory
            config_dir = Path.cwd() / "config"

        # Load base configuration
        base_config_path = config_dir / "base.yaml"
        if not base_config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {base_config_path}. It must exist at the root of the project "
                f"in config/base.yaml."
            )
        config_data = self._load_yaml(base_config_path)

        # Load environment-specific configuration if it exists
        env = os.getenv("PREACHPOINT_ENV", "local")
        config_data["env"] = env
        env_config_path = config_dir / f"{env}.yaml"
        if env_config_path.exists():
            env_config = self._load_yaml(env_config_path)
            config_data = self._deep_merge(config_data, env_config)

        # Merge with any provided kwargs
        config_data = self._deep_merge(config_data, kwargs)

        super().__init__(**config_data)

    @staticmethod
    def _load_yaml(path: Path) -> dict[str, Any]:
        """Load YAML configuration file."""
        if not path.exists():
            return {}
        with open(path, "r") as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """
        Deep merge two dictionaries.
        Override values take precedence over base values.
        """
        result = base.copy()
        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = PreachPointSettings._deep_merge(result[key], value)
            else:
                result[key] = value
        return result


# Global settings instance
# Import this instance throughout the application
preachpoint_settings = PreachPointSettings()
