"""
Launcher configuration.

Sources, highest precedence first:
    1. keyword arguments to Settings(...)
    2. DEPS_TRY_<FIELD> environment variables, e.g. DEPS_TRY_CLOJURE_COMMAND
    3. YAML file ~/.deps-try/config.yaml (or the path in DEPS_TRY_CONFIG)
    4. defaults below

Example config.yaml:

    clojure_command: /opt/clojure/bin/clojure
    default_clojure_version: 1.11.1
    loglevel: DEBUG
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .errors import ConfigError

ENV_PREFIX = "DEPS_TRY_"
CONFIG_FILE_ENV = "DEPS_TRY_CONFIG"
DEFAULT_CONFIG_FILE = Path("~/.deps-try/config.yaml")
LAUNCHER_CLASSPATH_ENV = "DEPS_TRY_CLASSPATH"


def config_file_path(environ: Mapping[str, str] | None = None) -> Path:
    environ = os.environ if environ is None else environ
    return Path(environ.get(CONFIG_FILE_ENV, str(DEFAULT_CONFIG_FILE))).expanduser()


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


class YamlFileSource(PydanticBaseSettingsSource):
    """Values from the YAML config file; a missing file contributes nothing."""

    def __init__(self, settings_cls: type[BaseSettings]):
        super().__init__(settings_cls)
        path = config_file_path()
        self.data = _load_yaml(path) if path.is_file() else {}

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return self.data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        # Unknown keys are passed through so extra="forbid" rejects them.
        return dict(self.data)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="forbid",
        frozen=True,
    )

    clojure_command: str = Field(default="clojure", min_length=1)
    java_command: str = Field(default="java", min_length=1)
    git_command: str = Field(default="git", min_length=1)
    default_clojure_version: str = Field(default="1.12.0-alpha3", min_length=1)
    minimum_cli_version: str = Field(default="1.11.1.1273", pattern=r"^\d+\.\d+\.\d+\.\d+")
    entry_namespace: str = Field(default="eval.deps-try.try", min_length=1)
    registry_timeout: float = Field(default=10.0, gt=0)
    logfile: str | None = None
    loglevel: str = "INFO"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, env_settings, YamlFileSource(settings_cls)

    @field_validator("loglevel")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level

    @property
    def loglevel_number(self) -> int:
        return logging.getLevelName(self.loglevel)


def load_settings() -> Settings:
    """Build Settings from the config file and environment."""
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid deps-try configuration: {exc}") from exc


def capture_launcher_classpath(environ: Mapping[str, str] | None = None) -> str:
    """Classpath holding the REPL entry namespace. Read once, before anything else runs."""
    environ = os.environ if environ is None else environ
    return environ.get(LAUNCHER_CLASSPATH_ENV, "")
