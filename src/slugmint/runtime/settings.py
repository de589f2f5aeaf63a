# SPDX-License-Identifier: MIT
"""Centralised application configuration management.

This module exposes :class:`Settings`, a ``pydantic-settings`` model that
combines values sourced from a YAML configuration file and environment
variables. Environment variables take precedence over file-based values and
the merged configuration is validated before use.
"""

from __future__ import annotations

from pathlib import Path

import logfire
import yaml
from pydantic import Field, ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from slugmint.constants import (
    BIPS_DENOMINATOR,
    DEFAULT_PROTOCOL_OWNER,
    DEFAULT_REFERRER_FEE_BIPS,
    DEFAULT_REGISTRATION_FEE,
)
from slugmint.models import AppConfig

DEFAULT_CONFIG_PATH = Path("config/app.yaml")


class Settings(BaseSettings):
    """Application settings combining file-based and environment configuration."""

    registration_fee: int = Field(
        DEFAULT_REGISTRATION_FEE, ge=0, description="Flat fee for a custom slug."
    )
    referrer_fee_bips: int = Field(
        DEFAULT_REFERRER_FEE_BIPS,
        ge=0,
        le=BIPS_DENOMINATOR,
        description="Referrer share of the fee in basis points.",
    )
    protocol_owner: str = Field(
        DEFAULT_PROTOCOL_OWNER,
        min_length=1,
        description="Address credited with protocol fees.",
    )
    state_file: Path | None = Field(
        None, description="JSON lines snapshot file; in-memory when omitted."
    )
    log_level: str = Field("warn", description="Logging verbosity level.")
    logfire_token: str | None = Field(
        None, description="Logfire authentication token, if available.", repr=False
    )

    model_config = SettingsConfigDict(env_prefix="SLUGMINT_", extra="ignore")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment and .env values win over those passed from the YAML file.
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def load_app_config(path: Path) -> AppConfig:
    """Return the YAML configuration at ``path``.

    A missing file yields the defaults.

    Raises:
        RuntimeError: If the file cannot be parsed.
    """
    with logfire.span("settings.load_app_config", attributes={"path": str(path)}):
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except FileNotFoundError:
            logfire.debug("Config file not found; using defaults", path=str(path))
            return AppConfig()
        except yaml.YAMLError as exc:
            raise RuntimeError(f"Invalid YAML in {path}: {exc}") from exc
        try:
            return AppConfig.model_validate(raw)
        except ValidationError as exc:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            )
            raise RuntimeError(f"Invalid configuration in {path}: {details}") from exc


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load and validate application settings.

    Configuration values are read from the YAML file and then merged with
    environment variables using ``pydantic-settings``. When a value is
    provided in both sources the environment variable wins. A ``.env`` file in
    the working directory is loaded automatically when present.

    Args:
        config_path: Optional path to a YAML configuration file. Defaults to
            ``config/app.yaml``.

    Returns:
        Settings: Fully validated application configuration.

    Raises:
        RuntimeError: If configuration values are missing or invalid.
    """
    config = load_app_config(Path(config_path) if config_path else DEFAULT_CONFIG_PATH)
    env_file_path = Path(".env")
    env_file = env_file_path if env_file_path.exists() else None
    try:
        return Settings(_env_file=env_file, **config.model_dump())
    except ValidationError as exc:
        # Summarise validation issues so the caller receives clear feedback.
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        raise RuntimeError(f"Invalid configuration: {details}") from exc


__all__ = ["DEFAULT_CONFIG_PATH", "Settings", "load_app_config", "load_settings"]
