# SPDX-License-Identifier: MIT
"""Tests for configuration loading."""

from pathlib import Path

import pytest

from slugmint.constants import DEFAULT_REFERRER_FEE_BIPS
from slugmint.io_utils.store import JsonFileStore, MemoryStore
from slugmint.runtime.environment import RuntimeEnv
from slugmint.runtime.settings import load_settings


@pytest.fixture(autouse=True)
def _isolated(monkeypatch, tmp_path: Path) -> None:
    """Run from an empty directory without inherited SLUGMINT_ variables."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "SLUGMINT_REGISTRATION_FEE",
        "SLUGMINT_REFERRER_FEE_BIPS",
        "SLUGMINT_PROTOCOL_OWNER",
        "SLUGMINT_STATE_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


def _write_config(path: Path, body: str) -> Path:
    path.write_text(body, encoding="utf-8")
    return path


def test_missing_file_uses_defaults(tmp_path: Path) -> None:
    settings = load_settings(tmp_path / "absent.yaml")
    assert settings.referrer_fee_bips == DEFAULT_REFERRER_FEE_BIPS
    assert settings.state_file is None


def test_yaml_values_are_loaded(tmp_path: Path) -> None:
    cfg = _write_config(
        tmp_path / "app.yaml",
        "registration_fee: 500\nreferrer_fee_bips: 2500\nprotocol_owner: treasury\n",
    )
    settings = load_settings(cfg)
    assert settings.registration_fee == 500
    assert settings.referrer_fee_bips == 2500
    assert settings.protocol_owner == "treasury"


def test_environment_overrides_file(monkeypatch, tmp_path: Path) -> None:
    cfg = _write_config(tmp_path / "app.yaml", "referrer_fee_bips: 2500\n")
    monkeypatch.setenv("SLUGMINT_REFERRER_FEE_BIPS", "1000")
    assert load_settings(cfg).referrer_fee_bips == 1000


def test_invalid_bips_raise_runtime_error(tmp_path: Path) -> None:
    cfg = _write_config(tmp_path / "app.yaml", "referrer_fee_bips: 20000\n")
    with pytest.raises(RuntimeError, match="referrer_fee_bips"):
        load_settings(cfg)


def test_invalid_environment_value(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SLUGMINT_REGISTRATION_FEE", "-5")
    with pytest.raises(RuntimeError, match="registration_fee"):
        load_settings(tmp_path / "absent.yaml")


def test_runtime_env_picks_store_from_settings(tmp_path: Path) -> None:
    settings = load_settings(tmp_path / "absent.yaml")
    assert isinstance(RuntimeEnv(settings).store, MemoryStore)
    settings.state_file = tmp_path / "state.jsonl"
    env = RuntimeEnv(settings)
    assert isinstance(env.store, JsonFileStore)
    env.registry.register("alice", "https://example.com")
    assert env.events.of_kind("registered")
