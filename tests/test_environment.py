"""Tests for HPCADMIN_SERVER_* environment overrides."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from hpcadmin.config import ServerConfig, apply_environment, load_file

STRING_OVERRIDES = [
    ("HPCADMIN_SERVER_HOST", lambda c: c.host),
    ("HPCADMIN_SERVER_DATABASE_HOST", lambda c: c.database.host),
    ("HPCADMIN_SERVER_DATABASE_USER", lambda c: c.database.user),
    ("HPCADMIN_SERVER_DATABASE_PASSWORD", lambda c: c.database.password),
    ("HPCADMIN_SERVER_DATABASE_DBNAME", lambda c: c.database.dbname),
    ("HPCADMIN_SERVER_OAUTH_TENANT_ID", lambda c: c.oauth.tenant_id),
    ("HPCADMIN_SERVER_OAUTH_CLIENT_ID", lambda c: c.oauth.client_id),
    ("HPCADMIN_SERVER_OAUTH_CLIENT_SECRET", lambda c: c.oauth.client_secret),
]

INT_OVERRIDES = [
    ("HPCADMIN_SERVER_PORT", lambda c: c.port),
    ("HPCADMIN_SERVER_DATABASE_PORT", lambda c: c.database.port),
]


@pytest.fixture
def base(config_file: Path) -> ServerConfig:
    return load_file(str(config_file))


@pytest.mark.parametrize("name,getter", STRING_OVERRIDES)
def test_string_override_wins_over_file(base: ServerConfig, name, getter) -> None:
    cfg = apply_environment(base, {name: "from-env"})

    assert getter(cfg) == "from-env"


@pytest.mark.parametrize("name,getter", INT_OVERRIDES)
def test_integer_override_wins_over_file(base: ServerConfig, name, getter) -> None:
    cfg = apply_environment(base, {name: "6000"})

    assert getter(cfg) == 6000


@pytest.mark.parametrize("name,getter", INT_OVERRIDES)
def test_invalid_integer_keeps_prior_value(base: ServerConfig, name, getter) -> None:
    cfg = apply_environment(base, {name: "not-a-port", "HPCADMIN_SERVER_HOST": "still-applied"})

    assert getter(cfg) == getter(base)
    assert cfg.host == "still-applied"


def test_invalid_integer_logs_warning(base: ServerConfig, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="hpcadmin.config.loader"):
        apply_environment(base, {"HPCADMIN_SERVER_DATABASE_PORT": "abc"})

    assert any("HPCADMIN_SERVER_DATABASE_PORT" in r.getMessage() for r in caplog.records)


def test_database_port_scenario(base: ServerConfig) -> None:
    assert base.database.port == 5432

    cfg = apply_environment(base, {"HPCADMIN_SERVER_DATABASE_PORT": "6000"})

    assert cfg.database.port == 6000


def test_password_and_user_read_distinct_variables(base: ServerConfig) -> None:
    cfg = apply_environment(base, {"HPCADMIN_SERVER_DATABASE_USER": "alice"})

    assert cfg.database.user == "alice"
    assert cfg.database.password == "hunter2"


def test_unset_variables_leave_config_untouched(base: ServerConfig) -> None:
    assert apply_environment(base, {}) == base


def test_input_config_is_not_modified(base: ServerConfig) -> None:
    apply_environment(base, {"HPCADMIN_SERVER_HOST": "other", "HPCADMIN_SERVER_DATABASE_DBNAME": "x"})

    assert base.host == "127.0.0.1"
    assert base.database.dbname == "hpcadmin"


def test_defaults_to_process_environment(base: ServerConfig, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HPCADMIN_SERVER_OAUTH_CLIENT_ID", "from-os")

    assert apply_environment(base).oauth.client_id == "from-os"


def test_secrets_are_redacted_in_logs(base: ServerConfig, caplog: pytest.LogCaptureFixture) -> None:
    environ = {
        "HPCADMIN_SERVER_DATABASE_PASSWORD": "pw-value-9f8e",
        "HPCADMIN_SERVER_OAUTH_CLIENT_SECRET": "secret-value-7a6b",
        "HPCADMIN_SERVER_DATABASE_USER": "visible-user",
    }

    with caplog.at_level(logging.DEBUG, logger="hpcadmin.config.loader"):
        cfg = apply_environment(base, environ)

    assert cfg.database.password == "pw-value-9f8e"
    assert cfg.oauth.client_secret == "secret-value-7a6b"
    assert "pw-value-9f8e" not in caplog.text
    assert "secret-value-7a6b" not in caplog.text
    assert "REDACTED" in caplog.text
    assert "visible-user" in caplog.text
