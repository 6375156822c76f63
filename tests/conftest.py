"""Shared fixtures: clean environment, in-memory database, test client."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine, create_engine
from sqlalchemy.pool import StaticPool

from hpcadmin.api import create_app
from hpcadmin.config.constants import ENV_LOG_LEVEL, ENV_OVERRIDES
from hpcadmin.core.context import Context, bind_connection
from hpcadmin.data.tables import metadata

VALID_YAML = """\
host: 127.0.0.1
port: 3333
oauth:
  tenant_id: tenant-123
  client_id: client-abc
  client_secret: s3cr3t
database:
  host: db.example.org
  port: 5432
  user: hpcadmin
  password: hunter2
  dbname: hpcadmin
"""


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (*ENV_OVERRIDES, ENV_LOG_LEVEL):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(VALID_YAML)
    return path


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def ctx(engine: Engine) -> Context:
    return bind_connection(Context.background(), engine)


@pytest.fixture
def client(ctx: Context) -> Iterator[TestClient]:
    with TestClient(create_app(ctx)) as test_client:
        yield test_client
