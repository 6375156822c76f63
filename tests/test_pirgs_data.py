"""Constraint handling in the pirg queries when checks race with writers."""

from __future__ import annotations

from typing import Iterator

import pytest
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.pool import StaticPool

from hpcadmin.core.exceptions import ResourceConflictError
from hpcadmin.data import pirgs as pirgs_data
from hpcadmin.data import users as users_data
from hpcadmin.data.models import PirgCreate, UserCreate
from hpcadmin.data.tables import metadata


@pytest.fixture
def fk_engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    metadata.create_all(engine)
    yield engine
    engine.dispose()


def _user(engine: Engine, username: str) -> int:
    return users_data.create_user(
        engine, UserCreate(username=username, email=f"{username}@example.org")
    ).id


def test_concurrent_duplicate_member_is_conflict(
    engine: Engine, monkeypatch: pytest.MonkeyPatch
) -> None:
    owner = _user(engine, "owner")
    member = _user(engine, "member")
    pirg = pirgs_data.create_pirg(engine, PirgCreate(name="physics", owner_id=owner))
    pirgs_data.add_member(engine, pirg.id, member)

    # Another writer added the member after this request read the member list.
    monkeypatch.setattr(pirgs_data, "_member_ids", lambda conn, pirg_id: [])

    with pytest.raises(ResourceConflictError) as exc_info:
        pirgs_data.add_member(engine, pirg.id, member)

    assert exc_info.value.context == {"pirg_id": pirg.id, "user_id": member}
    monkeypatch.undo()
    assert pirgs_data.list_members(engine, pirg.id) == [member]


def test_create_pirg_duplicate_name_reports_existing(engine: Engine) -> None:
    owner = _user(engine, "owner")
    pirgs_data.create_pirg(engine, PirgCreate(name="chem", owner_id=owner))

    with pytest.raises(ResourceConflictError) as exc_info:
        pirgs_data.create_pirg(engine, PirgCreate(name="chem", owner_id=owner))

    assert "already exists" in exc_info.value.message
    assert exc_info.value.context == {"name": "chem"}


def test_create_pirg_vanished_owner_is_not_reported_as_duplicate(
    fk_engine: Engine, monkeypatch: pytest.MonkeyPatch
) -> None:
    # The owner is deleted between the existence check and the insert.
    monkeypatch.setattr(pirgs_data, "_require_users", lambda conn, user_ids: None)

    with pytest.raises(ResourceConflictError) as exc_info:
        pirgs_data.create_pirg(fk_engine, PirgCreate(name="bio", owner_id=42))

    assert "no longer exists" in exc_info.value.message
    assert exc_info.value.context == {"name": "bio", "user_ids": [42]}
    assert pirgs_data.list_pirgs(fk_engine) == []
