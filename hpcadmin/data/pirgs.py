"""Pirg queries, including membership."""

import logging
from typing import Iterable, List, Optional

from sqlalchemy import Connection, Engine, delete, insert, select, update
from sqlalchemy.exc import IntegrityError

from hpcadmin.core.exceptions import ResourceConflictError, ResourceNotFoundError
from hpcadmin.data.models import Pirg, PirgCreate, PirgUpdate
from hpcadmin.data.tables import pirg_members, pirgs, users

logger = logging.getLogger(__name__)


def _member_ids(conn: Connection, pirg_id: int) -> List[int]:
    rows = conn.execute(
        select(pirg_members.c.user_id)
        .where(pirg_members.c.pirg_id == pirg_id)
        .order_by(pirg_members.c.user_id)
    ).all()
    return [row.user_id for row in rows]


def _fetch(conn: Connection, pirg_id: int) -> Optional[Pirg]:
    row = conn.execute(select(pirgs).where(pirgs.c.id == pirg_id)).first()
    if row is None:
        return None
    return Pirg(**row._mapping, member_ids=_member_ids(conn, pirg_id))


def _require_pirg(conn: Connection, pirg_id: int) -> Pirg:
    pirg = _fetch(conn, pirg_id)
    if pirg is None:
        raise ResourceNotFoundError(f"pirg {pirg_id} not found", context={"pirg_id": pirg_id})
    return pirg


def _require_users(conn: Connection, user_ids: Iterable[int]) -> None:
    wanted = set(user_ids)
    if not wanted:
        return
    found = {row.id for row in conn.execute(select(users.c.id).where(users.c.id.in_(wanted)))}
    missing = sorted(wanted - found)
    if missing:
        raise ResourceNotFoundError(
            f"users not found: {missing}",
            context={"user_ids": missing},
        )


def _name_taken(engine: Engine, name: str) -> bool:
    with engine.connect() as conn:
        return conn.execute(select(pirgs.c.id).where(pirgs.c.name == name)).first() is not None


def list_pirgs(engine: Engine) -> List[Pirg]:
    with engine.connect() as conn:
        rows = conn.execute(select(pirgs).order_by(pirgs.c.id)).all()
        return [Pirg(**row._mapping, member_ids=_member_ids(conn, row.id)) for row in rows]


def get_pirg(engine: Engine, pirg_id: int) -> Pirg:
    with engine.connect() as conn:
        return _require_pirg(conn, pirg_id)


def create_pirg(engine: Engine, payload: PirgCreate) -> Pirg:
    try:
        with engine.begin() as conn:
            _require_users(conn, [payload.owner_id, *payload.member_ids])
            result = conn.execute(
                insert(pirgs).values(name=payload.name, owner_id=payload.owner_id)
            )
            pirg_id = result.inserted_primary_key[0]
            for user_id in sorted(set(payload.member_ids)):
                conn.execute(insert(pirg_members).values(pirg_id=pirg_id, user_id=user_id))
            pirg = _require_pirg(conn, pirg_id)
    except IntegrityError as e:
        if _name_taken(engine, payload.name):
            raise ResourceConflictError(
                f"pirg {payload.name!r} already exists",
                context={"name": payload.name},
            ) from e
        raise ResourceConflictError(
            f"pirg {payload.name!r} references a user that no longer exists",
            context={"name": payload.name, "user_ids": [payload.owner_id, *payload.member_ids]},
        ) from e
    logger.info(f"Created pirg {pirg.name} (id={pirg.id}, owner={pirg.owner_id})")
    return pirg


def update_pirg(engine: Engine, pirg_id: int, payload: PirgUpdate) -> Pirg:
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    try:
        with engine.begin() as conn:
            _require_pirg(conn, pirg_id)
            if "owner_id" in changes:
                _require_users(conn, [changes["owner_id"]])
            if changes:
                conn.execute(update(pirgs).where(pirgs.c.id == pirg_id).values(**changes))
            pirg = _require_pirg(conn, pirg_id)
    except IntegrityError as e:
        raise ResourceConflictError(
            "pirg update conflicts with an existing pirg",
            context={"pirg_id": pirg_id},
        ) from e
    logger.info(f"Updated pirg {pirg_id}: {sorted(changes)}")
    return pirg


def delete_pirg(engine: Engine, pirg_id: int) -> None:
    with engine.begin() as conn:
        _require_pirg(conn, pirg_id)
        conn.execute(delete(pirg_members).where(pirg_members.c.pirg_id == pirg_id))
        conn.execute(delete(pirgs).where(pirgs.c.id == pirg_id))
    logger.info(f"Deleted pirg {pirg_id}")

# ============================================================================
# MEMBERSHIP
# ============================================================================

def list_members(engine: Engine, pirg_id: int) -> List[int]:
    with engine.connect() as conn:
        return _require_pirg(conn, pirg_id).member_ids


def add_member(engine: Engine, pirg_id: int, user_id: int) -> Pirg:
    with engine.begin() as conn:
        pirg = _require_pirg(conn, pirg_id)
        _require_users(conn, [user_id])
        if user_id in pirg.member_ids:
            raise ResourceConflictError(
                f"user {user_id} is already a member of pirg {pirg_id}",
                context={"pirg_id": pirg_id, "user_id": user_id},
            )
        try:
            conn.execute(insert(pirg_members).values(pirg_id=pirg_id, user_id=user_id))
        except IntegrityError as e:
            raise ResourceConflictError(
                f"user {user_id} could not be added to pirg {pirg_id}",
                context={"pirg_id": pirg_id, "user_id": user_id},
            ) from e
        pirg = _require_pirg(conn, pirg_id)
    logger.info(f"Added user {user_id} to pirg {pirg_id}")
    return pirg


def remove_member(engine: Engine, pirg_id: int, user_id: int) -> Pirg:
    with engine.begin() as conn:
        pirg = _require_pirg(conn, pirg_id)
        if user_id not in pirg.member_ids:
            raise ResourceNotFoundError(
                f"user {user_id} is not a member of pirg {pirg_id}",
                context={"pirg_id": pirg_id, "user_id": user_id},
            )
        conn.execute(
            delete(pirg_members).where(
                pirg_members.c.pirg_id == pirg_id,
                pirg_members.c.user_id == user_id,
            )
        )
        pirg = _require_pirg(conn, pirg_id)
    logger.info(f"Removed user {user_id} from pirg {pirg_id}")
    return pirg
