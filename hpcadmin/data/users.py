"""User queries."""

import logging
from typing import List, Optional

from sqlalchemy import Connection, Engine, delete, insert, select, update
from sqlalchemy.exc import IntegrityError

from hpcadmin.core.exceptions import ResourceConflictError, ResourceNotFoundError
from hpcadmin.data.models import User, UserCreate, UserUpdate
from hpcadmin.data.tables import pirg_members, pirgs, users

logger = logging.getLogger(__name__)


def _fetch(conn: Connection, user_id: int) -> Optional[User]:
    row = conn.execute(select(users).where(users.c.id == user_id)).first()
    if row is None:
        return None
    return User.model_validate(dict(row._mapping))


def list_users(engine: Engine) -> List[User]:
    with engine.connect() as conn:
        rows = conn.execute(select(users).order_by(users.c.id)).all()
    return [User.model_validate(dict(row._mapping)) for row in rows]


def get_user(engine: Engine, user_id: int) -> User:
    with engine.connect() as conn:
        user = _fetch(conn, user_id)
    if user is None:
        raise ResourceNotFoundError(f"user {user_id} not found", context={"user_id": user_id})
    return user


def create_user(engine: Engine, payload: UserCreate) -> User:
    try:
        with engine.begin() as conn:
            result = conn.execute(insert(users).values(**payload.model_dump()))
            user_id = result.inserted_primary_key[0]
            user = _fetch(conn, user_id)
    except IntegrityError as e:
        raise ResourceConflictError(
            f"user {payload.username!r} already exists",
            context={"username": payload.username},
        ) from e
    logger.info(f"Created user {user.username} (id={user.id})")
    return user


def update_user(engine: Engine, user_id: int, payload: UserUpdate) -> User:
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    try:
        with engine.begin() as conn:
            if _fetch(conn, user_id) is None:
                raise ResourceNotFoundError(f"user {user_id} not found", context={"user_id": user_id})
            if changes:
                conn.execute(update(users).where(users.c.id == user_id).values(**changes))
            user = _fetch(conn, user_id)
    except IntegrityError as e:
        raise ResourceConflictError(
            "user update conflicts with an existing user",
            context={"user_id": user_id},
        ) from e
    logger.info(f"Updated user {user_id}: {sorted(changes)}")
    return user


def delete_user(engine: Engine, user_id: int) -> None:
    try:
        with engine.begin() as conn:
            if _fetch(conn, user_id) is None:
                raise ResourceNotFoundError(f"user {user_id} not found", context={"user_id": user_id})
            owned = conn.execute(select(pirgs.c.name).where(pirgs.c.owner_id == user_id)).first()
            if owned is not None:
                raise ResourceConflictError(
                    f"user {user_id} still owns pirg {owned.name!r}",
                    context={"user_id": user_id},
                )
            conn.execute(delete(pirg_members).where(pirg_members.c.user_id == user_id))
            conn.execute(delete(users).where(users.c.id == user_id))
    except IntegrityError as e:
        raise ResourceConflictError(
            f"user {user_id} still owns a pirg",
            context={"user_id": user_id},
        ) from e
    logger.info(f"Deleted user {user_id}")
