"""Database connection factory."""

import logging
from dataclasses import dataclass

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError

from hpcadmin.config.settings import DatabaseConfig
from hpcadmin.core.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)

DRIVER_NAME = "postgresql+psycopg"


@dataclass(frozen=True)
class DBRequest:
    """Parameters for a single connection attempt."""

    host: str
    port: int
    user: str
    password: str
    dbname: str
    disable_ssl: bool = False

    @classmethod
    def from_config(cls, cfg: DatabaseConfig, disable_ssl: bool = False) -> "DBRequest":
        return cls(
            host=cfg.host,
            port=cfg.port,
            user=cfg.user,
            password=cfg.password,
            dbname=cfg.dbname,
            disable_ssl=disable_ssl,
        )

    def __repr__(self) -> str:
        return (
            f"DBRequest(host={self.host!r}, port={self.port}, user={self.user!r}, "
            f"dbname={self.dbname!r}, disable_ssl={self.disable_ssl})"
        )


def build_url(request: DBRequest) -> URL:
    query = {"sslmode": "disable"} if request.disable_ssl else {}
    return URL.create(
        DRIVER_NAME,
        username=request.user,
        password=request.password,
        host=request.host,
        port=request.port,
        database=request.dbname,
        query=query,
    )


def new_connection(request: DBRequest) -> Engine:
    """
    Open the engine and verify the database answers.

    One attempt only; the caller is expected to abort on failure.

    Raises:
        DatabaseConnectionError: unreachable host, rejected credentials or
            missing database
    """
    url = build_url(request)
    target = url.render_as_string(hide_password=True)
    logger.info(f"Connecting to database: {target}")

    engine = create_engine(url, pool_pre_ping=True, future=True)
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        engine.dispose()
        raise DatabaseConnectionError(
            f"failed to connect to database: {e}",
            context={"url": target},
        ) from e

    logger.info(f"✓ Database connection verified: {target}")
    return engine


def close_connection(engine: Engine) -> None:
    """Release every pooled connection. Called once at shutdown."""
    engine.dispose()
    logger.info("✓ Database connection closed")
