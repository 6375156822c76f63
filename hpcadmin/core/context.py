"""
================================================================================
FILE: hpcadmin/core/context.py
================================================================================

PURPOSE:
    Immutable, layered key/value context used to hand the database engine
    to every router builder without module-level globals.

WORKFLOW:
    1. Start from Context.background() (empty root)
    2. bind_connection(ctx, engine) adds exactly one layer
    3. Router builders call connection_from(ctx) to resolve the engine

KEY FACTS:
    - Layers never mutate their parent; with_value returns a new Context
    - Lookup walks outward, so the most recent binding for a key wins
    - Keys are ContextKey instances compared by identity, so two modules can
      never collide on a string name
    - connection_from raises MissingDependencyError instead of returning None
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from sqlalchemy import Engine

from hpcadmin.core.exceptions import MissingDependencyError

logger = logging.getLogger(__name__)


class ContextKey:
    """Process-unique context key. Equality is identity."""

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"ContextKey({self.name!r})"


DB_CONN_KEY = ContextKey("db_conn")


@dataclass(frozen=True)
class Context:
    """One layer of an immutable context chain."""

    parent: Optional["Context"] = None
    key: Optional[ContextKey] = None
    bound: Any = None

    @classmethod
    def background(cls) -> "Context":
        """Empty root context."""
        return cls()

    def with_value(self, key: ContextKey, value: Any) -> "Context":
        return Context(parent=self, key=key, bound=value)

    def value(self, key: ContextKey) -> Any:
        """Return the innermost value bound to key, or None."""
        for layer in self._layers():
            if layer.key is key:
                return layer.bound
        return None

    def _layers(self) -> Iterator["Context"]:
        layer: Optional[Context] = self
        while layer is not None:
            yield layer
            layer = layer.parent


def bind_connection(ctx: Context, engine: Engine) -> Context:
    """Return ctx extended with the database engine binding."""
    logger.debug("Binding database connection to context")
    return ctx.with_value(DB_CONN_KEY, engine)


def connection_from(ctx: Context) -> Engine:
    """
    Resolve the database engine bound by bind_connection.

    Raises:
        MissingDependencyError: no engine was bound to this context chain
    """
    engine = ctx.value(DB_CONN_KEY)
    if engine is None:
        raise MissingDependencyError(
            "database connection not found in context",
            context={"key": DB_CONN_KEY.name},
        )
    return engine
