"""Tests for the layered context and connection binding."""

from __future__ import annotations

import pytest
from sqlalchemy import Engine

from hpcadmin.api.pirgs import pirgs_router
from hpcadmin.api.users import users_router
from hpcadmin.core.context import (
    DB_CONN_KEY,
    Context,
    ContextKey,
    bind_connection,
    connection_from,
)
from hpcadmin.core.exceptions import MissingDependencyError


def test_bound_context_yields_connection(engine: Engine) -> None:
    ctx = bind_connection(Context.background(), engine)

    assert connection_from(ctx) is engine


def test_unbound_context_raises_missing_dependency() -> None:
    with pytest.raises(MissingDependencyError) as exc_info:
        connection_from(Context.background())

    assert exc_info.value.error_code == "MISSING_DEPENDENCY"


def test_binding_is_visible_through_child_layers(engine: Engine) -> None:
    other = ContextKey("other")
    ctx = bind_connection(Context.background(), engine).with_value(other, "x")

    assert connection_from(ctx) is engine
    assert ctx.value(other) == "x"


def test_binding_does_not_mutate_parent(engine: Engine) -> None:
    root = Context.background()
    bind_connection(root, engine)

    assert root.value(DB_CONN_KEY) is None
    with pytest.raises(MissingDependencyError):
        connection_from(root)


def test_latest_binding_shadows_earlier(engine: Engine) -> None:
    replacement = object()
    ctx = bind_connection(bind_connection(Context.background(), engine), replacement)  # type: ignore[arg-type]

    assert connection_from(ctx) is replacement


def test_keys_compare_by_identity() -> None:
    first = ContextKey("db_conn")
    ctx = Context.background().with_value(first, "value")

    assert ctx.value(first) == "value"
    assert ctx.value(ContextKey("db_conn")) is None
    assert ctx.value(DB_CONN_KEY) is None


def test_binding_none_counts_as_missing() -> None:
    ctx = Context.background().with_value(DB_CONN_KEY, None)

    with pytest.raises(MissingDependencyError):
        connection_from(ctx)


@pytest.mark.parametrize("builder", [users_router, pirgs_router])
def test_resource_routers_require_bound_context(builder) -> None:
    with pytest.raises(MissingDependencyError):
        builder(Context.background())
