"""Tests for route tree documentation."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from hpcadmin.api import compose_router, create_app, emit_docs, print_routes
from hpcadmin.api.docs import collect_routes
from hpcadmin.core.context import Context
from hpcadmin.core.exceptions import DocumentationError


def test_emit_docs_writes_json(ctx: Context, tmp_path: Path) -> None:
    destination = tmp_path / "routes.json"

    emit_docs(create_app(ctx), destination)

    document = json.loads(destination.read_text())
    routes = {(r["path"], tuple(r["methods"])) for r in document["routes"]}
    assert ("/admin/", ("GET",)) in routes
    assert ("/api/v1/users/", ("GET",)) in routes
    assert ("/api/v1/users/", ("POST",)) in routes
    assert ("/api/v1/users/{user_id}", ("DELETE",)) in routes
    assert ("/api/v1/pirgs/{pirg_id}/members", ("POST",)) in routes
    assert document["router"]["title"] == "HPC Admin Server"


def test_emit_docs_skips_framework_routes(ctx: Context, tmp_path: Path) -> None:
    destination = tmp_path / "routes.json"

    emit_docs(create_app(ctx), destination)

    paths = [r["path"] for r in json.loads(destination.read_text())["routes"]]
    assert "/openapi.json" not in paths
    assert paths == sorted(paths)


def test_emit_docs_accepts_bare_router(ctx: Context, tmp_path: Path) -> None:
    destination = tmp_path / "routes.json"

    emit_docs(compose_router(ctx), destination)

    document = json.loads(destination.read_text())
    assert document["router"]["title"] is None
    assert document["routes"]


def test_emit_docs_markdown(ctx: Context, tmp_path: Path) -> None:
    destination = tmp_path / "routes.md"

    emit_docs(create_app(ctx), destination)

    text = destination.read_text()
    assert text.startswith("# HPC Admin Server")
    assert "| GET | `/api/v1/pirgs/` | List pirgs |" in text


def test_emit_docs_unwritable_destination(ctx: Context, tmp_path: Path) -> None:
    with pytest.raises(DocumentationError):
        emit_docs(create_app(ctx), tmp_path)


def test_print_routes_logs_each_route(ctx: Context, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="hpcadmin.api.docs"):
        print_routes(create_app(ctx))

    assert "/api/v1/users/{user_id}" in caplog.text
    assert "/admin/" in caplog.text


def test_collect_routes_describes_every_mounted_operation(ctx: Context) -> None:
    routes = collect_routes(create_app(ctx))

    by_prefix = {
        prefix: [r for r in routes if r["path"].startswith(prefix)]
        for prefix in ("/admin", "/api/v1/users", "/api/v1/pirgs")
    }
    assert len(by_prefix["/admin"]) == 1
    assert len(by_prefix["/api/v1/users"]) == 5
    assert len(by_prefix["/api/v1/pirgs"]) == 8
    assert len(routes) == 14
    assert collect_routes(compose_router(ctx)) == routes
