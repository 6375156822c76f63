"""
================================================================================
FILE: hpcadmin/api/docs.py
================================================================================

PURPOSE:
    Describe the composed route tree (paths + methods) without serving it.

WORKFLOW:
    1. collect_routes() reads the OpenAPI paths of the app (a bare router
       is first mounted on a throwaway FastAPI app)
    2. emit_docs() serializes them to JSON, or Markdown for *.md targets
    3. print_routes() logs the same table at startup

KEY FACTS:
    - Built from the public openapi() schema, so routers mounted with
      include_router are described whether or not FastAPI copies their
      routes up; its own /docs and /openapi.json endpoints never appear
    - Output is sorted by path so repeated runs produce identical files
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from fastapi import APIRouter, FastAPI

from hpcadmin.core.exceptions import DocumentationError

logger = logging.getLogger(__name__)

RouteSource = Union[FastAPI, APIRouter]


def _openapi_paths(source: RouteSource) -> Dict[str, Dict[str, Any]]:
    if isinstance(source, FastAPI):
        app = source
    else:
        app = FastAPI()
        app.include_router(source)
    return app.openapi().get("paths", {})


def collect_routes(source: RouteSource) -> List[Dict[str, Any]]:
    routes = []
    for path, operations in _openapi_paths(source).items():
        for method, operation in operations.items():
            routes.append(
                {
                    "path": path,
                    "methods": [method.upper()],
                    "name": operation.get("operationId", ""),
                    "summary": operation.get("summary", ""),
                }
            )
    return sorted(routes, key=lambda r: (r["path"], r["methods"]))


def _render_json(source: RouteSource, routes: List[Dict[str, Any]]) -> str:
    document = {
        "router": {
            "title": getattr(source, "title", None),
            "version": getattr(source, "version", None),
        },
        "routes": routes,
    }
    return json.dumps(document, indent=2) + "\n"


def _render_markdown(source: RouteSource, routes: List[Dict[str, Any]]) -> str:
    title = getattr(source, "title", None) or "Routes"
    lines = [f"# {title}", "", "| Methods | Path | Summary |", "|---|---|---|"]
    for route in routes:
        lines.append(f"| {', '.join(route['methods'])} | `{route['path']}` | {route['summary']} |")
    return "\n".join(lines) + "\n"


def emit_docs(source: RouteSource, destination: Union[str, Path]) -> None:
    """
    Write the route tree description to destination.

    Raises:
        DocumentationError: destination cannot be written
    """
    path = Path(destination)
    routes = collect_routes(source)
    if path.suffix.lower() == ".md":
        body = _render_markdown(source, routes)
    else:
        body = _render_json(source, routes)

    try:
        path.write_text(body, encoding="utf-8")
    except OSError as e:
        raise DocumentationError(
            f"failed to write route documentation: {e}",
            context={"path": str(path)},
        ) from e

    logger.info(f"✓ Wrote documentation for {len(routes)} routes to {path}")


def print_routes(source: RouteSource) -> None:
    for route in collect_routes(source):
        logger.info(f"{','.join(route['methods']):<12} {route['path']}")
