"""
API package.

Exports:
    create_app: FastAPI application over the composed route tree
    compose_router: root route tree built from a bound context
    emit_docs: write the route tree description to a file
"""

from hpcadmin.api.docs import emit_docs, print_routes
from hpcadmin.api.main import compose_router, create_app

__all__ = ["create_app", "compose_router", "emit_docs", "print_routes"]
