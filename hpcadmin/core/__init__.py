"""
Core package.

Exports:
    Context, bind_connection, connection_from: context binding helpers
    HPCAdminException: root of the exception hierarchy
"""

from .context import DB_CONN_KEY, Context, ContextKey, bind_connection, connection_from
from .exceptions import HPCAdminException

__all__ = [
    "Context",
    "ContextKey",
    "DB_CONN_KEY",
    "bind_connection",
    "connection_from",
    "HPCAdminException",
]
