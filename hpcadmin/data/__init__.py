"""
Data package.

Exports:
    DBRequest: connection parameters
    new_connection: open and verify the database engine
    close_connection: dispose the engine at shutdown
"""

from .connection import DBRequest, close_connection, new_connection

__all__ = ["DBRequest", "new_connection", "close_connection"]
