"""
================================================================================
FILE: hpcadmin/utils.py
================================================================================

PURPOSE:
    Shared helpers used across the server.

KEY FACTS:
    - No imports from hpcadmin modules (prevents circular dependencies)
    - All functions are pure/stateless
"""

import uuid


def generate_request_id() -> str:
    """Generate unique request ID for correlation tracking."""
    return str(uuid.uuid4())
