"""
================================================================================
FILE: hpcadmin/config/constants.py
================================================================================

PURPOSE:
    Application-wide constants. Immutable values used throughout the codebase.

CONSTANT CATEGORIES:
    1. Configuration sources (default file path, environment variable names)
    2. API layout (version prefix, mount points)
    3. Server defaults
"""

from typing import Dict, Optional, Tuple

# ================================================================================
# CONFIGURATION SOURCES
# ================================================================================

DEFAULT_CONFIG_PATH = "/etc/hpcadmin-server/config.yaml"

ENV_HOST = "HPCADMIN_SERVER_HOST"
ENV_PORT = "HPCADMIN_SERVER_PORT"
ENV_DATABASE_HOST = "HPCADMIN_SERVER_DATABASE_HOST"
ENV_DATABASE_PORT = "HPCADMIN_SERVER_DATABASE_PORT"
ENV_DATABASE_USER = "HPCADMIN_SERVER_DATABASE_USER"
ENV_DATABASE_PASSWORD = "HPCADMIN_SERVER_DATABASE_PASSWORD"
ENV_DATABASE_DBNAME = "HPCADMIN_SERVER_DATABASE_DBNAME"
ENV_OAUTH_TENANT_ID = "HPCADMIN_SERVER_OAUTH_TENANT_ID"
ENV_OAUTH_CLIENT_ID = "HPCADMIN_SERVER_OAUTH_CLIENT_ID"
ENV_OAUTH_CLIENT_SECRET = "HPCADMIN_SERVER_OAUTH_CLIENT_SECRET"
ENV_LOG_LEVEL = "HPCADMIN_SERVER_LOG_LEVEL"

# env var -> (section, field, kind, secret)
# section None means a top-level ServerConfig field
ENV_OVERRIDES: Dict[str, Tuple[Optional[str], str, type, bool]] = {
    ENV_HOST: (None, "host", str, False),
    ENV_PORT: (None, "port", int, False),
    ENV_DATABASE_HOST: ("database", "host", str, False),
    ENV_DATABASE_PORT: ("database", "port", int, False),
    ENV_DATABASE_USER: ("database", "user", str, False),
    ENV_DATABASE_PASSWORD: ("database", "password", str, True),
    ENV_DATABASE_DBNAME: ("database", "dbname", str, False),
    ENV_OAUTH_TENANT_ID: ("oauth", "tenant_id", str, False),
    ENV_OAUTH_CLIENT_ID: ("oauth", "client_id", str, False),
    ENV_OAUTH_CLIENT_SECRET: ("oauth", "client_secret", str, True),
}

REDACTED = "REDACTED"

# ================================================================================
# API LAYOUT
# ================================================================================

API_VERSION = "v1"
API_PREFIX = f"/api/{API_VERSION}"
ADMIN_PREFIX = "/admin"
USERS_PREFIX = "/users"
PIRGS_PREFIX = "/pirgs"
API_TITLE = "HPC Admin Server"
SERVICE_VERSION = "0.1.0"

# ================================================================================
# SERVER DEFAULTS
# ================================================================================

DEFAULT_LOG_LEVEL = "INFO"
