# ============================================================================
# SETTINGS - Type-safe configuration structures for the server
# ============================================================================

"""
Type-safe, immutable configuration structures.

Loaded from:
1. YAML config file (base configuration)
2. HPCADMIN_SERVER_* environment variables (highest priority)
3. Required-field validation (see loader.validate)

RESPONSIBILITY:
- Define configuration schema using Pydantic models
- Coerce types on load (port: "5432" -> 5432)
- Default every missing field to its zero value so validation, not parsing,
  reports it
- NO file I/O here (that's loader.py)

USAGE:
from hpcadmin.config import load_config

cfg = load_config("/etc/hpcadmin-server/config.yaml")
dbname = cfg.database.dbname
"""

from pydantic import BaseModel, ConfigDict, Field

# ============================================================================
# OAUTH SETTINGS
# ============================================================================

class OauthConfig(BaseModel):
    """OAuth tenant credentials."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    tenant_id: str = ""
    client_id: str = ""
    client_secret: str = Field(default="", repr=False)

# ============================================================================
# DATABASE SETTINGS
# ============================================================================

class DatabaseConfig(BaseModel):
    """Relational store connection parameters."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    host: str = ""
    port: int = 0
    user: str = ""
    password: str = Field(default="", repr=False)
    dbname: str = ""

# ============================================================================
# ROOT SETTINGS
# ============================================================================

class ServerConfig(BaseModel):
    """
    Server configuration - main configuration container.

    Frozen after construction: every override pass returns a new value via
    model_copy, so a validated config can be shared without copying.

    YAML SHAPE:
        host: 0.0.0.0
        port: 3333
        oauth:
          tenant_id: ...
          client_id: ...
          client_secret: ...
        database:
          host: localhost
          port: 5432
          user: hpcadmin
          password: ...
          dbname: hpcadmin
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    host: str = ""
    port: int = 0
    oauth: OauthConfig = Field(default_factory=OauthConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
