# ============================================================================
# CONFIGURATION LOADER - YAML file + environment overrides + validation
# ============================================================================

"""
Load the server configuration, apply HPCADMIN_SERVER_* environment
overrides and check that every required field is populated.

RESPONSIBILITY:
- Load the YAML config file (default: /etc/hpcadmin-server/config.yaml)
- Apply environment variable overrides (highest priority)
- Validate required fields, reporting the FIRST missing one
- Never log secret values (database password, oauth client secret)

INPUTS:
- YAML file at the given path
- Environment mapping (os.environ unless one is passed in)

OUTPUTS:
- Frozen, validated ServerConfig

ERRORS:
- ConfigReadError   → file missing / unreadable
- ConfigParseError  → malformed YAML or incompatible types
- ConfigValidationError → required field empty or zero
- Bad integer overrides are logged and skipped, never raised
"""

import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import yaml
from pydantic import ValidationError

from hpcadmin.config.constants import DEFAULT_CONFIG_PATH, ENV_OVERRIDES, REDACTED
from hpcadmin.config.settings import ServerConfig
from hpcadmin.core.exceptions import (
    ConfigParseError,
    ConfigReadError,
    ConfigValidationError,
)

logger = logging.getLogger(__name__)

_NULL_TAG = "tag:yaml.org,2002:null"


class TextScalarLoader(yaml.SafeLoader):
    """SafeLoader that resolves only nulls; every other plain scalar stays text."""


TextScalarLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag == _NULL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

# Checked in this order; validation stops at the first failure.
REQUIRED_FIELDS: Tuple[Tuple[str, Callable[[ServerConfig], Any]], ...] = (
    ("host", lambda cfg: cfg.host),
    ("port", lambda cfg: cfg.port),
    ("database host", lambda cfg: cfg.database.host),
    ("database port", lambda cfg: cfg.database.port),
    ("database user", lambda cfg: cfg.database.user),
    ("database password", lambda cfg: cfg.database.password),
    ("database name", lambda cfg: cfg.database.dbname),
    ("oauth tenant ID", lambda cfg: cfg.oauth.tenant_id),
    ("oauth client ID", lambda cfg: cfg.oauth.client_id),
    ("oauth client secret", lambda cfg: cfg.oauth.client_secret),
)

# ============================================================================
# STEP 1: FILE
# ============================================================================

def load_file(config_path: Optional[str] = None) -> ServerConfig:
    """
    Load configuration from the given path.

    If the path is empty, the default configuration file
    /etc/hpcadmin-server/config.yaml is used.

    Raises:
        ConfigReadError: file cannot be opened or read
        ConfigParseError: document is malformed or has incompatible types
    """
    path = Path(config_path or DEFAULT_CONFIG_PATH)
    logger.debug(f"Reading config file: {path}")

    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ConfigReadError(
            f"failed to read configuration file: {e}",
            context={"path": str(path)},
        ) from e

    logger.debug(f"Parsing YAML: {path}")
    try:
        data = yaml.load(raw, Loader=TextScalarLoader)
    except yaml.YAMLError as e:
        raise ConfigParseError(
            f"failed to load configuration: {e}",
            context={"path": str(path)},
        ) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigParseError(
            f"failed to load configuration: expected a mapping, got {type(data).__name__}",
            context={"path": str(path)},
        )

    try:
        return ServerConfig.model_validate(_drop_nulls(data))
    except ValidationError as e:
        raise ConfigParseError(
            f"failed to load configuration: {e}",
            context={"path": str(path)},
        ) from e


def _drop_nulls(data: Dict[str, Any]) -> Dict[str, Any]:
    """Treat `key:` with no value like an absent key."""
    cleaned: Dict[str, Any] = {}
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, dict):
            value = _drop_nulls(value)
        cleaned[key] = value
    return cleaned

# ============================================================================
# STEP 2: ENVIRONMENT
# ============================================================================

def apply_environment(
    cfg: ServerConfig,
    environ: Optional[Mapping[str, str]] = None,
) -> ServerConfig:
    """
    Return a copy of cfg with HPCADMIN_SERVER_* overrides applied.

    Integer fields that fail to parse keep their prior value and log a
    warning; the pass never aborts.
    """
    if environ is None:
        environ = os.environ

    top: Dict[str, Any] = {}
    sections: Dict[str, Dict[str, Any]] = {"database": {}, "oauth": {}}

    for name, (section, field, kind, secret) in ENV_OVERRIDES.items():
        raw = environ.get(name)
        if raw is None:
            continue

        label = f"{section}.{field}" if section else field
        shown = REDACTED if secret else raw

        if kind is int:
            try:
                value: Any = int(raw)
            except ValueError:
                logger.warning(f"⚠️  Invalid integer in {name}={shown}; keeping existing {label}")
                continue
        else:
            value = raw

        if section is None:
            top[field] = value
        else:
            sections[section][field] = value
        logger.debug(f"✓ Env override: {label}={shown}")

    for section, updates in sections.items():
        if updates:
            top[section] = getattr(cfg, section).model_copy(update=updates)

    if not top:
        return cfg
    return cfg.model_copy(update=top)

# ============================================================================
# STEP 3: VALIDATION
# ============================================================================

def validate(cfg: ServerConfig) -> None:
    """
    Raise ConfigValidationError naming the first required field that is
    empty or zero. Returns None when all fields are populated.
    """
    for label, getter in REQUIRED_FIELDS:
        if not getter(cfg):
            raise ConfigValidationError(label)

# ============================================================================
# PIPELINE
# ============================================================================

class ConfigLoader:
    """Run file → environment → validation in order."""

    def __init__(
        self,
        config_path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self.environ = environ

    def load(self) -> ServerConfig:
        logger.info(f"📂 Loading configuration from {self.config_path}")

        cfg = load_file(self.config_path)
        cfg = apply_environment(cfg, self.environ)
        validate(cfg)

        logger.info(
            "✅ Configuration loaded: "
            f"listen={cfg.host}:{cfg.port} | "
            f"database={cfg.database.user}@{cfg.database.host}:{cfg.database.port}/{cfg.database.dbname} | "
            f"oauth_tenant={cfg.oauth.tenant_id}"
        )
        return cfg


def load_config(
    config_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ServerConfig:
    """Load, override and validate the server configuration."""
    return ConfigLoader(config_path, environ).load()
