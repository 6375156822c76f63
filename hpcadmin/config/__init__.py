"""
================================================================================
CONFIG PACKAGE - Server configuration
================================================================================

EXPORTS
-------
    load_config()       - file → env overrides → validation (call at startup)
    load_file()         - read and parse the YAML file
    apply_environment() - apply HPCADMIN_SERVER_* overrides
    validate()          - first-missing-field check
    ServerConfig        - Pydantic models for type hints

KEY PRINCIPLE
-------------
Config layer never imports from hpcadmin.api or hpcadmin.data.
The resolved config is passed explicitly; there is no global instance.

USAGE
-----
from hpcadmin.config import load_config

cfg = load_config(args.config)
"""

from hpcadmin.config.settings import DatabaseConfig, OauthConfig, ServerConfig
from hpcadmin.config.loader import (
    ConfigLoader,
    apply_environment,
    load_config,
    load_file,
    validate,
)

__all__ = [
    "ServerConfig",
    "OauthConfig",
    "DatabaseConfig",
    "ConfigLoader",
    "load_config",
    "load_file",
    "apply_environment",
    "validate",
]
