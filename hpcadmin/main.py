"""
================================================================================
FILE: hpcadmin/main.py
================================================================================

PURPOSE:
    Process bootstrap. Resolves configuration, opens the database engine,
    composes the route tree, then either serves HTTP or writes route docs.

STARTUP SEQUENCE:
    1. Load .env (real environment variables still win)
    2. load_config: YAML file → HPCADMIN_SERVER_* overrides → validation
    3. new_connection: open + verify the database engine (single attempt)
    4. bind_connection: engine into the root Context
    5. create_app: compose /admin, /api/v1/users, /api/v1/pirgs
    6. -docs <path> given → write docs and exit 0
       otherwise → serve on the configured host:port

KEY FACTS:
    - Any startup failure logs one CRITICAL line and exits 1 before a
      listener is bound
    - The engine is disposed after uvicorn has drained in-flight requests
    - Config and engine are passed explicitly; nothing is stored globally
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI

from hpcadmin.api import create_app, emit_docs, print_routes
from hpcadmin.config import ServerConfig, load_config
from hpcadmin.config.constants import DEFAULT_CONFIG_PATH, DEFAULT_LOG_LEVEL, ENV_LOG_LEVEL
from hpcadmin.core.context import Context, bind_connection
from hpcadmin.core.exceptions import FatalException
from hpcadmin.data import DBRequest, close_connection, new_connection
from hpcadmin.logging import configure_logging

logger = logging.getLogger(__name__)

GRACEFUL_SHUTDOWN_SECONDS = 30

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _log_level(value: str) -> str:
    level = value.upper()
    if level not in LOG_LEVELS:
        raise argparse.ArgumentTypeError(
            f"invalid log level {value!r} (choose from {', '.join(LOG_LEVELS)})"
        )
    return level


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="hpcadmin-server",
        description="Administrative API for HPC users and pirgs",
    )
    parser.add_argument(
        "-config", "--config",
        dest="config",
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to the YAML configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "-docs", "--docs",
        dest="docs",
        default="",
        help="Generate router documentation at this path and exit",
    )
    parser.add_argument(
        "--disable-ssl",
        dest="disable_ssl",
        action="store_true",
        help="Connect to the database with sslmode=disable",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        type=_log_level,
        choices=LOG_LEVELS,
        default=os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL),
        help=f"Logging level (default: ${ENV_LOG_LEVEL} or {DEFAULT_LOG_LEVEL})",
    )
    return parser.parse_args(argv)


def serve(app: FastAPI, cfg: ServerConfig, log_level: str = DEFAULT_LOG_LEVEL) -> None:
    """Run uvicorn on the configured address until SIGINT/SIGTERM."""
    logger.info(f"Listening on {cfg.host}:{cfg.port}")
    uvicorn.run(
        app,
        host=cfg.host,
        port=cfg.port,
        log_config=None,
        log_level=log_level.lower(),
        timeout_graceful_shutdown=GRACEFUL_SHUTDOWN_SECONDS,
    )


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    configure_logging(args.log_level)

    logger.info("=" * 80)
    logger.info("APPLICATION STARTUP")
    logger.info("=" * 80)

    try:
        cfg = load_config(args.config)
        engine = new_connection(DBRequest.from_config(cfg.database, disable_ssl=args.disable_ssl))
    except FatalException as e:
        logger.critical(f"STARTUP FAILED: {e}")
        return 1

    try:
        ctx = bind_connection(Context.background(), engine)
        app = create_app(ctx)

        if args.docs:
            emit_docs(app, args.docs)
            return 0

        print_routes(app)
        logger.info("=" * 80)
        logger.info("APPLICATION STARTUP COMPLETE")
        logger.info("=" * 80)

        serve(app, cfg, args.log_level)
        return 0
    except FatalException as e:
        logger.critical(f"STARTUP FAILED: {e}")
        return 1
    finally:
        close_connection(engine)


if __name__ == "__main__":
    sys.exit(main())
