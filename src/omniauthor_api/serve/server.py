"""Launch the gateway under uvicorn."""
from __future__ import annotations
import argparse
import dataclasses
import logging
from typing import Sequence

import uvicorn

from omniauthor_api.common.config import LOG_LEVELS, load_settings, normalize_log_level
from omniauthor_api.common.logging_setup import setup_logging
from omniauthor_api.serve.fastapi_app import create_app

LOGGER = logging.getLogger("omniauthor.server")

def _log_level(value: str) -> str:
    try:
        return normalize_log_level(value).lower()
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e

def main(argv: Sequence[str] | None = None) -> None:
    settings = load_settings()
    ap = argparse.ArgumentParser(description="Run the OmniAuthor API gateway")
    ap.add_argument("--host", default=settings.host)
    ap.add_argument("--port", type=int, default=settings.port)
    ap.add_argument(
        "--log-level",
        type=_log_level,
        choices=[level.lower() for level in LOG_LEVELS],
        default=settings.log_level.lower(),
    )
    args = ap.parse_args(argv)

    settings = dataclasses.replace(
        settings, host=args.host, port=args.port, log_level=args.log_level.upper()
    )
    setup_logging(settings.log_level)

    LOGGER.info("OmniAuthor API listening on port %s", settings.port)
    LOGGER.info("Project: %s", settings.project)
    LOGGER.info("Location: %s", settings.location)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )

if __name__ == "__main__":
    main()
