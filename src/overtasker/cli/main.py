# src/overtasker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState on top of the asyncio loop, evaluates
the day streak, then runs the console adapter until /exit or EOF.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state, shutdown_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core import api
from ..core.clock import AsyncioScheduler
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(settings) -> None:
    state = create_initial_state(settings=settings, scheduler=AsyncioScheduler())
    api.begin_session(state)
    try:
        await run_console_loop(state)
    finally:
        shutdown_state(state)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir = getattr(settings, "data_dir", ".local/overtasker")
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "overtasker"))

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt, shutting down...")
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
