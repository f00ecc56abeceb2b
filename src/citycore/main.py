"""Headless simulation entry point.

Runs one city in real time:
1. Load configuration (game constants, catalogs)
2. Restore the city from the state file, or start a new one
3. Create and wire the session services
4. Run the game loop (300 ms per simulated minute) until a shutdown signal
5. Save the city back to the state file

Usage:
    python -m citycore.main
    # or via entry point:
    citycore --state_file my_city.yaml
"""

from __future__ import annotations

import asyncio
import logging
import signal
import sys
from pathlib import Path

from citycore.persistence.state_load import load_city
from citycore.persistence.state_save import DEFAULT_STATE_PATH, save_city
from citycore.session import CitySession, create_session, load_configuration
from citycore.util.types import format_time_12h

log = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = "config"


async def run_city(
    config_dir: str = DEFAULT_CONFIG_DIR,
    state_file: str | Path = DEFAULT_STATE_PATH,
    max_ticks: int | None = None,
) -> CitySession:
    """Load, run and save one city.

    Args:
        config_dir: Base configuration directory path.
        state_file: City YAML file; created on shutdown if missing.
        max_ticks: Stop after this many ticks. Without it the loop runs
            until SIGINT / SIGTERM.

    Returns:
        The closed session, for inspection.
    """
    config = load_configuration(config_dir)
    city = await load_city(state_file, config.catalogs, config.game)
    if city is None:
        log.info("Starting a new city")
    session = create_session(city, config)

    if max_ticks is None:
        loop = asyncio.get_running_loop()

        def _request_shutdown() -> None:
            log.info("Shutdown signal received — stopping …")
            session.game_loop.stop()

        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, _request_shutdown)

    log.info("Game loop running: day %d, %s",
             session.city.day,
             format_time_12h(session.city.clock.hour, session.city.clock.minute))
    await session.game_loop.run(max_ticks)

    log.info("Shutting down after %d ticks …", session.game_loop.tick_count)
    try:
        await save_city(session.city, state_file)
    except Exception:
        log.exception("City save failed — continuing shutdown")
    session.close()
    return session


def main() -> None:
    """Entry point for the headless simulation.

    Supports command-line arguments:
        --state_file <path>  City file to restore and save (default: city.yaml)
        --config_dir <path>  Configuration directory (default: config)
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    options = {"--state_file": DEFAULT_STATE_PATH, "--config_dir": DEFAULT_CONFIG_DIR}
    for flag in options:
        if flag in sys.argv:
            idx = sys.argv.index(flag)
            if idx + 1 >= len(sys.argv):
                print(f"Error: {flag} requires an argument", file=sys.stderr)
                sys.exit(1)
            options[flag] = sys.argv[idx + 1]

    asyncio.run(run_city(config_dir=options["--config_dir"],
                         state_file=options["--state_file"]))


if __name__ == "__main__":
    main()
