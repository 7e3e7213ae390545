"""
Collection seeding script.

Creates missing collections with their defaults (one account per role and
the default checks). With ``--reset`` every collection is overwritten with
the defaults instead, discarding all reports.

Usage:
    python -m dailyops.reset_data [--reset]
"""

import argparse
import asyncio
import logging

from dailyops.app.core.config import settings
from dailyops.app.core.observability import configure_logging
from dailyops.app.db.registry import close_registry, get_registry

logger = logging.getLogger("dailyops")


async def seed_collections(reset: bool = False):
    """Seed (or reset) the configured storage medium."""
    registry = get_registry()
    try:
        if reset:
            await registry.reset()
        else:
            await registry.initialize()

        users = await registry.users.list()
        tasks = await registry.tasks.list()
        logger.info("Storage: %s", settings.storage_backend)
        logger.info("Users (%d):", len(users))
        for user in users:
            logger.info("  - %-12s %s", user.role.value, user.username)
        logger.info("Tasks (%d):", len(tasks))
        for task in sorted(tasks, key=lambda t: t.order):
            logger.info("  %d. %s", task.order, task.title)
    finally:
        await close_registry()


def main():
    parser = argparse.ArgumentParser(description="Seed or reset the report collections")
    parser.add_argument("--reset", action="store_true", help="overwrite all collections with defaults")
    args = parser.parse_args()

    configure_logging(settings.log_level)
    asyncio.run(seed_collections(reset=args.reset))


if __name__ == "__main__":
    main()
