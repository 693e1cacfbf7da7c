"""
registrar.bot.__main__ — Entry point for ``python -m registrar.bot``
======================================================================

Wiring:
1. Load .env (secrets).
2. Load config.yaml (soft settings, optional).
3. Create the SQLAlchemy engine and ensure tables exist.
4. Create the RegistrarBot and hand it config + engine.
5. Start the bot (blocking — runs the asyncio event loop).

Any failure before the bot is running (no token, no database, bad token)
is fatal and exits with status 1.

Run with::

    python -m registrar.bot
"""

from __future__ import annotations

import logging
import os
import sys

import discord
import yaml
from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError

from registrar.bot.core import RegistrarBot
from registrar.config import load_config
from registrar.database.engine import create_db_engine, init_db

logger = logging.getLogger("registrar")

TOKEN_PLACEHOLDER = "your-discord-bot-token-here"


def _configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
    )


def main() -> None:
    """Bootstrap and run the Registrar bot."""

    # 1. Environment variables (secrets).
    load_dotenv()
    _configure_logging()

    token = os.getenv("DISCORD_TOKEN")
    if not token or token == TOKEN_PLACEHOLDER:
        logger.critical(
            "DISCORD_TOKEN is not set.  "
            "Copy .env.example → .env and paste your bot token."
        )
        sys.exit(1)

    # 2. Soft configuration.
    config_path = os.getenv("REGISTRAR_CONFIG", "config.yaml")
    try:
        cfg = load_config(config_path)
    except (yaml.YAMLError, KeyError, ValueError, TypeError):
        logger.critical("Invalid configuration file %s", config_path, exc_info=True)
        sys.exit(1)
    logger.info(
        "Config loaded — prefix %r, queue capacity %d", cfg.bot_prefix, cfg.queue_capacity
    )

    # 3. Database.
    try:
        engine = create_db_engine()
        init_db(engine)
    except (SQLAlchemyError, ImportError):
        # ImportError: DATABASE_URL names a driver that is not installed
        logger.critical("Cannot open the database", exc_info=True)
        sys.exit(1)

    # 4. Bot.
    bot = RegistrarBot(cfg=cfg, engine=engine)

    # 5. Run (blocks until Ctrl+C or SIGTERM).
    logger.info("Starting Registrar bot…")
    try:
        bot.run(token, log_handler=None)
    except discord.LoginFailure:
        logger.critical("Discord rejected the bot token.")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Shutting down gracefully…")


if __name__ == "__main__":
    main()
