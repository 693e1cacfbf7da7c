"""
registrar.config — YAML Configuration Loader
==============================================

**Why this file exists:**
Secrets (``DISCORD_TOKEN``, ``DATABASE_URL``) live in ``.env``.  Everything
else that an operator may want to tune without touching code lives in
``config.yaml``: the command prefix, the queue limits, and the reply texts
shown to members (so a server can run the bot in its own language).

Per-guild channel/role wiring is *not* here — that is stored in the
``guild_configs`` table and edited with ``!setconfig``.

Usage::

    from registrar.config import load_config

    cfg = load_config()          # reads ./config.yaml if present
    print(cfg.bot_prefix)        # "!"
    print(cfg.messages["config_saved"])
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from registrar.constants import (
    DEFAULT_MESSAGES,
    DEFAULT_QUEUE_CAPACITY,
    DEFAULT_QUEUE_PUT_TIMEOUT,
    SETCONFIG_COMMAND,
)


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class RegistrarConfig:
    """Immutable configuration loaded from ``config.yaml``."""

    # Discord
    bot_prefix: str = "!"

    # Queue
    queue_capacity: int = DEFAULT_QUEUE_CAPACITY
    queue_put_timeout: float | None = DEFAULT_QUEUE_PUT_TIMEOUT

    # Replies (defaults merged with overrides)
    messages: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_MESSAGES))

    @property
    def setconfig_literal(self) -> str:
        """The full command text a message must start with, e.g. ``!setconfig``."""
        return f"{self.bot_prefix}{SETCONFIG_COMMAND}"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def load_config(path: str | Path = "config.yaml") -> RegistrarConfig:
    """Read *path* and return a :class:`RegistrarConfig` instance.

    Unlike the ``.env`` secrets, ``config.yaml`` is optional: a missing file
    yields the built-in defaults.

    Raises
    ------
    KeyError
        If ``messages:`` overrides a reply key that does not exist.
    ValueError
        If ``queue_capacity`` is not a positive integer.
    """
    config_path = Path(path)
    if not config_path.exists():
        return RegistrarConfig()

    with open(config_path, encoding="utf-8") as fh:
        raw: dict = yaml.safe_load(fh) or {}

    overrides: dict = raw.get("messages") or {}
    unknown = set(overrides) - set(DEFAULT_MESSAGES)
    if unknown:
        raise KeyError(f"Unknown message keys in {config_path}: {sorted(unknown)}")
    messages = {**DEFAULT_MESSAGES, **{k: str(v) for k, v in overrides.items()}}

    capacity = int(raw.get("queue_capacity", DEFAULT_QUEUE_CAPACITY))
    if capacity <= 0:
        raise ValueError(f"queue_capacity must be positive, got {capacity}")

    timeout = raw.get("queue_put_timeout", DEFAULT_QUEUE_PUT_TIMEOUT)

    return RegistrarConfig(
        bot_prefix=str(raw.get("bot_prefix", "!")),
        queue_capacity=capacity,
        queue_put_timeout=float(timeout) if timeout is not None else None,
        messages=messages,
    )
