"""
registrar.errors — Exception Hierarchy
========================================

Parse failures and missing guild configs are *not* exceptions; the parsers
and the config store return ``None`` for those.  Only conditions a caller
must actively handle are raised.
"""

from __future__ import annotations


class RegistrarError(Exception):
    """Base class for all Registrar errors."""


class StorageError(RegistrarError):
    """A database write failed (connectivity, constraint, …).

    The original :class:`sqlalchemy.exc.SQLAlchemyError` is chained as
    ``__cause__``.
    """


class QueueFullError(RegistrarError):
    """The message queue stayed at capacity for longer than the put timeout."""
