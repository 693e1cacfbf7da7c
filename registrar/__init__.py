"""
Registrar — Registration & Manual-Review Intake for Discord
===========================================================
Watches configured guild channels for two fixed text forms, stores
registrations, grants the configured "advanced" role, and routes manual
review applications to the admin team.

Package layout::

    registrar/
    ├── config.py          # YAML → typed Python config
    ├── constants.py       # Command literal, form labels, default replies
    ├── errors.py          # Exception hierarchy
    ├── database/
    │   ├── engine.py      # SQLAlchemy engine + async helper
    │   └── models.py      # guild_configs + registrations
    ├── engine/
    │   ├── events.py      # QueuedMessage envelope
    │   ├── forms.py       # Registration / manual-review form parsers
    │   ├── routing.py     # ChannelRoute resolution
    │   └── queue.py       # Bounded message queue with locked drain
    ├── services/
    │   ├── config_service.py        # Per-guild config store
    │   ├── registration_service.py  # Registration writer
    │   ├── command_service.py       # !setconfig validation + upsert
    │   └── processor.py             # Queued message processing
    └── bot/
        ├── core.py        # Bot subclass, cog loader
        ├── gateway.py     # Outbound Discord calls behind a protocol
        └── cogs/
            ├── intake.py  # on_message → enqueue → drain
            └── admin.py   # !setconfig
"""

__version__ = "0.1.0"
