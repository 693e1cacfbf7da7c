"""
registrar.constants — Shared Literals & Default Replies
=========================================================

Single source of truth for the command name, form labels, and the
user-facing reply texts.  Replies can be overridden per deployment via the
``messages:`` section of ``config.yaml`` (see :mod:`registrar.config`).
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------
SETCONFIG_COMMAND = "setconfig"

# Command token + five snowflakes
SETCONFIG_TOKEN_COUNT = 6

SETCONFIG_FIELDS: tuple[str, ...] = (
    "registration_channel",
    "manual_channel",
    "admin_channel",
    "admin_role",
    "advanced_role",
)

# Snowflakes are unsigned, but the columns are signed BIGINT
SNOWFLAKE_MAX = 2**63 - 1


# ---------------------------------------------------------------------------
# Form labels (case-sensitive)
# ---------------------------------------------------------------------------
NAME_LABEL = "Name:"
AGE_LABEL = "Age:"
MANUAL_LABEL = "Manual:"


# ---------------------------------------------------------------------------
# Queue
# ---------------------------------------------------------------------------
DEFAULT_QUEUE_CAPACITY = 100
DEFAULT_QUEUE_PUT_TIMEOUT = 30.0


# ---------------------------------------------------------------------------
# User-facing replies
# ---------------------------------------------------------------------------
DEFAULT_MESSAGES: dict[str, str] = {
    "permission_denied": "You do not have permission to run this command.",
    "setconfig_usage": (
        "Usage: {prefix}setconfig <registration_channel> <manual_channel> "
        "<admin_channel> <admin_role> <advanced_role>"
    ),
    "setconfig_out_of_range": (
        "The {field} id {value} is out of range; ids must be at most {max}."
    ),
    "config_saved": "Configuration saved.",
    "config_failed": "Could not save the configuration. Please try again later.",
    "registration_complete": "Registration complete, the advanced role has been assigned.",
    "storage_error": "An error occurred while saving your data.",
    "manual_submitted": "Your application has been submitted. Please wait for an admin to review it.",
    "manual_alert": "{admin_role} New manual review application from {author}: {content}",
    "manual_failed": "Your application could not be delivered to the admins. Please try again later.",
}
