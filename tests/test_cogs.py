"""
tests/test_cogs.py — Intake & Admin Cog Tests
==============================================

Exercises the Discord-facing glue with mocked messages and contexts; no
gateway connection required.
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import discord

from registrar.bot.cogs.admin import Admin
from registrar.bot.cogs.intake import Intake
from registrar.config import RegistrarConfig
from registrar.constants import DEFAULT_MESSAGES
from registrar.engine.events import QueuedMessage
from registrar.engine.queue import MessageQueue
from registrar.services.config_service import GuildConfig, get_guild_config

GUILD_ID = 100


# Helper to run async tests without pytest-asyncio
def run_async(coro):
    """Run an async coroutine to completion on a fresh event loop."""
    return asyncio.run(coro)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _make_bot(engine=None, queue: MessageQueue | None = None) -> MagicMock:
    bot = MagicMock()
    bot.cfg = RegistrarConfig()
    bot.engine = engine or MagicMock()
    bot.queue = queue or MessageQueue(capacity=10)
    bot.processor.process = AsyncMock()
    return bot


def _make_message(
    content: str,
    *,
    is_bot: bool = False,
    in_guild: bool = True,
) -> MagicMock:
    message = MagicMock()
    message.id = 555
    message.content = content
    message.author.id = 7000
    message.author.bot = is_bot
    message.channel.id = 10
    message.guild = MagicMock(id=GUILD_ID) if in_guild else None
    return message


# ===========================================================================
# Intake
# ===========================================================================
class TestIntakeCog:
    def test_guild_message_is_enqueued_and_drained(self):
        bot = _make_bot()
        cog = Intake(bot)

        run_async(cog._handle_message(_make_message("Name: Alice, Age: 30")))

        bot.processor.process.assert_awaited_once_with(QueuedMessage(
            guild_id=GUILD_ID,
            channel_id=10,
            content="Name: Alice, Age: 30",
            author_id=7000,
            message_id=555,
        ))
        assert bot.queue.empty()

    def test_bot_messages_are_ignored(self):
        bot = _make_bot()
        run_async(Intake(bot)._handle_message(_make_message("hi", is_bot=True)))
        bot.processor.process.assert_not_awaited()

    def test_direct_messages_are_ignored(self):
        bot = _make_bot()
        run_async(Intake(bot)._handle_message(_make_message("hi", in_guild=False)))
        bot.processor.process.assert_not_awaited()

    def test_config_command_is_not_queued(self):
        bot = _make_bot()
        run_async(Intake(bot)._handle_message(_make_message("!setconfig 1 2 3 4 5")))
        bot.processor.process.assert_not_awaited()
        assert bot.queue.empty()

    def test_lookalike_command_is_queued(self):
        bot = _make_bot()
        run_async(Intake(bot)._handle_message(_make_message("!setconfigure 1 2 3 4 5")))
        bot.processor.process.assert_awaited_once()
        assert bot.processor.process.await_args.args[0].content == "!setconfigure 1 2 3 4 5"

    def test_bare_config_command_is_not_queued(self):
        bot = _make_bot()
        run_async(Intake(bot)._handle_message(_make_message("!setconfig")))
        bot.processor.process.assert_not_awaited()

    def test_processor_error_is_contained(self):
        bot = _make_bot()
        bot.processor.process.side_effect = RuntimeError("boom")

        run_async(Intake(bot).on_message(_make_message("Name: Alice, Age: 30")))

        bot.processor.process.assert_awaited_once()

    def test_full_queue_still_drains_backlog(self):
        queue: MessageQueue[QueuedMessage] = MessageQueue(capacity=1, put_timeout=0.01)
        bot = _make_bot(queue=queue)
        backlog = QueuedMessage(GUILD_ID, 10, "Name: Old, Age: 1", 1, 1)

        async def _inner():
            await queue.put(backlog)
            await Intake(bot)._handle_message(_make_message("Name: New, Age: 2"))

        run_async(_inner())

        # The new message was dropped; the buffered one was processed.
        bot.processor.process.assert_awaited_once_with(backlog)


# ===========================================================================
# Admin
# ===========================================================================
def _make_ctx(content: str, *, administrator: bool) -> MagicMock:
    ctx = MagicMock()
    ctx.guild.id = GUILD_ID
    ctx.message.content = content
    ctx.author = MagicMock(spec=discord.Member)
    ctx.author.id = 42
    ctx.author.guild_permissions.administrator = administrator
    ctx.reply = AsyncMock()
    return ctx


class TestAdminCog:
    def test_admin_setconfig_saves_and_confirms(self, db_engine):
        cog = Admin(_make_bot(engine=db_engine))
        ctx = _make_ctx("!setconfig 1 2 3 4 5", administrator=True)

        run_async(cog.setconfig.callback(cog, ctx))

        assert get_guild_config(db_engine, GUILD_ID) == GuildConfig(GUILD_ID, 1, 2, 3, 4, 5)
        ctx.reply.assert_awaited_once_with(DEFAULT_MESSAGES["config_saved"])

    def test_non_admin_setconfig_is_denied(self, db_engine):
        cog = Admin(_make_bot(engine=db_engine))
        ctx = _make_ctx("!setconfig 1 2 3 4 5", administrator=False)

        run_async(cog.setconfig.callback(cog, ctx))

        assert get_guild_config(db_engine, GUILD_ID) is None
        ctx.reply.assert_awaited_once_with(DEFAULT_MESSAGES["permission_denied"])

    def test_bad_arguments_reply_usage(self, db_engine):
        cog = Admin(_make_bot(engine=db_engine))
        ctx = _make_ctx("!setconfig 1 2 3 4 x", administrator=True)

        run_async(cog.setconfig.callback(cog, ctx))

        reply = ctx.reply.await_args.args[0]
        assert reply.startswith("Usage: !setconfig")
        assert get_guild_config(db_engine, GUILD_ID) is None
