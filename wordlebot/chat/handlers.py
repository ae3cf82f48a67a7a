"""
Chat Command Handlers

Registers the bot's hybrid (slash and prefix) commands.
"""

import asyncio
from typing import Optional
import discord
from discord import app_commands
from discord.ext import commands
from ..config.game_settings import LEADERBOARD_SIZE
from ..models.errors import TokenLedgerError
from ..services.session_orchestrator import SessionOrchestrator
from ..services.token_ledger import TokenLedger
from ..utils.bot_logger import bot_logger
from ..utils.helpers import format_account_age, format_leaderboard
from .channel import DiscordGameChannel


def display_name(bot: commands.Bot, guild: Optional[discord.Guild], user_id: int) -> str:
    """Best cached name for a user id, without hitting the API."""
    member = guild.get_member(user_id) if guild else None
    if member:
        return member.display_name
    user = bot.get_user(user_id)
    if user:
        return user.display_name
    return f"User {user_id}"


def register_command_handlers(bot: commands.Bot,
                              orchestrator: SessionOrchestrator,
                              ledger: TokenLedger):
    """Register all chat command handlers."""

    @bot.hybrid_command(name='wordle', description='Play a game of Wordle to win tokens')
    async def wordle(ctx: commands.Context):
        bot_logger.log_command('wordle', ctx.author.id, str(ctx.author), ctx.channel.id)
        await orchestrator.play(ctx.author.id, DiscordGameChannel(bot, ctx))

    @bot.hybrid_command(name='age', description="Displays your or another user's account creation date")
    @app_commands.describe(user='Selected user')
    async def age(ctx: commands.Context, user: Optional[discord.User] = None):
        target = user or ctx.author
        bot_logger.log_command('age', ctx.author.id, str(ctx.author), ctx.channel.id, target=target.id)
        await ctx.send(format_account_age(target.name, target.created_at))

    @bot.hybrid_command(name='tokens', description='Shows your or another user\'s token balance')
    @app_commands.describe(user='Selected user')
    async def tokens(ctx: commands.Context, user: Optional[discord.User] = None):
        target = user or ctx.author
        bot_logger.log_command('tokens', ctx.author.id, str(ctx.author), ctx.channel.id, target=target.id)
        balance = await asyncio.to_thread(ledger.balance, target.id)
        await ctx.send(f"{target.display_name} has {balance} tokens")

    @bot.hybrid_command(name='leaderboard', description='Shows the users with the most tokens')
    async def leaderboard(ctx: commands.Context):
        bot_logger.log_command('leaderboard', ctx.author.id, str(ctx.author), ctx.channel.id)
        entries = await asyncio.to_thread(ledger.top, LEADERBOARD_SIZE)
        named = [(display_name(bot, ctx.guild, user_id), amount) for user_id, amount in entries]
        await ctx.send(format_leaderboard(named))

    @bot.event
    async def on_command_error(ctx: commands.Context, error: commands.CommandError):
        """Turn command failures into a short notice instead of silence."""
        if isinstance(error, commands.CommandNotFound):
            return

        # Slash invocations of hybrid commands arrive wrapped twice
        original = error
        while (isinstance(original, (commands.CommandError, app_commands.AppCommandError))
               and getattr(original, 'original', None) is not None):
            original = original.original

        command_name = ctx.command.qualified_name if ctx.command else 'unknown'
        bot_logger.log_error(original, command_name, ctx.author.id, channel_id=ctx.channel.id)

        if isinstance(error, commands.UserInputError):
            await ctx.send(f"Invalid arguments: {error}")
        elif isinstance(original, TokenLedgerError):
            await ctx.send("The token ledger is unavailable right now; your game result still stands.")
        else:
            await ctx.send("Something went wrong running that command.")
