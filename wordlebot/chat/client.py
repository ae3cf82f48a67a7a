"""
Chat Client

Builds the Discord bot and wires its commands to the game and ledger
services.
"""

import asyncio
from typing import Sequence
import discord
from discord.ext import commands
from ..config import Config
from ..services.dm_service import initialize_dm_service, reset_dm_service
from ..services.session_orchestrator import SessionOrchestrator
from ..services.token_ledger import TokenLedger
from ..utils.bot_logger import bot_logger
from .handlers import register_command_handlers


class WordleBot(commands.Bot):
    """Bot that also exposes its connection to the internal API."""

    def __init__(self, config_class=Config, **kwargs):
        intents = discord.Intents.default()
        intents.message_content = True  # Required for prefix commands and guesses
        super().__init__(command_prefix=config_class.COMMAND_PREFIX, intents=intents, **kwargs)
        self.config_class = config_class

    async def setup_hook(self) -> None:
        initialize_dm_service(
            self,
            loop=asyncio.get_running_loop(),
            timeout=self.config_class.DM_TIMEOUT_SECONDS
        )
        synced = await self.tree.sync()
        bot_logger.logger.info(f"Synced {len(synced)} application commands")

    async def on_ready(self) -> None:
        bot_logger.logger.info(f"Logged in as {self.user} (ID: {self.user.id})")
        print(f"Logged in as {self.user} (ID: {self.user.id})")

    async def close(self) -> None:
        reset_dm_service()
        await super().close()


def create_bot(ledger: TokenLedger, words: Sequence[str], config_class=Config) -> WordleBot:
    """
    Create the bot with all command handlers registered.

    Args:
        ledger: Token ledger used for rewards, balances and the leaderboard
        words: Candidate solutions for the word game
        config_class: Configuration class to use

    Returns:
        WordleBot ready to be started with bot.run(token)
    """
    bot = WordleBot(config_class)
    orchestrator = SessionOrchestrator(ledger, words)
    register_command_handlers(bot, orchestrator, ledger)
    return bot
