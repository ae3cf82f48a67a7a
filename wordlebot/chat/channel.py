"""
Discord Game Channel

Adapts a command context to the orchestrator's channel interface.
"""

import asyncio
from discord.ext import commands
from ..models.channel import Message, TimedOut, WaitResult


class DiscordGameChannel:
    """
    Replies in the invoking channel and reads the invoking user's next message.

    Only the first message answers the command itself; the rest are posted
    to the channel directly. Slash-command interaction webhooks expire after
    15 minutes.
    """

    def __init__(self, bot: commands.Bot, ctx: commands.Context):
        self.bot = bot
        self.ctx = ctx
        self._acknowledged = False

    def _is_player_reply(self, message) -> bool:
        return (message.author.id == self.ctx.author.id
                and message.channel.id == self.ctx.channel.id)

    async def send(self, text: str) -> None:
        if not self._acknowledged:
            await self.ctx.reply(text)
            self._acknowledged = True
        else:
            await self.ctx.channel.send(text)

    async def next_message(self, timeout: float) -> WaitResult:
        try:
            message = await self.bot.wait_for('message', check=self._is_player_reply, timeout=timeout)
        except asyncio.TimeoutError:
            return TimedOut(timeout)
        return Message(message.content)
