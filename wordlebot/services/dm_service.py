"""
Direct Message Service

Lets the internal HTTP API, which runs in its own threads, deliver direct
messages through the bot's connection. Deliveries are scheduled onto the
bot's event loop and awaited from the calling thread.
"""

import asyncio
import concurrent.futures
from typing import Dict, List, Optional, Sequence
import discord
from ..models.errors import DirectMessageError
from ..utils.bot_logger import bot_logger
from ..utils.helpers import validate_message_content


class DirectMessageService:
    """
    Thread-safe bridge from synchronous callers to the chat client.
    """

    def __init__(self,
                 client: discord.Client,
                 loop: Optional[asyncio.AbstractEventLoop] = None,
                 timeout: float = 10):
        """
        Args:
            client: Chat client used to look up users and send messages
            loop: Event loop running the client, defaults to client.loop
            timeout: Seconds to wait for each delivery
        """
        self.client = client
        self._loop = loop
        self.timeout = timeout

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or self.client.loop

    async def _deliver(self, user_id: int, content: str) -> None:
        try:
            user = self.client.get_user(user_id) or await self.client.fetch_user(user_id)
            await user.send(content)
        except discord.NotFound as e:
            raise DirectMessageError(user_id, "unknown user") from e
        except discord.Forbidden as e:
            raise DirectMessageError(user_id, "user does not accept direct messages") from e
        except discord.DiscordException as e:
            raise DirectMessageError(user_id, str(e)) from e

    def send_to_user(self, user_id: int, content: str) -> None:
        """
        Send one direct message and wait for delivery.

        Raises:
            ValueError: If the content is empty or too long
            DirectMessageError: If the message could not be delivered in time
        """
        content = validate_message_content(content)

        future = asyncio.run_coroutine_threadsafe(self._deliver(user_id, content), self.loop)
        try:
            future.result(timeout=self.timeout)
        except concurrent.futures.TimeoutError as e:
            future.cancel()
            raise DirectMessageError(user_id, f"timed out after {self.timeout}s") from e

        bot_logger.log_command('dm_user', user_id, delivered=True, length=len(content))

    def send_to_group(self, user_ids: Sequence[int], content: str) -> Dict[str, List]:
        """
        Send the same direct message to several users.

        Every user is attempted; one failure does not stop the rest.

        Returns:
            dict with 'delivered' user ids and 'failed' entries of
            {'user_id', 'error'}
        """
        content = validate_message_content(content)

        delivered: List[int] = []
        failed: List[Dict] = []
        for user_id in user_ids:
            try:
                self.send_to_user(user_id, content)
                delivered.append(user_id)
            except DirectMessageError as e:
                bot_logger.log_error(e, 'dm_group', user_id)
                failed.append({'user_id': user_id, 'error': e.reason})
            except Exception as e:
                bot_logger.log_error(e, 'dm_group', user_id)
                failed.append({'user_id': user_id, 'error': str(e) or type(e).__name__})

        return {'delivered': delivered, 'failed': failed}


# Global service instance
_dm_service = None


def get_dm_service() -> Optional[DirectMessageService]:
    """Get the global direct message service instance."""
    return _dm_service


def initialize_dm_service(client: discord.Client,
                          loop: Optional[asyncio.AbstractEventLoop] = None,
                          timeout: float = 10) -> DirectMessageService:
    """Initialize the global direct message service instance."""
    global _dm_service
    _dm_service = DirectMessageService(client, loop=loop, timeout=timeout)
    return _dm_service


def reset_dm_service() -> None:
    """Drop the global instance, e.g. once the chat connection closes."""
    global _dm_service
    _dm_service = None
