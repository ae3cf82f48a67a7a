import os
import tempfile
from typing import List, Sequence, Union

# Keep test runs from writing log files into the working tree
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="wordlebot-logs-"))

import pytest

from wordlebot.models.channel import Message, TimedOut
from wordlebot.services.token_ledger import TokenLedger


class ScriptedChannel:
    """Channel that replays canned replies and records everything sent."""

    def __init__(self, replies: Sequence[Union[str, TimedOut]]):
        self.replies = list(replies)
        self.sent: List[str] = []
        self.waits: List[float] = []

    async def send(self, text: str) -> None:
        self.sent.append(text)

    async def next_message(self, timeout: float):
        self.waits.append(timeout)
        if not self.replies:
            return TimedOut(timeout)
        reply = self.replies.pop(0)
        if isinstance(reply, TimedOut):
            return reply
        return Message(reply)


@pytest.fixture
def ledger():
    store = TokenLedger(":memory:")
    try:
        yield store
    finally:
        store.close()


@pytest.fixture
def make_channel():
    return ScriptedChannel
