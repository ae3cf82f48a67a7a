"""
Channel Data Models

The orchestrator talks to players through an abstract channel. Waiting for
the player's next message yields either a Message or TimedOut value rather
than raising, so the session loop can branch on it directly.
"""

from dataclasses import dataclass
from typing import Protocol, Union


@dataclass(frozen=True)
class Message:
    """Text received from the player."""
    content: str


@dataclass(frozen=True)
class TimedOut:
    """No message arrived before the wait deadline."""
    timeout: float


WaitResult = Union[Message, TimedOut]


class GameChannel(Protocol):
    """Bidirectional text channel bound to one player."""

    async def send(self, text: str) -> None:
        ...

    async def next_message(self, timeout: float) -> WaitResult:
        ...
