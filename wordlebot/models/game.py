"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Mark(Enum):
    """Per-letter feedback for a guess."""
    CORRECT = "CORRECT"
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"


class GameStatus(Enum):
    """Lifecycle state of a single play-through."""
    IN_PROGRESS = "IN_PROGRESS"
    WON = "WON"
    LOST = "LOST"


class SessionOutcome(Enum):
    """How an orchestrated session ended."""
    WON = "WON"
    LOST = "LOST"
    TIMED_OUT = "TIMED_OUT"


@dataclass(frozen=True)
class GuessRecord:
    """One accepted guess and its feedback, aligned index by index."""
    word: str
    marks: Tuple[Mark, ...]

    @property
    def is_exact(self) -> bool:
        return all(mark is Mark.CORRECT for mark in self.marks)


@dataclass(frozen=True)
class SessionResult:
    """Summary of an orchestrated session, used for logging and callers."""
    session_id: str
    user_id: int
    outcome: SessionOutcome
    solution: str
    attempts_used: int
    reward: int = 0
    credited_balance: Optional[int] = None
