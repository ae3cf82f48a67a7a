"""
Helper Functions

Contains utility functions used throughout the application.
"""

from datetime import datetime
from typing import Any, Iterable, List, Sequence, Tuple
from ..models.game import Mark

MARK_SYMBOLS = {
    Mark.CORRECT: "🟩",
    Mark.PRESENT: "🟨",
    Mark.ABSENT: "⬛",
}

# Discord rejects message bodies longer than this
MAX_MESSAGE_LENGTH = 2000


def format_feedback(word: str, marks: Sequence[Mark]) -> str:
    """Render a guess as a row of coloured squares followed by the word."""
    squares = "".join(MARK_SYMBOLS[mark] for mark in marks)
    return f"{squares} {word.upper()}"


def format_account_age(name: str, created_at: datetime) -> str:
    return f"{name}'s account was created at {created_at}"


def format_leaderboard(entries: Iterable[Tuple[str, int]]) -> str:
    lines = [f"{position}. {name}: {tokens} tokens"
             for position, (name, tokens) in enumerate(entries, start=1)]
    if not lines:
        return "Nobody has any tokens yet."
    return "Token leaderboard:\n" + "\n".join(lines)


def parse_user_id(value: Any) -> int:
    """
    Accept a chat user id as an int or a numeric string.

    Raises:
        ValueError: If the value is not a positive integer id
    """
    if isinstance(value, bool):
        raise ValueError("user id must be an integer")
    if isinstance(value, str):
        value = value.strip()
        if not value.isdigit():
            raise ValueError(f"user id '{value}' is not numeric")
        value = int(value)
    if not isinstance(value, int) or value <= 0:
        raise ValueError("user id must be a positive integer")
    return value


def parse_user_ids(values: Any) -> List[int]:
    if not isinstance(values, list) or not values:
        raise ValueError("user_ids must be a non-empty list")
    # Keep first-seen order, drop repeats
    return list(dict.fromkeys(parse_user_id(value) for value in values))


def validate_message_content(content: Any) -> str:
    if not isinstance(content, str) or not content.strip():
        raise ValueError("message must be a non-empty string")
    if len(content) > MAX_MESSAGE_LENGTH:
        raise ValueError(f"message must be at most {MAX_MESSAGE_LENGTH} characters")
    return content
