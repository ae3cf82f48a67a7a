"""
Game Configuration Constants Module

This module defines the word game's rules and reward constants, and loads
the solution word list. All game parameters are centralized here to enable
easy modification.
"""

import random
from pathlib import Path
from typing import Final, List, Optional, Sequence, Union

MAX_ATTEMPTS: Final[int] = 6
"""
Maximum number of guess attempts allowed per session.
Type: Final[int] - Immutable to prevent accidental modification
"""

GUESS_TIMEOUT_SECONDS: Final[int] = 60
"""Seconds a session waits for the player's next message before giving up."""

TOKENS_PER_REMAINING_ATTEMPT: Final[int] = 5
BASE_WIN_TOKENS: Final[int] = 5

LEADERBOARD_SIZE: Final[int] = 10

DEFAULT_WORD_LIST_PATH: Final[Path] = Path(__file__).with_name('wordlist.txt')


def load_word_list(path: Optional[Union[str, Path]] = None) -> List[str]:
    """
    Load the solution word list, one word per line.

    Blank lines are skipped and every word is upper-cased. Words may have
    any length; a session's guesses must match its own solution's length.

    Args:
        path: Word list file, defaults to the bundled wordlist.txt

    Returns:
        List[str]: Upper-case candidate solutions

    Raises:
        FileNotFoundError: If the word list file does not exist
        ValueError: If the list is empty or contains non-alphabetic entries
    """
    word_file = Path(path) if path else DEFAULT_WORD_LIST_PATH

    if not word_file.exists():
        raise FileNotFoundError(f"Word list file not found: {word_file}")

    words = []
    with open(word_file, 'r', encoding='utf-8') as f:
        for line_number, line in enumerate(f, start=1):
            word = line.strip().upper()
            if not word:
                continue
            if not word.isalpha():
                raise ValueError(
                    f"Word '{word}' on line {line_number} contains non-alphabetic characters"
                )
            words.append(word)

    if not words:
        raise ValueError("Word list cannot be empty")

    return words


def choose_word(words: Sequence[str], rng: Optional[random.Random] = None) -> str:
    """Pick a session solution uniformly at random."""
    if not words:
        raise ValueError("Word list cannot be empty")
    return (rng or random).choice(words)


def calculate_reward(attempts_remaining: int) -> int:
    """
    Tokens earned for a win.

    Winning on the first of six guesses leaves five attempts and pays 30;
    winning on the last guess pays 5.
    """
    return attempts_remaining * TOKENS_PER_REMAINING_ATTEMPT + BASE_WIN_TOKENS
