"""
Game Service

Contains the core word-guessing logic: guess evaluation and the single
play-through state machine.
"""

from collections import Counter
from typing import List, Optional, Sequence, Tuple
from ..models.game import GameStatus, GuessRecord, Mark
from ..models.errors import InvalidGuess
from ..config.game_settings import MAX_ATTEMPTS


def evaluate_guess(guess: Sequence[str], solution: Sequence[str]) -> List[Mark]:
    """
    Implements the authentic Wordle letter evaluation algorithm.

    Exact matches are settled first so that a repeated letter in the guess is
    credited PRESENT at most as many times as it remains unaccounted for in
    the solution.

    Args:
        guess: Guessed letters, same length as the solution
        solution: Secret letters

    Returns:
        List[Mark]: Feedback aligned index by index with the guess
    """
    result: List[Optional[Mark]] = [None] * len(guess)
    available: Counter = Counter()

    # First pass: exact position matches consume their solution letter
    for i, (letter, target) in enumerate(zip(guess, solution)):
        if letter == target:
            result[i] = Mark.CORRECT
        else:
            available[target] += 1

    # Second pass: misplaced letters draw from what is left
    for i, letter in enumerate(guess):
        if result[i] is not None:
            continue
        if available[letter] > 0:
            result[i] = Mark.PRESENT
            available[letter] -= 1
        else:
            result[i] = Mark.ABSENT

    return [mark for mark in result if mark is not None]


class GameSession:
    """
    One play-through of the guessing game.

    This class handles:
    - Guess normalization and validation
    - Attempt history with per-letter feedback
    - IN_PROGRESS -> WON / LOST transitions

    Sessions live only as long as the conversation that drives them and are
    never persisted.
    """

    def __init__(self, solution: str, max_attempts: int = MAX_ATTEMPTS):
        normalized = solution.strip().upper()
        if not normalized:
            raise ValueError("Solution cannot be empty")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self._solution = normalized
        self._max_attempts = max_attempts
        self._records: List[GuessRecord] = []
        self._status = GameStatus.IN_PROGRESS

    @property
    def solution(self) -> str:
        return self._solution

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def records(self) -> Tuple[GuessRecord, ...]:
        return tuple(self._records)

    def guess(self, word: str) -> List[Mark]:
        """
        Processes a guess and updates session state.

        Args:
            word: The player's guess; surrounding whitespace and case are ignored

        Returns:
            List[Mark]: Feedback for this guess

        Raises:
            InvalidGuess: If the session is over or the guess has the wrong length
        """
        if self._status is not GameStatus.IN_PROGRESS:
            raise InvalidGuess("Game is already over")

        normalized = (word or "").strip().upper()
        if len(normalized) != len(self._solution):
            raise InvalidGuess(f"Guess must be exactly {len(self._solution)} letters")

        marks = evaluate_guess(normalized, self._solution)
        record = GuessRecord(word=normalized, marks=tuple(marks))
        self._records.append(record)

        if record.is_exact:
            self._status = GameStatus.WON
        elif len(self._records) >= self._max_attempts:
            self._status = GameStatus.LOST

        return marks

    def attempts_used(self) -> int:
        return len(self._records)

    def attempts_remaining(self) -> int:
        return self._max_attempts - len(self._records)

    def is_over(self) -> bool:
        return self._status is not GameStatus.IN_PROGRESS

    def won(self) -> bool:
        return self._status is GameStatus.WON
