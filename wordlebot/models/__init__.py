"""
Data Models Package

Contains all data models, error types and channel primitives used throughout
the application.
"""

from .game import GameStatus, GuessRecord, Mark, SessionOutcome, SessionResult
from .channel import GameChannel, Message, TimedOut, WaitResult
from .errors import (
    ConversionError, DirectMessageError, InsufficientFunds, InvalidGuess,
    StoreError, TokenLedgerError
)

__all__ = [
    'GameStatus', 'GuessRecord', 'Mark', 'SessionOutcome', 'SessionResult',
    'GameChannel', 'Message', 'TimedOut', 'WaitResult',
    'ConversionError', 'DirectMessageError', 'InsufficientFunds', 'InvalidGuess',
    'StoreError', 'TokenLedgerError'
]
