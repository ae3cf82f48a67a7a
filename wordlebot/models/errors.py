"""
Error Types

Exceptions raised by the game, ledger and direct-message services.
"""


class InvalidGuess(ValueError):
    """Guess rejected before evaluation; no attempt is consumed."""


class TokenLedgerError(Exception):
    """Base class for token ledger failures."""


class InsufficientFunds(TokenLedgerError):
    """Debit refused because the balance would go negative."""

    def __init__(self, user_id: int, amount: int):
        super().__init__(f"User {user_id} cannot afford {amount} tokens")
        self.user_id = user_id
        self.amount = amount


class ConversionError(TokenLedgerError, ValueError):
    """Identifier or amount does not fit the store's 64-bit integer column."""


class StoreError(TokenLedgerError):
    """Underlying database failure."""


class DirectMessageError(Exception):
    """A direct message could not be delivered."""

    def __init__(self, user_id: int, reason: str):
        super().__init__(f"Failed to message user {user_id}: {reason}")
        self.user_id = user_id
        self.reason = reason
