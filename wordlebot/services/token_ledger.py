"""
Token Ledger Service

Persistent per-user token balances backed by SQLite. Every mutation is a
single SQL statement executed in autocommit mode, so concurrent credits and
debits on the same user serialize inside the database and never lose an
update or drive a balance below zero.
"""

import sqlite3
from pathlib import Path
from typing import List, Optional, Tuple, Union
from ..models.errors import ConversionError, InsufficientFunds, StoreError
from ..config.game_settings import LEADERBOARD_SIZE
from ..utils.bot_logger import bot_logger

SQLITE_INTEGER_MAX = 2 ** 63 - 1

MEMORY_DATABASE = ':memory:'


def database_path_from_url(database_url: str) -> str:
    """
    Resolve a DATABASE_URL into a path sqlite3 can open.

    Accepts ``sqlite://relative.db``, ``sqlite:///absolute.db``,
    ``sqlite::memory:``, ``:memory:`` and bare file paths.
    """
    if not database_url:
        raise ValueError("DATABASE_URL cannot be empty")

    if database_url in (MEMORY_DATABASE, 'sqlite::memory:', 'sqlite://:memory:'):
        return MEMORY_DATABASE

    if database_url.startswith('sqlite://'):
        path = database_url[len('sqlite://'):]
    elif database_url.startswith('sqlite:'):
        path = database_url[len('sqlite:'):]
    else:
        path = database_url

    # Strip query options such as ?mode=rwc
    path = path.split('?', 1)[0]
    if not path:
        raise ValueError(f"DATABASE_URL has no database path: {database_url}")
    return path


def _to_db_int(value: int, field: str) -> int:
    """Validate that a value fits a non-negative SQLite INTEGER."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConversionError(f"{field} must be an integer, got {type(value).__name__}")
    if value < 0 or value > SQLITE_INTEGER_MAX:
        raise ConversionError(f"{field} {value} is out of range for a 64-bit signed integer")
    return value


def _from_db_int(value: int, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= SQLITE_INTEGER_MAX:
        raise ConversionError(f"Stored {field} {value!r} is not a non-negative 64-bit integer")
    return value


class TokenLedger:
    """
    Database access layer for token balances.

    Absence of a row is equivalent to a zero balance. Rows are created on the
    first credit and never deleted here.
    """

    def __init__(self, database_url: str = 'sqlite://database.db'):
        """
        Open (and create if missing) the balance database.

        Args:
            database_url: SQLite URL or path, see database_path_from_url
        """
        self.database_path = database_path_from_url(database_url)
        if self.database_path != MEMORY_DATABASE:
            Path(self.database_path).parent.mkdir(parents=True, exist_ok=True)

        try:
            # Autocommit: each statement is its own atomic transaction
            self._conn = sqlite3.connect(
                self.database_path,
                timeout=30,
                isolation_level=None,
                check_same_thread=False,
            )
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._init_db()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to open token database {self.database_path}: {e}") from e

    def _init_db(self) -> None:
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY,
                tokens INTEGER NOT NULL DEFAULT 0
                    CHECK (typeof(tokens) = 'integer' AND tokens >= 0)
            )
            """)

    def _execute(self, sql: str, params: Tuple = ()) -> List[tuple]:
        try:
            return self._conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e

    def credit(self, user_id: int, amount: int) -> int:
        """
        Add tokens to a user's balance, creating the row if needed.

        Args:
            user_id: Chat platform user identifier
            amount: Non-negative number of tokens to add

        Returns:
            int: The balance after the credit

        Raises:
            ConversionError: If user_id or amount does not fit the store, or
                the new balance would exceed the 64-bit integer range; the
                balance is left unchanged
            StoreError: If the database statement fails
        """
        user = _to_db_int(user_id, 'user_id')
        tokens = _to_db_int(amount, 'amount')

        # SQLite turns integer overflow into REAL, so the update is skipped instead
        rows = self._execute(
            "INSERT INTO users (id, tokens) VALUES (?, ?) "
            "ON CONFLICT(id) DO UPDATE SET tokens = users.tokens + excluded.tokens "
            "WHERE users.tokens <= ? - excluded.tokens "
            "RETURNING tokens",
            (user, tokens, SQLITE_INTEGER_MAX),
        )
        if not rows:
            bot_logger.log_ledger_event('credit_refused', user, amount=tokens)
            raise ConversionError(
                f"Crediting {tokens} tokens to user {user} would overflow a 64-bit integer"
            )
        new_balance = _from_db_int(rows[0][0], 'tokens')

        bot_logger.log_ledger_event('credit', user, amount=tokens, balance=new_balance)
        return new_balance

    def debit(self, user_id: int, amount: int) -> int:
        """
        Remove tokens from a user's balance only if enough are available.

        Args:
            user_id: Chat platform user identifier
            amount: Non-negative number of tokens to remove

        Returns:
            int: The balance after the debit

        Raises:
            InsufficientFunds: If the user has no row or too few tokens;
                the balance is left unchanged
            ConversionError: If user_id or amount does not fit the store
            StoreError: If the database statement fails
        """
        user = _to_db_int(user_id, 'user_id')
        tokens = _to_db_int(amount, 'amount')

        rows = self._execute(
            "UPDATE users SET tokens = tokens - ? WHERE id = ? AND tokens >= ? "
            "RETURNING tokens",
            (tokens, user, tokens),
        )
        if not rows:
            bot_logger.log_ledger_event('debit_refused', user, amount=tokens)
            raise InsufficientFunds(user, tokens)

        new_balance = _from_db_int(rows[0][0], 'tokens')
        bot_logger.log_ledger_event('debit', user, amount=tokens, balance=new_balance)
        return new_balance

    def balance(self, user_id: int) -> int:
        """Return the stored balance, or 0 when the user has none."""
        user = _to_db_int(user_id, 'user_id')
        rows = self._execute("SELECT tokens FROM users WHERE id = ?", (user,))
        if not rows:
            return 0
        return _from_db_int(rows[0][0], 'tokens')

    def top(self, n: int = LEADERBOARD_SIZE) -> List[Tuple[int, int]]:
        """
        Highest balances first; ties fall back to ascending user id.

        Args:
            n: Maximum number of entries

        Returns:
            List of (user_id, tokens) tuples
        """
        limit = _to_db_int(n, 'n')
        rows = self._execute(
            "SELECT id, tokens FROM users ORDER BY tokens DESC, id ASC LIMIT ?",
            (limit,),
        )
        return [(_from_db_int(user, 'id'), _from_db_int(tokens, 'tokens')) for user, tokens in rows]

    def close(self) -> None:
        self._conn.close()


# Global service instance
_token_ledger: Optional[TokenLedger] = None


def get_token_ledger() -> Optional[TokenLedger]:
    """Get the global token ledger instance."""
    return _token_ledger


def initialize_token_ledger(database_url: Union[str, Path] = 'sqlite://database.db') -> TokenLedger:
    """Initialize the global token ledger instance."""
    global _token_ledger
    if _token_ledger is not None:
        _token_ledger.close()
    _token_ledger = TokenLedger(str(database_url))
    return _token_ledger
