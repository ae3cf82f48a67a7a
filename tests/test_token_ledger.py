import sqlite3
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from wordlebot.models.errors import ConversionError, InsufficientFunds, StoreError
from wordlebot.services.token_ledger import (
    SQLITE_INTEGER_MAX, TokenLedger, _from_db_int, database_path_from_url,
    get_token_ledger, initialize_token_ledger
)


def test_credits_accumulate(ledger) -> None:
    assert ledger.credit(1, 10) == 10
    assert ledger.credit(1, 5) == 15
    assert ledger.balance(1) == 15


def test_unknown_user_has_zero_balance(ledger) -> None:
    assert ledger.balance(987654321) == 0


def test_debit_reduces_balance(ledger) -> None:
    ledger.credit(7, 20)
    assert ledger.debit(7, 5) == 15
    assert ledger.debit(7, 15) == 0
    assert ledger.balance(7) == 0


def test_overdraw_fails_and_leaves_balance(ledger) -> None:
    ledger.credit(7, 20)

    with pytest.raises(InsufficientFunds) as excinfo:
        ledger.debit(7, 21)

    assert excinfo.value.user_id == 7
    assert excinfo.value.amount == 21
    assert ledger.balance(7) == 20


def test_debit_without_row_fails_and_creates_nothing(ledger) -> None:
    with pytest.raises(InsufficientFunds):
        ledger.debit(8, 1)
    assert ledger.balance(8) == 0
    assert ledger.top() == []


def test_top_is_sorted_and_limited(ledger) -> None:
    for user_id in range(1, 13):
        ledger.credit(user_id, user_id * 10)
    ledger.credit(100, 120)  # ties with user 12

    leaders = ledger.top(10)

    assert len(leaders) == 10
    balances = [tokens for _, tokens in leaders]
    assert balances == sorted(balances, reverse=True)
    assert leaders[0] == (12, 120)
    assert leaders[1] == (100, 120)
    assert ledger.top(3) == [(12, 120), (100, 120), (11, 110)]


def test_top_on_empty_ledger(ledger) -> None:
    assert ledger.top(10) == []
    assert ledger.top(0) == []


@pytest.mark.parametrize("user_id, amount", [
    (SQLITE_INTEGER_MAX + 1, 1),
    (1, SQLITE_INTEGER_MAX + 1),
    (-1, 5),
    (1, -5),
    (1, 2.5),
    ("1", 5),
    (1, True),
])
def test_out_of_range_values_raise_conversion_error(ledger, user_id, amount) -> None:
    with pytest.raises(ConversionError):
        ledger.credit(user_id, amount)
    with pytest.raises(ConversionError):
        ledger.debit(user_id, amount)


def test_conversion_error_is_distinct_from_store_error(ledger) -> None:
    with pytest.raises(ValueError) as excinfo:
        ledger.balance(2 ** 64)
    assert isinstance(excinfo.value, ConversionError)
    assert not isinstance(excinfo.value, StoreError)


def test_largest_identifier_is_accepted(ledger) -> None:
    assert ledger.credit(SQLITE_INTEGER_MAX, 3) == 3
    assert ledger.top(1) == [(SQLITE_INTEGER_MAX, 3)]


def test_credit_past_integer_range_is_refused(ledger) -> None:
    ledger.credit(1, SQLITE_INTEGER_MAX)

    with pytest.raises(ConversionError):
        ledger.credit(1, 1)

    assert ledger.balance(1) == SQLITE_INTEGER_MAX
    raw = ledger._conn.execute("SELECT tokens, typeof(tokens) FROM users WHERE id = 1").fetchone()  # noqa: SLF001
    assert raw == (SQLITE_INTEGER_MAX, "integer")


def test_credit_up_to_integer_limit_is_allowed(ledger) -> None:
    ledger.credit(2, SQLITE_INTEGER_MAX - 10)
    assert ledger.credit(2, 10) == SQLITE_INTEGER_MAX

    with pytest.raises(ConversionError):
        ledger.credit(2, SQLITE_INTEGER_MAX)
    assert ledger.balance(2) == SQLITE_INTEGER_MAX


def test_non_integer_balances_cannot_be_stored(ledger) -> None:
    ledger.credit(3, 5)
    with pytest.raises(sqlite3.IntegrityError):
        ledger._conn.execute("UPDATE users SET tokens = 1.5 WHERE id = 3")  # noqa: SLF001
    assert ledger.balance(3) == 5


@pytest.mark.parametrize("stored", [1.0, -1, SQLITE_INTEGER_MAX + 1, None])
def test_stored_values_outside_range_raise_conversion_error(stored) -> None:
    with pytest.raises(ConversionError):
        _from_db_int(stored, "tokens")


def test_store_failures_are_wrapped(ledger) -> None:
    ledger.close()
    with pytest.raises(StoreError):
        ledger.balance(1)


def test_concurrent_credits_do_not_lose_updates(tmp_path: Path) -> None:
    store = TokenLedger(f"sqlite://{tmp_path / 'tokens.db'}")
    try:
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda _: store.credit(55, 3), range(200)))
        assert store.balance(55) == 600
    finally:
        store.close()


def test_concurrent_debits_never_go_negative(tmp_path: Path) -> None:
    store = TokenLedger(f"sqlite://{tmp_path / 'tokens.db'}")
    store.credit(9, 50)

    def try_debit(_):
        try:
            store.debit(9, 1)
            return True
        except InsufficientFunds:
            return False

    try:
        with ThreadPoolExecutor(max_workers=8) as pool:
            outcomes = list(pool.map(try_debit, range(100)))
        assert outcomes.count(True) == 50
        assert outcomes.count(False) == 50
        assert store.balance(9) == 0
    finally:
        store.close()


def test_file_database_uses_wal_and_persists(tmp_path: Path) -> None:
    db_file = tmp_path / "nested" / "tokens.db"
    store = TokenLedger(f"sqlite://{db_file}")
    mode = store._conn.execute("PRAGMA journal_mode").fetchone()[0]  # noqa: SLF001
    store.credit(3, 12)
    store.close()

    assert mode.lower() == "wal"
    assert db_file.exists()

    reopened = TokenLedger(str(db_file))
    try:
        assert reopened.balance(3) == 12
    finally:
        reopened.close()


@pytest.mark.parametrize("url, expected", [
    ("sqlite://database.db", "database.db"),
    ("sqlite:///var/lib/bot/tokens.db", "/var/lib/bot/tokens.db"),
    ("sqlite:data.db?mode=rwc", "data.db"),
    ("sqlite::memory:", ":memory:"),
    (":memory:", ":memory:"),
    ("plain.db", "plain.db"),
])
def test_database_url_parsing(url: str, expected: str) -> None:
    assert database_path_from_url(url) == expected


def test_database_url_without_path_is_rejected() -> None:
    with pytest.raises(ValueError):
        database_path_from_url("sqlite://")
    with pytest.raises(ValueError):
        database_path_from_url("")


def test_global_ledger_accessors() -> None:
    first = initialize_token_ledger("sqlite::memory:")
    assert get_token_ledger() is first
    second = initialize_token_ledger("sqlite::memory:")
    assert get_token_ledger() is second
    assert second.balance(1) == 0
