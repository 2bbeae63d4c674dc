"""SQLite database module for restless-economy.

Each public method is async and wraps a synchronous inner function via
asyncio.run_in_executor(None, _sync). A new connection is created per call
(WAL mode, 30s busy timeout, Row factory).

Amounts are stored as TEXT in the canonical exact form produced by
``format_exact`` and loaded with ``HugeDecimal.from_db_string``, which also
reads legacy integer and JSON rows.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3

from .errors import InexactConversionError, MagnitudeTooLargeError
from .format import format_debug, format_exact
from .huge import CEILING_POWER, ZERO, HugeDecimal


class EconomyDatabase:
    """SQLite-backed persistence for balances, the ledger and guild config."""

    def __init__(self, db_path: str, logger: logging.Logger) -> None:
        self._db_path = db_path
        self._logger = logger

    def _get_connection(self) -> sqlite3.Connection:
        """Create a new SQLite connection with standard settings."""
        conn = sqlite3.connect(self._db_path, timeout=30)
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA busy_timeout=30000")
        conn.row_factory = sqlite3.Row
        return conn

    # ══════════════════════════════════════════════════════════
    #  Initialization
    # ══════════════════════════════════════════════════════════

    async def initialize(self) -> None:
        """Create all tables and indexes. Idempotent."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._create_tables)

    def _create_tables(self) -> None:
        conn = self._get_connection()
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS balances (
                    guild_id TEXT NOT NULL,
                    user_id TEXT NOT NULL,
                    balance TEXT NOT NULL DEFAULT '0',
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    UNIQUE(guild_id, user_id)
                )
            """)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS transactions (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    guild_id TEXT NOT NULL,
                    user_id TEXT NOT NULL,
                    amount TEXT NOT NULL,
                    type TEXT NOT NULL,
                    reason TEXT,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS guild_config (
                    guild_id TEXT NOT NULL,
                    key TEXT NOT NULL,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    UNIQUE(guild_id, key)
                )
            """)

            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_transactions_guild_user "
                "ON transactions(guild_id, user_id)"
            )
            conn.commit()
            self._logger.info("Database initialized at %s", self._db_path)
        finally:
            conn.close()

    # ══════════════════════════════════════════════════════════
    #  Balances
    # ══════════════════════════════════════════════════════════

    async def get_balance(self, guild_id: str, user_id: str) -> HugeDecimal:
        """Return the balance, ZERO if the account doesn't exist."""
        loop = asyncio.get_running_loop()

        def _sync() -> HugeDecimal:
            conn = self._get_connection()
            try:
                row = conn.execute(
                    "SELECT balance FROM balances WHERE guild_id = ? AND user_id = ?",
                    (guild_id, user_id),
                ).fetchone()
                return HugeDecimal.from_db_string(str(row["balance"])) if row else ZERO
            finally:
                conn.close()

        return await loop.run_in_executor(None, _sync)

    async def adjust_balance(
        self,
        guild_id: str,
        user_id: str,
        delta: HugeDecimal,
        tx_type: str,
        reason: str | None = None,
    ) -> HugeDecimal | None:
        """Atomically add ``delta`` (may be negative) and log a transaction.

        Returns the new balance, or None when a debit would leave the balance
        negative. Creates the account if it doesn't exist. A fractional ``delta``
        raises InexactConversionError.
        """
        if not delta.is_integer():
            raise InexactConversionError(
                "Balances only move by whole amounts", {"delta": format_debug(delta)},
            )
        loop = asyncio.get_running_loop()

        def _sync() -> HugeDecimal | None:
            conn = self._get_connection()
            try:
                conn.execute("BEGIN IMMEDIATE")
                row = conn.execute(
                    "SELECT balance FROM balances WHERE guild_id = ? AND user_id = ?",
                    (guild_id, user_id),
                ).fetchone()
                current = HugeDecimal.from_db_string(str(row["balance"])) if row else ZERO
                updated = current.add(delta)
                if updated.is_negative():
                    conn.rollback()
                    return None
                if updated.exceeds_ceiling():
                    conn.rollback()
                    raise MagnitudeTooLargeError(
                        "Balance would exceed the exact range",
                        CEILING_POWER,
                        {"guild_id": guild_id, "user_id": user_id},
                    )
                conn.execute(
                    "INSERT INTO balances (guild_id, user_id, balance) VALUES (?, ?, ?) "
                    "ON CONFLICT(guild_id, user_id) DO UPDATE "
                    "SET balance = excluded.balance, updated_at = CURRENT_TIMESTAMP",
                    (guild_id, user_id, format_exact(updated)),
                )
                conn.execute(
                    "INSERT INTO transactions (guild_id, user_id, amount, type, reason) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (guild_id, user_id, format_exact(delta), tx_type, reason),
                )
                conn.commit()
                return updated
            finally:
                conn.close()

        result = await loop.run_in_executor(None, _sync)
        if result is not None:
            self._logger.debug(
                "Balance %s/%s adjusted by %s (%s)", guild_id, user_id, format_debug(delta), tx_type,
            )
        return result

    async def get_transactions(self, guild_id: str, user_id: str, limit: int = 20) -> list[dict]:
        """Most recent transactions first; ``amount`` is a HugeDecimal."""
        loop = asyncio.get_running_loop()

        def _sync() -> list[dict]:
            conn = self._get_connection()
            try:
                rows = conn.execute(
                    "SELECT * FROM transactions WHERE guild_id = ? AND user_id = ? "
                    "ORDER BY id DESC LIMIT ?",
                    (guild_id, user_id, limit),
                ).fetchall()
                result = []
                for row in rows:
                    entry = dict(row)
                    entry["amount"] = HugeDecimal.from_db_string(str(entry["amount"]))
                    result.append(entry)
                return result
            finally:
                conn.close()

        return await loop.run_in_executor(None, _sync)

    # ══════════════════════════════════════════════════════════
    #  Guild Config
    # ══════════════════════════════════════════════════════════

    async def get_config_value(self, guild_id: str, key: str) -> str | None:
        loop = asyncio.get_running_loop()

        def _sync() -> str | None:
            conn = self._get_connection()
            try:
                row = conn.execute(
                    "SELECT value FROM guild_config WHERE guild_id = ? AND key = ?",
                    (guild_id, key),
                ).fetchone()
                return row["value"] if row else None
            finally:
                conn.close()

        return await loop.run_in_executor(None, _sync)

    async def set_config_value(self, guild_id: str, key: str, value: str) -> None:
        loop = asyncio.get_running_loop()

        def _sync() -> None:
            conn = self._get_connection()
            try:
                conn.execute(
                    "INSERT INTO guild_config (guild_id, key, value) VALUES (?, ?, ?) "
                    "ON CONFLICT(guild_id, key) DO UPDATE "
                    "SET value = excluded.value, updated_at = CURRENT_TIMESTAMP",
                    (guild_id, key, value),
                )
                conn.commit()
            finally:
                conn.close()

        await loop.run_in_executor(None, _sync)
