"""Journaling unit of work over Supabase tables."""

import logging
from dataclasses import dataclass, field

from supabase import Client

from food_ordering.domain.errors import PersistenceError
from food_ordering.services.unit_of_work import UnitOfWork

_logger = logging.getLogger(__name__)


@dataclass
class _JournalEntry:
    table: str
    key_column: str
    key: str
    before: dict[str, object] | None


@dataclass
class SupabaseUnitOfWork(UnitOfWork):
    """Records the prior state of touched rows and restores it on rollback.

    PostgREST offers no multi-table transaction, so rollback is compensating:
    inserted rows are deleted and updated or deleted rows are upserted back.
    A crash between a write and its compensation leaves partial state.
    """

    client: Client
    _entries: list[_JournalEntry] = field(default_factory=list)
    _active: bool = False

    def begin(self) -> None:
        """Start a fresh journal."""
        self._entries = []
        self._active = True

    def commit(self) -> None:
        """Forget the journal."""
        self._entries = []
        self._active = False

    def rollback(self) -> None:
        """Undo journaled writes, newest first."""
        failures = 0
        for entry in reversed(self._entries):
            table = self.client.table(entry.table)
            try:
                if entry.before is None:
                    table.delete().eq(entry.key_column, entry.key).execute()
                else:
                    table.upsert(entry.before).execute()
            except Exception:
                failures += 1
                _logger.exception(
                    "Rollback failed for %s %s=%s",
                    entry.table,
                    entry.key_column,
                    entry.key,
                )
        self._entries = []
        self._active = False
        if failures:
            raise PersistenceError(f"Rollback left {failures} row(s) unrestored")

    def track_existing(self, table: str, key_column: str, key: str) -> None:
        """Snapshot rows about to be updated or deleted."""
        if not self._active:
            return
        response = self.client.table(table).select("*").eq(key_column, key).execute()
        for row in response.data or []:
            self._entries.append(
                _JournalEntry(
                    table=table,
                    key_column=key_column,
                    key=str(row.get(key_column, key)),
                    before=dict(row),
                )
            )

    def track_inserted(self, table: str, key_column: str, key: str) -> None:
        """Remember a row created inside the unit of work."""
        if not self._active:
            return
        self._entries.append(
            _JournalEntry(table=table, key_column=key_column, key=key, before=None)
        )
