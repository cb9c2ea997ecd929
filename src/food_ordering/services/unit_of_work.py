"""Unit of work abstraction for multi-record updates."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol


class UnitOfWork(Protocol):
    """Groups writes across repositories so they land or roll back together."""

    def begin(self) -> None:
        """Start tracking writes."""

    def commit(self) -> None:
        """Make tracked writes final."""

    def rollback(self) -> None:
        """Undo tracked writes."""


@contextmanager
def transaction(unit_of_work: UnitOfWork) -> Iterator[None]:
    """Run the block inside a unit of work, rolling back on any error."""
    unit_of_work.begin()
    try:
        yield
    except Exception:
        unit_of_work.rollback()
        raise
    unit_of_work.commit()
