"""
Read-only user data provider backed by a fixed in-memory record set.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from .logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class UserRecord:
    """A single user entry."""

    id: str
    name: str
    email: str


class UserProvider(Protocol):
    """Read-only access to user records."""

    def list_all(self) -> list[UserRecord]:
        """Return every record in insertion order."""
        ...

    def find_by_id(self, id: str) -> UserRecord | None:
        """Return the record with exactly this id, or None when there is none."""
        ...

    def __len__(self) -> int: ...


class InMemoryUserStore:
    """
    User provider over an immutable tuple of records.

    The record set is fixed at construction; nothing on this class mutates it,
    so concurrent requests can read it without coordination.
    """

    def __init__(self, records: Iterable[UserRecord]):
        self._records: tuple[UserRecord, ...] = tuple(records)

        seen: set[str] = set()
        for record in self._records:
            if record.id in seen:
                raise ValueError(f"Duplicate user id '{record.id}'")
            seen.add(record.id)

    def list_all(self) -> list[UserRecord]:
        return list(self._records)

    def find_by_id(self, id: str) -> UserRecord | None:
        for record in self._records:
            if record.id == id:
                return record
        return None

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"InMemoryUserStore(ids={[r.id for r in self._records]!r})"


SEED_USERS: tuple[UserRecord, ...] = (
    UserRecord(id="1", name="Alice", email="alice@example.com"),
    UserRecord(id="2", name="Bob", email="bob@example.com"),
    UserRecord(id="3", name="Carol", email="carol@example.com"),
)


def default_user_store() -> InMemoryUserStore:
    """Build the store seeded with the built-in demo users."""
    store = InMemoryUserStore(SEED_USERS)
    logger.debug("User store initialized", count=len(store))
    return store
