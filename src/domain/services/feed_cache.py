"""Versioned in-memory feed cache.

The cache is the only shared mutable state of a feed session. It is
replaced wholesale by a full reload and patched in place by post
creation/deletion. Patches that land while a reload is in flight are
journaled and replayed on top of that reload's result, so a slow reload
can never wipe out a mutation that completed after it started.
"""

from dataclasses import dataclass
from typing import Iterable, Protocol
from uuid import UUID

import structlog

from domain.entities.feed import FeedEntry

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class ReloadTicket:
    """Handed out when a full reload starts, redeemed when it publishes."""

    sequence: int
    mutation_mark: int


class _Patch(Protocol):
    def apply(self, entries: list[FeedEntry]) -> list[FeedEntry]: ...


@dataclass(frozen=True, slots=True)
class _Prepend:
    entry: FeedEntry

    def apply(self, entries: list[FeedEntry]) -> list[FeedEntry]:
        if any(existing.id == self.entry.id for existing in entries):
            return entries
        return [self.entry, *entries]


@dataclass(frozen=True, slots=True)
class _Remove:
    post_id: UUID

    def apply(self, entries: list[FeedEntry]) -> list[FeedEntry]:
        return [entry for entry in entries if entry.id != self.post_id]


class FeedCache:
    """In-memory feed for one session, stamped with a version on every change."""

    def __init__(self, entries: Iterable[FeedEntry] = ()) -> None:
        self._entries: list[FeedEntry] = list(entries)
        self._version = 0
        self._reload_sequence = 0
        self._published_sequence = 0
        self._in_flight: dict[int, int] = {}
        self._mutation_count = 0
        self._journal: list[tuple[int, _Patch]] = []

    @property
    def version(self) -> int:
        return self._version

    @property
    def entries(self) -> tuple[FeedEntry, ...]:
        return tuple(self._entries)

    @property
    def reload_in_flight(self) -> bool:
        return bool(self._in_flight)

    def __len__(self) -> int:
        return len(self._entries)

    def begin_reload(self) -> ReloadTicket:
        """Register a full reload and remember which mutations it may miss."""
        self._reload_sequence += 1
        ticket = ReloadTicket(
            sequence=self._reload_sequence,
            mutation_mark=self._mutation_count,
        )
        self._in_flight[ticket.sequence] = ticket.mutation_mark
        return ticket

    def publish(self, entries: Iterable[FeedEntry], ticket: ReloadTicket) -> bool:
        """Replace the feed with a reload result.

        Returns False (and leaves the feed alone) when a reload that started
        later has already published.
        """
        self._in_flight.pop(ticket.sequence, None)

        if ticket.sequence < self._published_sequence:
            logger.info(
                "feed_reload_superseded",
                sequence=ticket.sequence,
                published_sequence=self._published_sequence,
            )
            self._trim_journal()
            return False

        merged = list(entries)
        replayed = 0
        for mark, patch in self._journal:
            if mark > ticket.mutation_mark:
                merged = patch.apply(merged)
                replayed += 1

        self._entries = merged
        self._published_sequence = ticket.sequence
        self._version += 1
        self._trim_journal()

        if replayed:
            logger.debug("feed_patches_replayed", count=replayed, version=self._version)
        return True

    def abandon(self, ticket: ReloadTicket) -> None:
        """Forget a reload that failed before publishing."""
        self._in_flight.pop(ticket.sequence, None)
        self._trim_journal()

    def prepend(self, entry: FeedEntry) -> None:
        """Optimistically add a freshly created post at the top."""
        self._record(_Prepend(entry))

    def remove(self, post_id: UUID) -> None:
        """Optimistically drop a deleted post."""
        self._record(_Remove(post_id))

    def _record(self, patch: _Patch) -> None:
        self._entries = patch.apply(self._entries)
        self._mutation_count += 1
        self._version += 1
        if self._in_flight:
            self._journal.append((self._mutation_count, patch))

    def _trim_journal(self) -> None:
        if not self._in_flight:
            self._journal.clear()
            return
        oldest_mark = min(self._in_flight.values())
        self._journal = [(mark, patch) for mark, patch in self._journal if mark > oldest_mark]
