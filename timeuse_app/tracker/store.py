"""In-memory, append-only entry store for the current session."""
from __future__ import annotations

import logging
from datetime import date
from typing import Iterator, List, Tuple

from .models import TimeEntry

LOGGER = logging.getLogger(__name__)


class EntryStore:
    """Ordered sequence of submitted entries. Entries are never removed."""

    def __init__(self) -> None:
        self._entries: List[TimeEntry] = []

    def add(self, entry: TimeEntry) -> TimeEntry:
        self._entries.append(entry)
        LOGGER.debug("Stored entry %s %s-%s (%s)", entry.date, entry.start_time, entry.end_time, entry.category)
        return entry

    def snapshot(self) -> Tuple[TimeEntry, ...]:
        return tuple(self._entries)

    def entries_for_date(self, entry_date: date) -> List[TimeEntry]:
        return [entry for entry in self._entries if entry.date == entry_date]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TimeEntry]:
        return iter(self.snapshot())
