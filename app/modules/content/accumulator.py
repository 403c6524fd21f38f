"""Entry accumulator.

Holds the entries assembled during one batch. Locale-split files of the same
logical entry are merged through ``merge_locale``, which serializes work per
entry ID so concurrent merges cannot drop a locale.
"""

import threading
from contextlib import contextmanager
from typing import Any, Dict, Generator, Iterator, List, Optional

from modules.content.domain.models import AssemblyOutcome, Entry, LocalizedEntry


class EntryAccumulator:
    """Ordered, thread-safe collection of in-progress entries.

    Entries created from locale-split files carry a temporary correlation ID
    (``<collection>/<canonical slug>``) and can be found again by it. Other
    entries are stored without an ID.
    """

    def __init__(self):
        self._entries: List[Entry] = []
        self._index: Dict[str, Entry] = {}
        self._lock = threading.Lock()
        self._id_locks: Dict[str, threading.Lock] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.snapshot())

    def snapshot(self) -> List[Entry]:
        """Return the entries accumulated so far, in insertion order."""
        with self._lock:
            return list(self._entries)

    def add(self, entry: Entry) -> None:
        """Append an entry; entries with an ID become discoverable by it."""
        with self._lock:
            self._entries.append(entry)
            if entry.id:
                self._index[entry.id] = entry

    def find(self, entry_id: str) -> Optional[Entry]:
        """Find an in-progress entry by its correlation ID."""
        with self._lock:
            return self._index.get(entry_id)

    @contextmanager
    def lock_for(self, entry_id: str) -> Generator[None, None, None]:
        """Hold the mutual-exclusion domain of one entry ID."""
        with self._lock:
            id_lock = self._id_locks.setdefault(entry_id, threading.Lock())
        with id_lock:
            yield

    def merge_locale(
        self,
        entry_id: str,
        locale: str,
        localized: LocalizedEntry,
        *,
        is_default_locale: bool,
        sub_path: str,
        meta: Optional[Dict[str, Any]] = None,
    ) -> AssemblyOutcome:
        """Add one locale's content to the entry with the given ID.

        The entry is created when no file of it has been seen yet. Only the
        default locale's file sets the entry's slug, sub-path and content ID.

        Returns:
            AssemblyOutcome.MERGED if the entry existed, AssemblyOutcome.NEW otherwise.
        """
        with self.lock_for(entry_id):
            entry = self.find(entry_id)
            outcome = AssemblyOutcome.MERGED

            if entry is None:
                entry = Entry(id=entry_id, meta=dict(meta or {}))
                outcome = AssemblyOutcome.NEW

            entry.locales[locale] = localized

            if is_default_locale:
                entry.slug = localized.slug
                entry.sub_path = sub_path
                entry.content_id = localized.content_id

            if outcome is AssemblyOutcome.NEW:
                self.add(entry)

            return outcome
