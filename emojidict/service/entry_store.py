from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Callable, Iterable, Iterator, List, Optional

from emojidict.data.entry_repo import EntryDecodeError, EntryEncodeError, EntryRepo, check_storable
from emojidict.data.samples import sample_entries
from emojidict.models.entry import EDITABLE_FIELDS, Entry

logger = logging.getLogger(__name__)

Listener = Callable[[List[Entry]], None]


class EntryNotFoundError(LookupError):
    pass


class DuplicateEntryError(ValueError):
    pass


class EntryStore:
    """The authoritative ordered list of entries, mirrored to one backing file.

    Every mutation rewrites the whole file before returning and then notifies
    subscribers with a snapshot of the new list. Mutations run under one lock
    because request handlers may call in from several worker threads.
    """

    def __init__(self, repo: EntryRepo):
        self.repo = repo
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self._entries: List[Entry] = self.load()

    # ── Persistence ─────────────────────────────────────────────

    def load(self) -> List[Entry]:
        """Stored entries, or the built-in samples when none can be read. Never raises."""
        try:
            stored = self.repo.read()
        except EntryDecodeError as e:
            logger.warning("Backing file is unreadable, falling back to samples: %s", e,
                           extra={"path": self.repo.path})
            return sample_entries()
        except OSError:
            logger.exception("Could not open backing file, falling back to samples",
                             extra={"path": self.repo.path})
            return sample_entries()
        if stored is None:
            logger.info("No backing file yet, starting from samples", extra={"path": self.repo.path})
            return sample_entries()
        logger.info("Loaded %d entries", len(stored), extra={"path": self.repo.path, "count": len(stored)})
        return stored

    def save(self, entries: Optional[Iterable[Entry]] = None) -> bool:
        """Write the current list to the backing file.

        Passing `entries` replaces the current list with them first, so the
        file and memory never disagree. Entries the file cannot hold raise
        EntryEncodeError before anything changes. A failed write is logged
        and reported through the return value only.
        """
        with self._lock:
            if entries is None:
                return self._write()
            entries = list(entries)
            for entry in entries:
                check_storable(entry)
            ids = [e.id for e in entries]
            if len(set(ids)) != len(ids):
                raise DuplicateEntryError("Entries must have distinct ids.")
            return self._commit(entries)

    # ── Reads ───────────────────────────────────────────────────

    @property
    def entries(self) -> List[Entry]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def index_of(self, entry_id: str) -> int:
        with self._lock:
            for pos, entry in enumerate(self._entries):
                if entry.id == entry_id:
                    return pos
        raise EntryNotFoundError(f"No entry with id {entry_id}.")

    def get(self, entry_id: str) -> Entry:
        with self._lock:
            return self._entries[self.index_of(entry_id)]

    # ── Mutations ───────────────────────────────────────────────

    def append(self, entry: Entry) -> None:
        check_storable(entry)
        with self._lock:
            if any(e.id == entry.id for e in self._entries):
                raise DuplicateEntryError(f"An entry with id {entry.id} already exists.")
            self._commit(self._entries + [entry])
        logger.info("Added entry %r", entry.name, extra={"entry_id": entry.id})

    def remove_at(self, indices: Iterable[int]) -> List[Entry]:
        """Remove the entries at the given positions and return them in list order."""
        with self._lock:
            positions = set(indices)
            if not positions:
                return []
            self._check_positions(positions, len(self._entries))
            removed = [e for pos, e in enumerate(self._entries) if pos in positions]
            self._commit([e for pos, e in enumerate(self._entries) if pos not in positions])
        logger.info("Removed %d entries", len(removed), extra={"count": len(removed)})
        return removed

    def move(self, from_positions: Iterable[int], to_offset: int) -> None:
        """Reinsert the entries at `from_positions` starting at `to_offset` of what remains.

        The moved entries keep their relative order: move({0}, 3) turns
        [A, B, C, D] into [B, C, D, A].
        """
        with self._lock:
            positions = set(from_positions)
            if not positions:
                return
            self._check_positions(positions, len(self._entries))
            moving = [e for pos, e in enumerate(self._entries) if pos in positions]
            remaining = [e for pos, e in enumerate(self._entries) if pos not in positions]
            if not 0 <= to_offset <= len(remaining):
                raise IndexError(f"Offset {to_offset} is outside 0..{len(remaining)}.")
            self._commit(remaining[:to_offset] + moving + remaining[to_offset:])

    def update_in_place(self, entry_id: str, **new_values: str) -> Entry:
        unknown = set(new_values) - set(EDITABLE_FIELDS)
        if "id" in unknown:
            raise ValueError("An entry's id cannot be changed.")
        if unknown:
            raise ValueError(f"Unknown entry fields: {', '.join(sorted(unknown))}.")
        with self._lock:
            pos = self.index_of(entry_id)
            updated = replace(self._entries[pos], **new_values)
            check_storable(updated)
            entries = list(self._entries)
            entries[pos] = updated
            self._commit(entries)
        logger.info("Updated entry %r", updated.name, extra={"entry_id": entry_id})
        return updated

    # ── Observation ─────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener` with the new list after each mutation. Returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def binding(self, entry_id: str) -> "EntryBinding":
        self.index_of(entry_id)
        return EntryBinding(self, entry_id)

    # ── Internals ───────────────────────────────────────────────

    @staticmethod
    def _check_positions(positions: set[int], size: int) -> None:
        bad = sorted(p for p in positions if not 0 <= p < size)
        if bad:
            raise IndexError(f"Positions {bad} are outside 0..{size - 1}.")

    def _write(self) -> bool:
        snapshot = list(self._entries)
        try:
            self.repo.write(snapshot)
        except (OSError, EntryEncodeError):
            logger.exception("Failed to save %d entries", len(snapshot),
                             extra={"path": self.repo.path, "count": len(snapshot)})
            return False
        return True

    def _commit(self, entries: List[Entry]) -> bool:
        self._entries = entries
        saved = self._write()
        snapshot = list(entries)
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Entry listener %r failed", listener)
        return saved


class EntryBinding:
    """Read/write handle on one entry of a store, addressed by id."""

    def __init__(self, store: EntryStore, entry_id: str):
        self.store = store
        self.entry_id = entry_id

    def get(self) -> Entry:
        return self.store.get(self.entry_id)

    def set(self, **values: str) -> Entry:
        return self.store.update_in_place(self.entry_id, **values)

    def get_field(self, name: str) -> str:
        if name != "id" and name not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown entry field: {name}.")
        return getattr(self.get(), name)

    def set_field(self, name: str, value: str) -> Entry:
        return self.set(**{name: value})
