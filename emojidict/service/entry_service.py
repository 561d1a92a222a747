from __future__ import annotations

from typing import List

from emojidict.data.entry_repo import is_storable_text
from emojidict.models.entry import ENTRY_FIELDS, Entry
from emojidict.service.entry_store import EntryStore

MAX_SYMBOL = 16
MAX_NAME = 80
MAX_TEXT = 2000


class EntryService:
    """Form-level rules for entries.

    Keep validation here; keep list bookkeeping and persistence in EntryStore.
    """

    def __init__(self, store: EntryStore):
        self.store = store

    def list_entries(self) -> List[Entry]:
        return self.store.entries

    def get_entry(self, entry_id: str) -> Entry:
        return self.store.get(entry_id)

    def _clean(self, symbol: str, name: str, description: str, usage: str) -> dict[str, str]:
        symbol, name = symbol.strip(), name.strip()
        description, usage = description.strip(), usage.strip()
        if not symbol:
            raise ValueError("Symbol cannot be empty.")
        if not name:
            raise ValueError("Name cannot be empty.")
        if len(symbol) > MAX_SYMBOL:
            raise ValueError(f"Symbol too long (max {MAX_SYMBOL}).")
        if len(name) > MAX_NAME:
            raise ValueError(f"Name too long (max {MAX_NAME}).")
        if len(description) > MAX_TEXT or len(usage) > MAX_TEXT:
            raise ValueError(f"Description and usage are limited to {MAX_TEXT} characters.")
        if not all(is_storable_text(v) for v in (symbol, name, description, usage)):
            raise ValueError("Control characters are not allowed (tabs and line breaks are fine).")
        return {"symbol": symbol, "name": name, "description": description, "usage": usage}

    def create_entry(self, symbol: str, name: str, description: str = "", usage: str = "") -> Entry:
        entry = Entry(**self._clean(symbol, name, description, usage))
        self.store.append(entry)
        return entry

    def edit_entry(self, entry_id: str, symbol: str, name: str, description: str = "", usage: str = "") -> Entry:
        return self.store.update_in_place(entry_id, **self._clean(symbol, name, description, usage))

    def delete_entry(self, entry_id: str) -> None:
        self.store.remove_at({self.store.index_of(entry_id)})

    def move_entry(self, entry_id: str, direction: str) -> None:
        """Shift an entry one row up or down; a no-op at either end of the list."""
        if direction not in ("up", "down"):
            raise ValueError("Direction must be 'up' or 'down'.")
        pos = self.store.index_of(entry_id)
        target = pos - 1 if direction == "up" else pos + 1
        if target < 0 or target >= len(self.store):
            return
        self.store.move({pos}, target)

    def export_entries(self) -> list[dict[str, str]]:
        return [e.to_dict() for e in self.store.entries]

    def import_entries(self, items: list) -> int:
        """Append records from an exported JSON list.

        Every imported record gets a fresh id; items missing a symbol or name
        are skipped.
        """
        count = 0
        for it in items:
            if not isinstance(it, dict):
                continue
            values = {key: str(it.get(key, "") or "") for key in ENTRY_FIELDS if key != "id"}
            try:
                self.create_entry(**values)
            except ValueError:
                continue
            count += 1
        return count
