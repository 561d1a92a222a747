from __future__ import annotations

import logging
import plistlib
import re
from pathlib import Path
from typing import Iterable, List, Optional

from emojidict.models.entry import ENTRY_FIELDS, Entry

logger = logging.getLogger(__name__)

# XML 1.0 has no way to carry these; plistlib refuses them on write.
_UNSTORABLE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


class EntryDecodeError(ValueError):
    pass


class EntryEncodeError(ValueError):
    pass


def is_storable_text(value: str) -> bool:
    if _UNSTORABLE.search(value):
        return False
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def check_storable(entry: Entry) -> None:
    """Raise EntryEncodeError if any field of `entry` cannot go into the backing file."""
    for key in ENTRY_FIELDS:
        value = getattr(entry, key)
        if not isinstance(value, str):
            raise EntryEncodeError(f"Field {key!r} must be a string.")
        if not is_storable_text(value):
            raise EntryEncodeError(f"Field {key!r} contains characters that cannot be stored.")


def decode_entries(raw: object) -> List[Entry]:
    """Validate a decoded plist payload against the Entry schema."""
    if not isinstance(raw, list):
        raise EntryDecodeError("Top level must be an array of entries.")
    entries: List[Entry] = []
    seen: set[str] = set()
    for pos, item in enumerate(raw):
        if not isinstance(item, dict):
            raise EntryDecodeError(f"Entry {pos} is not a dictionary.")
        for key in ENTRY_FIELDS:
            if not isinstance(item.get(key), str):
                raise EntryDecodeError(f"Entry {pos} has a missing or non-string {key!r}.")
        if item["id"] in seen:
            raise EntryDecodeError(f"Entry {pos} reuses id {item['id']}.")
        seen.add(item["id"])
        entries.append(Entry(**{key: item[key] for key in ENTRY_FIELDS}))
    return entries


class EntryRepo:
    """Reads and writes the whole entry list as one XML property list."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def read(self) -> Optional[List[Entry]]:
        """Return the stored entries, or None when there is no backing file.

        Raises EntryDecodeError when the file exists but cannot be decoded.
        """
        try:
            with open(self.path, "rb") as fh:
                data = fh.read()
        except FileNotFoundError:
            return None
        try:
            raw = plistlib.loads(data)
        except Exception as e:
            # plistlib raises AttributeError on a bad <date>, ValueError on a stray <key>, and so on.
            raise EntryDecodeError(f"Cannot parse {self.path}: {e!r}") from e
        return decode_entries(raw)

    def encode(self, entries: Iterable[Entry]) -> bytes:
        entries = list(entries)
        for entry in entries:
            check_storable(entry)
        try:
            return plistlib.dumps([e.to_dict() for e in entries], fmt=plistlib.FMT_XML, sort_keys=False)
        except (ValueError, TypeError, OverflowError) as e:
            raise EntryEncodeError(f"Cannot encode entries: {e}") from e

    def write(self, entries: Iterable[Entry]) -> None:
        """Replace the backing file. The file is only opened once encoding has succeeded."""
        data = self.encode(entries)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "wb") as fh:
            fh.write(data)
        logger.debug("Wrote %d bytes", len(data), extra={"path": self.path})
