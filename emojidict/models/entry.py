from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field

# Order matches the keys written to the backing file.
ENTRY_FIELDS = ("id", "symbol", "name", "description", "usage")
EDITABLE_FIELDS = ("symbol", "name", "description", "usage")


def new_entry_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Entry:
    """One emoji dictionary record.

    `id` is assigned once at creation and never changes, so edits produce a
    new Entry carrying the same id.
    """
    symbol: str
    name: str
    description: str
    usage: str
    id: str = field(default_factory=new_entry_id)

    def to_dict(self) -> dict[str, str]:
        data = asdict(self)
        return {key: data[key] for key in ENTRY_FIELDS}
