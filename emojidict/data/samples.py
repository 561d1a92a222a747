from __future__ import annotations

from typing import List

from emojidict.models.entry import Entry

# Ids are fixed so that a fresh install always shows the same records.
SAMPLE_ENTRIES: tuple[Entry, ...] = (
    Entry(
        id="8a1f6c3e-0d1b-4b7e-9a43-2f5a4c1b7e01",
        symbol="😀",
        name="Grinning Face",
        description="A typical smiley face.",
        usage="happy",
    ),
    Entry(
        id="8a1f6c3e-0d1b-4b7e-9a43-2f5a4c1b7e02",
        symbol="😕",
        name="Confused Face",
        description="A confused, puzzled face.",
        usage="unsure what to think; displeasure",
    ),
    Entry(
        id="8a1f6c3e-0d1b-4b7e-9a43-2f5a4c1b7e03",
        symbol="😍",
        name="Heart Eyes",
        description="A smiley face with hearts for eyes.",
        usage="love of or happiness with someone or something",
    ),
    Entry(
        id="8a1f6c3e-0d1b-4b7e-9a43-2f5a4c1b7e04",
        symbol="🧑‍💻",
        name="Developer",
        description="A person working on a laptop.",
        usage="apps, software, programming",
    ),
    Entry(
        id="8a1f6c3e-0d1b-4b7e-9a43-2f5a4c1b7e05",
        symbol="🐢",
        name="Turtle",
        description="A cute turtle.",
        usage="something slow",
    ),
    Entry(
        id="8a1f6c3e-0d1b-4b7e-9a43-2f5a4c1b7e06",
        symbol="🐘",
        name="Elephant",
        description="A gray elephant.",
        usage="good memory",
    ),
)


def sample_entries() -> List[Entry]:
    return list(SAMPLE_ENTRIES)
