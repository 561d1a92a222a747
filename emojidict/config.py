from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path

@dataclass(frozen=True)
class Settings:
    DATA_PATH: Path = Path(__file__).resolve().parent.parent / "data" / "entries.plist"
    TEMPLATES_DIR: Path = Path(__file__).resolve().parent / "web" / "templates"
    STATIC_DIR: Path = Path(__file__).resolve().parent / "web" / "static"
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"

settings = Settings()
