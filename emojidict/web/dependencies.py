from __future__ import annotations
from fastapi import Request
from emojidict.service.entry_service import EntryService
from emojidict.service.entry_store import EntryStore

def get_store(request: Request) -> EntryStore:
    return request.app.state.store

def get_entry_service(request: Request) -> EntryService:
    return EntryService(get_store(request))
