from __future__ import annotations
import json
import logging
from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from emojidict.config import settings
from emojidict.service.entry_service import EntryService
from emojidict.service.entry_store import EntryNotFoundError
from emojidict.web.dependencies import get_entry_service

logger = logging.getLogger(__name__)

router = APIRouter()
templates = Jinja2Templates(directory=str(settings.TEMPLATES_DIR))


def _form_page(request: Request, entry_id: str | None, values: dict, error: str | None, status_code: int = 200):
    return templates.TemplateResponse(
        request,
        "entry_form.html",
        {"entry_id": entry_id, "values": values, "error": error},
        status_code=status_code,
    )


def _get_or_404(service: EntryService, entry_id: str):
    try:
        return service.get_entry(entry_id)
    except EntryNotFoundError:
        raise HTTPException(status_code=404, detail="Entry not found")


@router.get("/entries", response_class=HTMLResponse)
def list_entries(request: Request, service: EntryService = Depends(get_entry_service)):
    return templates.TemplateResponse(request, "entries.html", {"entries": service.list_entries()})


@router.get("/entries/new", response_class=HTMLResponse)
def new_entry_form(request: Request):
    values = {"symbol": "", "name": "", "description": "", "usage": ""}
    return _form_page(request, None, values, None)


@router.get("/entries/export")
def export_entries(service: EntryService = Depends(get_entry_service)):
    """Download every entry as JSON."""
    data = json.dumps(service.export_entries(), ensure_ascii=False, indent=2).encode("utf-8")
    return Response(
        content=data,
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="emoji_dictionary.json"'},
    )


@router.post("/entries/import")
async def import_entries(json_file: UploadFile = File(...), service: EntryService = Depends(get_entry_service)):
    """Append entries from an uploaded export. Anything that is not a JSON list is ignored."""
    raw = await json_file.read()
    try:
        items = json.loads(raw.decode("utf-8"))
        if not isinstance(items, list):
            raise ValueError("JSON must be a list.")
    except ValueError as e:
        logger.warning("Ignoring entry import: %s", e)
        return RedirectResponse(url="/entries", status_code=303)
    count = service.import_entries(items)
    logger.info("Imported %d entries", count, extra={"count": count})
    return RedirectResponse(url="/entries", status_code=303)


@router.post("/entries")
def create_entry(
    request: Request,
    symbol: str = Form(""),
    name: str = Form(""),
    description: str = Form(""),
    usage: str = Form(""),
    service: EntryService = Depends(get_entry_service),
):
    try:
        service.create_entry(symbol, name, description, usage)
    except ValueError as e:
        values = {"symbol": symbol, "name": name, "description": description, "usage": usage}
        return _form_page(request, None, values, str(e), status_code=400)
    return RedirectResponse(url="/entries", status_code=303)


@router.get("/entries/{entry_id}/edit", response_class=HTMLResponse)
def edit_entry_form(request: Request, entry_id: str, service: EntryService = Depends(get_entry_service)):
    entry = _get_or_404(service, entry_id)
    return _form_page(request, entry.id, entry.to_dict(), None)


@router.post("/entries/{entry_id}")
def update_entry(
    request: Request,
    entry_id: str,
    symbol: str = Form(""),
    name: str = Form(""),
    description: str = Form(""),
    usage: str = Form(""),
    service: EntryService = Depends(get_entry_service),
):
    _get_or_404(service, entry_id)
    try:
        service.edit_entry(entry_id, symbol, name, description, usage)
    except ValueError as e:
        values = {"symbol": symbol, "name": name, "description": description, "usage": usage}
        return _form_page(request, entry_id, values, str(e), status_code=400)
    return RedirectResponse(url="/entries", status_code=303)


@router.post("/entries/{entry_id}/delete")
def delete_entry(entry_id: str, service: EntryService = Depends(get_entry_service)):
    try:
        service.delete_entry(entry_id)
    except EntryNotFoundError:
        raise HTTPException(status_code=404, detail="Entry not found")
    return RedirectResponse(url="/entries", status_code=303)


@router.post("/entries/{entry_id}/move")
def move_entry(entry_id: str, direction: str = Form(...), service: EntryService = Depends(get_entry_service)):
    try:
        service.move_entry(entry_id, direction)
    except EntryNotFoundError:
        raise HTTPException(status_code=404, detail="Entry not found")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return RedirectResponse(url="/entries", status_code=303)
