"""
Page routes for the navigation assistant control page.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


@router.get("/", response_class=HTMLResponse)
def control_page(request: Request):
    """Start/stop buttons, status line and the object list."""
    phrases = request.app.state.web_state.phrases
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "lang": phrases.language,
            "empty_text": phrases.no_objects,
            "count_unit": phrases.count_unit,
        },
    )
