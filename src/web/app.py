"""
FastAPI application factory for the navigation assistant.

Routes:
- /      -> control page (start/stop, status, object list)
- /api/* -> REST API
"""

from __future__ import annotations

from fastapi import FastAPI

from runtime.services import NavigationService
from .routes import api, pages
from .state import WebPresentationState


def create_app(service: NavigationService, web_state: WebPresentationState) -> FastAPI:
    """
    Create the FastAPI app bound to one assistant instance.

    The service and the presentation state are attached to app.state so
    handlers reach them through the request instead of module globals.
    """
    app = FastAPI(
        title="Navigation Assistant",
        version="0.1.0",
        description="Camera-based obstacle narration for visually impaired users",
    )
    app.state.service = service
    app.state.web_state = web_state

    app.include_router(api.router, prefix="/api")
    app.include_router(pages.router)

    return app
