"""
Main API module for the link shortener.

Responsibilities:
    - Expose JSON endpoints to create, list and delete the signed-in user's links
    - Redirect short codes to their target URL
    - Mount the server-rendered dashboard (link_shortener.web)

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - In-memory storage by default; PostgreSQL via LINK_STORAGE_BACKEND=postgres.
    - LinkManager owns validation and short-code allocation; routes only parse
      input, resolve identity and map results to HTTP.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator

from auth.dependencies import get_current_user, get_optional_user
from auth.schemas import UserOut
from link_shortener.actions import STATUS_BY_KIND, create_link_action, delete_link_action
from link_shortener.config import settings
from link_shortener.errors import LinkError, LinkNotFoundError
from link_shortener.logging_config import setup_logging
from link_shortener.manager.link_manager import LinkManager
from link_shortener.storage.base import BaseStorage
from link_shortener.storage.storage_factory import get_storage
from link_shortener.web.routes import router as web_router


class LinkCreateRequest(BaseModel):
    """Request payload for creating a new short link."""

    model_config = ConfigDict(populate_by_name=True)

    url: str
    custom_code: Optional[str] = Field(default=None, alias="customCode")

    @field_validator("url", mode="before")
    @classmethod
    def _strip_url(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("custom_code", mode="before")
    @classmethod
    def _blank_code_is_none(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value


def failure_response(result: Dict[str, Any]) -> JSONResponse:
    """Structured failure body with the status code for its error kind."""
    return JSONResponse(
        {"success": False, "error": result["error"]},
        status_code=STATUS_BY_KIND.get(result.get("kind", ""), 400),
    )


def create_app(
    storage: Optional[BaseStorage] = None,
    manager: Optional[LinkManager] = None,
) -> FastAPI:
    """
    Factory function to build and configure a new FastAPI app instance.

    Args:
        storage: Storage backend; chosen from env (get_storage) when omitted.
        manager: Pre-built LinkManager; wraps `storage` when omitted.

    Returns:
        FastAPI: A configured application with its own storage and manager.
    """
    setup_logging(settings.LOG_LEVEL)
    log = logging.getLogger("link_shortener.api")

    app = FastAPI(
        title="Link Shortener",
        description="Create short links and manage them from a personal dashboard",
        docs_url="/docs",
    )

    # ----------------------------------------------------------------
    # Per-app instances (isolated for tests, swappable for production)
    # ----------------------------------------------------------------
    if manager is None:
        manager = LinkManager(storage=storage or get_storage())
    app.state.manager = manager
    log.info("Link storage backend: %s", type(manager.storage).__name__)

    @app.exception_handler(LinkError)
    async def link_error_handler(request: Request, exc: LinkError) -> JSONResponse:
        """Any LinkError escaping a route becomes a structured failure body."""
        log.error("%s %s failed: %s", request.method, request.url.path, exc.kind)
        return failure_response({"error": exc.message, "kind": exc.kind})

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    # ----------------------------------------------------------------
    # Routes
    # ----------------------------------------------------------------
    @app.post("/links")
    def create_link(
        req: LinkCreateRequest,
        request: Request,
        user_id: Optional[str] = Depends(get_optional_user),
    ) -> Response:
        """
        Create a short link for the signed-in user.

        Returns:
            {"success": true, "shortCode": ..., "shortUrl": ...} or
            {"success": false, "error": ...} with a 4xx/5xx status.
        """
        result = create_link_action(manager, user_id, req.url, req.custom_code)
        if not result["success"]:
            return failure_response(result)

        short_code = result["shortCode"]
        return JSONResponse(
            {
                "success": True,
                "shortCode": short_code,
                "shortUrl": str(request.url_for("redirect_link", short_code=short_code)),
            }
        )

    @app.get("/links")
    def list_links(user_id: str = Depends(get_current_user)) -> List[Dict[str, Any]]:
        """The signed-in user's links, newest first."""
        return [link.to_dict() for link in manager.list_links(user_id)]

    @app.delete("/links/{link_id}")
    def delete_link(link_id: str, user_id: str = Depends(get_current_user)) -> Response:
        result = delete_link_action(manager, user_id, link_id)
        if not result["success"]:
            return failure_response(result)
        return JSONResponse({"success": True})

    @app.get("/l/{short_code}")
    def redirect_link(short_code: str, request: Request) -> Response:
        """
        Resolve a short code.

        Browsers (Accept: text/html) get a 302 to the target URL; API clients
        get {"url": ..., "shortCode": ...}.
        """
        try:
            url = manager.resolve(short_code)
        except LinkNotFoundError as exc:
            return JSONResponse({"success": False, "error": exc.message}, status_code=404)

        if "text/html" in request.headers.get("accept", "").lower():
            return RedirectResponse(url=url, status_code=302)
        return JSONResponse({"url": url, "shortCode": short_code})

    @app.get("/me", response_model=UserOut)
    def me(user_id: str = Depends(get_current_user)) -> UserOut:
        return UserOut(user_id=user_id, message="Authenticated")

    app.include_router(web_router)

    return app


# `uvicorn main:app --reload` and `from main import app` continue to work.
app = create_app()
