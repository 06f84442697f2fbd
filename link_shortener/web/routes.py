"""Dashboard routes: landing page, link table, create and delete forms."""

from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from auth.dependencies import get_current_user, get_optional_user
from link_shortener.actions import STATUS_BY_KIND, create_link_action, delete_link_action
from link_shortener.errors import LinkError

router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def _render_dashboard(
    request: Request,
    user_id: str,
    *,
    message: Optional[str] = None,
    error: Optional[str] = None,
    form: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
) -> Response:
    manager = request.app.state.manager
    try:
        links = manager.list_links(user_id)
    except LinkError as exc:
        # the table cannot be shown; keep any earlier error for the form
        links = None
        error = error or exc.message
        status_code = STATUS_BY_KIND.get(exc.kind, 503)
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "user_id": user_id,
            "links": links,
            "message": message,
            "error": error,
            "form": form or {},
        },
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def homepage(request: Request, user_id: Optional[str] = Depends(get_optional_user)):
    """Landing page; signed-in users go straight to their dashboard."""
    if user_id:
        return RedirectResponse(url=request.url_for("dashboard"), status_code=303)
    return templates.TemplateResponse(request, "home.html", {})


@router.get("/dashboard", response_class=HTMLResponse, include_in_schema=False)
def dashboard(request: Request, user_id: str = Depends(get_current_user)):
    return _render_dashboard(request, user_id)


@router.post("/dashboard/links", response_class=HTMLResponse, include_in_schema=False)
def create_link_form(
    request: Request,
    url: str = Form(""),
    custom_code: str = Form(""),
    user_id: str = Depends(get_current_user),
):
    """Handle the create form and re-render the dashboard with the outcome."""
    url = url.strip()
    code = custom_code.strip() or None

    result = create_link_action(request.app.state.manager, user_id, url, code)
    if not result["success"]:
        return _render_dashboard(
            request,
            user_id,
            error=result["error"],
            form={"url": url, "custom_code": code or ""},
            status_code=STATUS_BY_KIND.get(result["kind"], 503),
        )

    short_url = request.url_for("redirect_link", short_code=result["shortCode"])
    return _render_dashboard(request, user_id, message=f"Short link created: {short_url}")


@router.post("/dashboard/links/{link_id}/delete", include_in_schema=False)
def delete_link_form(request: Request, link_id: str, user_id: str = Depends(get_current_user)):
    result = delete_link_action(request.app.state.manager, user_id, link_id)
    if not result["success"]:
        return _render_dashboard(
            request, user_id, error=result["error"], status_code=STATUS_BY_KIND.get(result["kind"], 503)
        )
    return RedirectResponse(url=request.url_for("dashboard"), status_code=303)
