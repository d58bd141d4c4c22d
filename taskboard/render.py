from pathlib import Path

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from taskboard.models import Task


TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render_index(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "index.html", {})


def render_tasks(request: Request, items: list[Task], status_code: int = 200) -> HTMLResponse:
    """Render the task list fragment that the landing page swaps in."""
    return templates.TemplateResponse(
        request, "tasks.html", {"tasks": items}, status_code=status_code
    )
