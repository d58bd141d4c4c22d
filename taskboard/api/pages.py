import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from taskboard.api.deps import get_store
from taskboard.errors import TaskValidationError
from taskboard.models import CreateTaskRequest, Task, parse_done_field, require_content
from taskboard.render import render_index, render_tasks
from taskboard.store import TaskStore


logger = logging.getLogger("taskboard.api.pages")

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
def landing(request: Request) -> HTMLResponse:
    return render_index(request)


@router.get("/tasks", response_class=HTMLResponse)
async def list_tasks(request: Request, store: TaskStore = Depends(get_store)) -> HTMLResponse:
    return render_tasks(request, await store.list())


@router.get("/tasks/{task_id}", response_model=Task)
async def read_task(task_id: int, store: TaskStore = Depends(get_store)) -> Task:
    return await store.get(task_id)


async def _read_create_payload(request: Request) -> tuple[str | None, bool]:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = CreateTaskRequest.model_validate(await request.json())
        except (ValueError, ValidationError):
            raise TaskValidationError("Task payload must be a JSON object with content and done")
        return payload.content, payload.done

    form = await request.form()
    content = form.get("content")
    done = form.get("done")
    return (
        content if isinstance(content, str) else None,
        parse_done_field(done if isinstance(done, str) else None),
    )


@router.post("/tasks", response_class=HTMLResponse, status_code=201)
async def create_task(request: Request, store: TaskStore = Depends(get_store)) -> HTMLResponse:
    """Create from a JSON body or form fields ``content`` and ``done``, then re-render the list."""
    content, done = await _read_create_payload(request)
    content = require_content(content)
    await store.insert(content, done)
    return render_tasks(request, await store.list(), status_code=201)


@router.put("/tasks/{task_id}", response_class=HTMLResponse)
async def toggle_task(
    task_id: int, request: Request, store: TaskStore = Depends(get_store)
) -> HTMLResponse:
    await store.toggle(task_id)
    return render_tasks(request, await store.list())


@router.delete("/tasks/{task_id}", response_class=HTMLResponse)
async def delete_task(
    task_id: int, request: Request, store: TaskStore = Depends(get_store)
) -> HTMLResponse:
    if not await store.delete(task_id):
        logger.debug("delete_task[%s] no such task", task_id)
    return render_tasks(request, await store.list())
