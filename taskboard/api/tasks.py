from typing import Any

from fastapi import APIRouter, Depends

from taskboard.api.deps import get_store
from taskboard.models import CreateTaskRequest, Task, require_content
from taskboard.store import TaskStore


router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=list[Task])
async def list_tasks(store: TaskStore = Depends(get_store)) -> list[Task]:
    return await store.list()


@router.get("/{task_id}", response_model=Task)
async def read_task(task_id: int, store: TaskStore = Depends(get_store)) -> Task:
    return await store.get(task_id)


@router.post("", response_model=Task, status_code=201)
async def create_task(request: CreateTaskRequest, store: TaskStore = Depends(get_store)) -> Task:
    content = require_content(request.content)
    task_id = await store.insert(content, request.done)
    return Task(id=task_id, content=content, done=request.done)


@router.put("/{task_id}", response_model=Task)
async def toggle_task(task_id: int, store: TaskStore = Depends(get_store)) -> Task:
    return await store.toggle(task_id)


@router.delete("/{task_id}")
async def delete_task(task_id: int, store: TaskStore = Depends(get_store)) -> dict[str, Any]:
    await store.delete(task_id)
    return {"deleted": task_id}
