from fastapi import Request

from taskboard.store import TaskStore


def get_store(request: Request) -> TaskStore:
    return TaskStore(request.app.state.engine)
