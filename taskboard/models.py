from pydantic import BaseModel

from taskboard.errors import TaskValidationError


_TRUTHY_FORM_VALUES = {"true", "on", "1", "yes"}


class Task(BaseModel):
    """A single to-do item.

    Attributes:
        id: Surrogate key assigned by the store.
        content: Non-empty text of the item.
        done: Completion flag.
    """

    id: int
    content: str
    done: bool = False


class CreateTaskRequest(BaseModel):
    """JSON payload accepted when creating a task."""

    content: str | None = None
    done: bool = False


def require_content(content: str | None) -> str:
    if content is None or not content.strip():
        raise TaskValidationError("Task content must not be empty")
    return content


def parse_done_field(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _TRUTHY_FORM_VALUES
