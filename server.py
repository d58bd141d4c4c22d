import os
import logging
from contextlib import asynccontextmanager
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from jinja2 import TemplateError

# Early environment loading BEFORE reading any configuration
here = os.path.dirname(os.path.abspath(__file__))
load_dotenv(os.path.join(here, ".env"), override=False)

from taskboard.api import pages, tasks
from taskboard.config import cors_origins, load_settings
from taskboard.errors import TaskNotFoundError, TaskStorageError, TaskValidationError
from taskboard.store import create_schema, make_engine


OPAQUE_ERROR_MESSAGE = "An unexpected exception has occurred"

# Basic logger for server diagnostics (inherits uvicorn handlers)
logger = logging.getLogger("taskboard.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Missing DATABASE_URL aborts startup here, never mid-request
    settings = load_settings()
    logging.getLogger("taskboard").setLevel(settings.log_level)

    engine = make_engine(settings)
    await create_schema(engine)
    app.state.settings = settings
    app.state.engine = engine
    logger.info("startup complete backend=%s", engine.url.get_backend_name())
    try:
        yield
    finally:
        await engine.dispose()
        logger.info("engine disposed")


app = FastAPI(title="Taskboard", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TaskValidationError)
async def handle_validation_error(request: Request, exc: TaskValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(TaskNotFoundError)
async def handle_not_found(request: Request, exc: TaskNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": "Task not found"})


@app.exception_handler(TaskStorageError)
async def handle_storage_error(request: Request, exc: TaskStorageError) -> JSONResponse:
    # Details were logged by the store; callers only see the opaque message
    return JSONResponse(status_code=500, content={"detail": OPAQUE_ERROR_MESSAGE})


@app.exception_handler(TemplateError)
async def handle_template_error(request: Request, exc: TemplateError) -> JSONResponse:
    logger.error("render failed for %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": OPAQUE_ERROR_MESSAGE})


app.include_router(pages.router)
app.include_router(tasks.router)


if __name__ == "__main__":
    import uvicorn

    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port)
