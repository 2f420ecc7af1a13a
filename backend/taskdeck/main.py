import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import Settings, settings as default_settings
from .core.errors import TaskdeckError
from .core.logging import setup_logging
from .db.session import init_db, make_engine
from .db.store import TaskStore
from .services.tasks import TaskService
from .api.v1 import health, tasks

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    engine = make_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

    app = FastAPI(title=settings.APP_NAME)
    app.state.settings = settings
    app.state.task_service = TaskService(TaskStore(engine))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(health.router, prefix=settings.API_V1_PREFIX)
    app.include_router(tasks.router, prefix=settings.API_V1_PREFIX)

    @app.exception_handler(TaskdeckError)
    async def handle_taskdeck_error(request: Request, exc: TaskdeckError):
        if exc.status_code >= 500:
            logger.error("%s %s failed", request.method, request.url.path, exc_info=exc)
        else:
            logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content={"detail": str(exc), "code": exc.code})

    @app.on_event("startup")
    def on_startup():
        init_db(engine)
        logger.info("Taskdeck ready db=%s tasks=%s", engine.url, app.state.task_service.store.count())

    @app.on_event("shutdown")
    def on_shutdown():
        engine.dispose()

    return app


app = create_app()


def run() -> None:
    import uvicorn

    setup_logging(default_settings.LOG_LEVEL, default_settings.LOG_FORMAT)
    uvicorn.run(app, host=default_settings.SERVER_HOST, port=default_settings.SERVER_PORT, log_config=None)
