from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.api.v1.router import api_router
from app.core.config import Settings, describe_config, settings as default_settings
from app.core.handlers import register_exception_handlers
from app.core.logging import setup_logging
from app.services.student.store import StudentStore
from app.services.student.student import StudentService
from app.services.student.sweeper import OrphanSweeper
from app.services.student.uploads import UploadManager
from app.views import students as student_views


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Services are created in the lifespan so importing this module has no
    side effects on disk.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger = setup_logging(settings.LOG_LEVEL)
        describe_config(settings)

        uploads = UploadManager(settings.UPLOAD_DIR)
        uploads.ensure_dir()
        service = StudentService(StudentStore(settings.DATA_FILE), uploads)
        sweeper = OrphanSweeper(
            uploads,
            service.live_refs,
            interval=settings.ORPHAN_SWEEP_INTERVAL_SECONDS,
            min_age=settings.ORPHAN_MIN_AGE_SECONDS,
        )

        app.state.uploads = uploads
        app.state.student_service = service
        app.state.sweeper = sweeper

        if settings.ORPHAN_SWEEP_ENABLED:
            sweeper.start()
        logger.info(f"{settings.PROJECT_NAME} ready")
        try:
            yield
        finally:
            sweeper.stop()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings

    register_exception_handlers(app)

    # Include API router
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)
    app.include_router(student_views.router)

    app.mount(
        settings.UPLOAD_URL_PREFIX,
        StaticFiles(directory=str(settings.UPLOAD_DIR), check_dir=False),
        name="uploads",
    )

    @app.get("/health", include_in_schema=False)
    def health():
        """
        Health check endpoint
        """
        return {
            "message": f"Welcome to {settings.PROJECT_NAME}",
            "docs": "/docs",
            "version": settings.APP_VERSION,
        }

    return app


app = create_app()
