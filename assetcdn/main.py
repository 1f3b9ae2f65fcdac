import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError

from assetcdn import __version__
from assetcdn.core.config import Settings, get_settings
from assetcdn.core.container import ApplicationContainer
from assetcdn.domain.versions import FreezeTransactionError
from assetcdn.infrastructure.database import init_db
from assetcdn.infrastructure.storage import ObjectStore, StoreUnavailableError
from assetcdn.interfaces.http import create_api_router

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: ApplicationContainer = app.state.container
    if container.settings.environment in {"development", "test"}:
        await init_db(container.engine)
    logger.info("%s %s started", container.settings.project_name, __version__)
    yield
    await container.dispose()


async def _store_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Store unavailable while handling %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Storage temporarily unavailable"},
    )


async def _freeze_failure_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Publish failed for %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Failed to record the new version"},
    )


def create_app(
    settings: Optional[Settings] = None,
    object_store: Optional[ObjectStore] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.project_name,
        description="Origin server for edge-cached asset delivery",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = ApplicationContainer.build(settings, object_store=object_store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["ETag", "Last-Modified", "Cache-Control"],
    )

    app.add_exception_handler(StoreUnavailableError, _store_unavailable_handler)
    app.add_exception_handler(OperationalError, _store_unavailable_handler)
    app.add_exception_handler(InterfaceError, _store_unavailable_handler)
    app.add_exception_handler(FreezeTransactionError, _freeze_failure_handler)

    app.include_router(create_api_router(settings.api_prefix))
    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "assetcdn.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
    )


if __name__ == "__main__":
    run()
