from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel
from src.api.responses import empty_history_response
from src.domain.errors import HistoryError, StorageUnavailable
import logging

logger = logging.getLogger(__name__)


async def handle_history_error(request: Request, exc: HistoryError):
    error_dict = {"code": exc.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.code}: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_storage_unavailable(request: Request, exc: StorageUnavailable):
    # The history grid always gets a well-formed page, even during an outage
    logger.error(
        f"Storage unavailable: {exc.message} "
        f"(itemtype={exc.itemtype}, items_id={exc.items_id}, filters=[{exc.filter_summary}])",
        exc_info=exc.__cause__,
    )
    return empty_history_response()


def create_app(ApplicationConfig) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.CREATE_TABLES:
            from src.depends import engine

            logger.info("Creating database tables")
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        yield

    app = FastAPI(title="Change History API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import health_check, history

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(history.router, prefix=ApplicationConfig.API_PREFIX, tags=["History"])

    app.add_exception_handler(HistoryError, handle_history_error)
    app.add_exception_handler(StorageUnavailable, handle_storage_unavailable)

    return app
