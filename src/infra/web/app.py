from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from infra.adapter.http_prober import close_http_client
from infra.config.config import get_config
from infra.db.session import close_engine, create_database_schema, ping_database
from infra.logging.config import configure_logging
from infra.web.middleware.request_event_log_middleware import RequestEventLogMiddleware
from infra.web.routers.stats_router import router as stats_router
from infra.web.routers.uptime_check_router import router as uptime_check_router

logger = structlog.stdlib.get_logger(__name__)


def create_app() -> FastAPI:
    config = get_config()

    configure_logging(
        log_level=config.LOGGING_CONFIG.LEVEL,
        json_logs=config.LOGGING_CONFIG.JSON_FORMAT,
        service_name=config.APP_NAME,
        environment=config.ENVIRONMENT,
        library_log_levels=config.LOGGING_CONFIG.LIBRARY_LOG_LEVELS,
        version=config.VERSION,
    )

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        if config.ENVIRONMENT in ("loc", "dev"):
            await create_database_schema()

        try:
            await ping_database()
        except Exception as e:
            logger.exception(f"Unable to reach database: {e}")
            raise

        logger.info(f"{config.APP_NAME} {config.VERSION} started ({config.ENVIRONMENT})")

        yield

        await close_http_client()
        await close_engine()

    app = FastAPI(
        title=config.APP_NAME,
        version=config.VERSION,
        root_path=config.ROOT_PATH,
        docs_url="/apidocs",
        lifespan=lifespan,
    )

    app.add_middleware(
        RequestEventLogMiddleware,
        request_id_header="x-request-id",
        excluded_path_suffixes={"/stats/health"},
    )

    app.state.host = config.HOST
    app.state.port = config.PORT

    app.include_router(stats_router)
    app.include_router(uptime_check_router)

    return app
