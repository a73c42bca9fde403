import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings, get_settings
from database import create_db_engine, make_session_factory, wait_for_db
from error_reporting import init_sentry, report_exception
from routers.health import router as health_router
from routers.stats import router as stats_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _request_target(request: Request) -> str:
    if request.url.query:
        return f"{request.url.path}?{request.url.query}"
    return request.url.path


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # only GET routes exist, any other method is answered like an unknown path
    if exc.status_code == 405:
        return PlainTextResponse("Not Found", status_code=404)
    return PlainTextResponse(
        str(exc.detail), status_code=exc.status_code, headers=getattr(exc, "headers", None)
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    # the traceback is logged by the server once the error is re-raised
    logger.error(f"{request.method} {_request_target(request)} failed: {exc!r}")
    report_exception(exc)
    return PlainTextResponse("Internal Server Error", status_code=500)


def create_app(settings: Settings, engine: Engine | None = None) -> FastAPI:
    owns_engine = engine is None
    if engine is None:
        engine = create_db_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Spark Stats API...")
        # Check that we can talk to the database
        wait_for_db(engine)
        yield
        logger.info("Shutting down Spark Stats API.")
        if owns_engine:
            engine.dispose()

    app = FastAPI(
        title="Spark Stats API",
        version="1.0.0",
        description="Public read-only statistics of the Spark retrieval checker network.",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    if settings.REQUEST_LOGGING:
        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            start = time.monotonic()
            target = _request_target(request)
            logger.info(f"{request.method} {target} ...")
            try:
                response = await call_next(request)
            except Exception:
                elapsed_ms = int((time.monotonic() - start) * 1000)
                logger.info(f"{request.method} {target} 500 ({elapsed_ms}ms)")
                raise
            elapsed_ms = int((time.monotonic() - start) * 1000)
            logger.info(f"{request.method} {target} {response.status_code} ({elapsed_ms}ms)")
            return response

    app.include_router(health_router)
    app.include_router(stats_router)
    return app


def build_app() -> FastAPI:
    settings = get_settings()
    init_sentry(settings)
    return create_app(settings)


def run():
    import uvicorn

    settings = get_settings()
    logger.info(f"Starting the http server on host {settings.HOST!r} port {settings.PORT}")
    uvicorn.run(build_app(), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
