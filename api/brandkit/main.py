import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import Settings, settings as default_settings
from .core.structured_logging import setup_logging
from .middleware.request_response import RequestResponseMiddleware
from .models.exceptions import BrandKitBaseException, to_error_response
from .routers import brand_kits, health
from .services.brand_kit import build_pipeline
from .services.completions import CompletionsClient
from .services.db import Database
from .services.profiles import get_profile
from .services.projects import ProjectStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup order: configuration check -> clients -> pipeline; shutdown closes what startup opened."""
    cfg: Settings = app.state.settings
    injected_database: Optional[Database] = app.state.injected_database
    injected_client: Optional[CompletionsClient] = app.state.injected_completions_client

    setup_logging(cfg.log_level)
    cfg.validate(require_api_key=injected_client is None)

    database = injected_database or Database(cfg.database_url)
    await asyncio.to_thread(database.create_all)

    client = injected_client or CompletionsClient(
        api_key=cfg.openai_api_key or "",
        base_url=cfg.completions_base_url,
        timeout=cfg.completions_timeout,
    )
    profile = get_profile(cfg.generation_profile)

    app.state.database = database
    app.state.completions_client = client
    app.state.brand_kit_pipeline = build_pipeline(
        ProjectStore(database),
        client,
        profile,
        strict_validation=cfg.strict_kit_validation,
    )
    logger.info(
        "Application startup complete",
        extra={"profile": profile.name, "model": profile.model, "strict_kit_validation": cfg.strict_kit_validation},
    )

    yield

    if injected_client is None:
        await client.aclose()
    if injected_database is None:
        database.dispose()
    logger.info("Application shutdown complete")


async def brandkit_exception_handler(request: Request, exc: BrandKitBaseException):
    """Log the full error server-side; return only message and category."""
    status_code, body = to_error_response(exc)
    log = logger.warning if status_code < 500 else logger.error
    log(
        f"{exc.__class__.__name__}: {exc.message}",
        extra={"error_code": exc.code, "error_details": exc.details, "path": request.url.path},
    )
    return JSONResponse(status_code=status_code, content=body)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Keep framework errors (404, 405) in the same body shape."""
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(status_code=exc.status_code, content={"error": message, "code": "http_error"})


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    completions_client: Optional[CompletionsClient] = None,
) -> FastAPI:
    """Build the application. Handles passed in are used as-is and never closed by the app."""
    cfg = settings or default_settings

    app = FastAPI(
        title=cfg.service_name,
        description="Brand kit generation API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = cfg
    app.state.injected_database = database
    app.state.injected_completions_client = completions_client

    app.add_middleware(RequestResponseMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins(),
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )

    app.add_exception_handler(BrandKitBaseException, brandkit_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.include_router(health.router)
    app.include_router(brand_kits.router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=default_settings.host, port=default_settings.port)
