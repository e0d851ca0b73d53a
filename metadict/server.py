"""
HTTP server exposing the metadata dictionary.

Run with ``metadict-server`` (or ``python -m metadict``), or under uvicorn
directly: ``uvicorn --factory metadict.server:create_app``.
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request

from metadict.ausplots import ausplots_tables
from metadict.builder import DictionaryBuilder, DictionaryEntry
from metadict.cache import RebuildCache
from metadict.config import ServerConfig
from metadict.logging import configure_level, level_from_name, setup_logging
from metadict.service import DictionaryService
from metadict.source import GraphSourceInterface, HttpGraphSource
from metadict.tables import VocabularyTables
from metadict.telemetry import init_telemetry, report_exception, report_warning

logger = setup_logging()

router = APIRouter()


def get_cache(request: Request) -> RebuildCache:
    """FastAPI dependency returning the application's dictionary cache."""
    return request.app.state.cache


@router.get(
    "/",
    response_model=list[DictionaryEntry],
    summary="Metadata dictionary",
    description="""
Every variable code and value code with labels and definitions, sorted by
variable code then value code. Variables without enumerated values have null
value fields.
""",
)
async def get_dictionary(cache: RebuildCache = Depends(get_cache)) -> list[DictionaryEntry]:
    """
    Return the metadata dictionary, rebuilding it when the cache is stale.
    """
    try:
        dictionary = await cache.get()
    except Exception as e:
        # The cache has already reported the failed rebuild.
        raise HTTPException(status_code=500, detail="Internal Server Error") from e
    return list(dictionary)


@router.get("/health")
async def health_check():
    """
    Health check endpoint to verify that the server is running.
    """
    return {"status": "ok"}


def create_app(
    config: Optional[ServerConfig] = None,
    source: Optional[GraphSourceInterface] = None,
    tables: Optional[VocabularyTables] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Server settings; read from the environment when omitted.
        source: Vocabulary graph source; an HttpGraphSource on
            ``config.jsonld_url`` when omitted.
        tables: Vocabulary tables; the AusPlots tables for
            ``config.container_id`` when omitted.
    """
    config = config or ServerConfig.from_env()
    configure_level(level_from_name(config.log_level))
    sentry_enabled = init_telemetry(config.sentry_dsn)

    if source is None:
        source = HttpGraphSource(config.jsonld_url, timeout_seconds=config.fetch_timeout_seconds)
    if tables is None:
        tables = ausplots_tables(config.container_id)
    builder = DictionaryBuilder(tables, on_warning=report_warning)
    service = DictionaryService(source, builder)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Log the effective settings on startup."""
        logger.info(
            {
                "message": "Ausplots metadata dictionary server running!",
                "port": config.port,
                "cache_expiry_seconds": config.cache_expiry_seconds,
                "source_url": config.jsonld_url,
                "cat_var_container_id": config.container_id,
                "sentry_enabled": sentry_enabled,
            },
            pprint=True,
        )
        yield

    app = FastAPI(
        title="Ausplots Metadata Dictionary",
        description="Flattened metadata dictionary built from the AusPlots controlled vocabulary.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.cache = service.cache(
        ttl_seconds=config.cache_expiry_seconds,
        on_failure=report_exception,
    )

    app.include_router(router)
    return app


def main() -> None:
    config = ServerConfig.from_env()
    uvicorn.run(create_app(config), host="0.0.0.0", port=config.port)
