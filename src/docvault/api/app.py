"""FastAPI application factory with lifespan management."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from docvault.api.middleware import RequestTimingMiddleware
from docvault.api.routes_documents import router as documents_router
from docvault.api.routes_health import router as health_router
from docvault.api.routes_query import router as query_router
from docvault.config.settings import Settings
from docvault.observability.logger import get_logger, setup_logging
from docvault.pipeline.bootstrap import build_components
from docvault.protocols.llm import AnswerGenerator

logger = get_logger("app")


def create_app(
    settings: Settings | None = None,
    generator: AnswerGenerator | None = None,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        resolved = settings or Settings()
        setup_logging(resolved.log_level, json=resolved.log_json)

        components = await build_components(resolved, generator=generator)
        app.state.components = components

        logger.info(
            "startup_complete",
            store=resolved.store_backend,
            embedding_provider=resolved.embedding_provider,
            dimensions=components.embedder.dimensions,
            docs=await components.store.count_documents(),
            chunks=await components.store.count_chunks(),
        )
        yield
        logger.info("shutdown_complete")

    app = FastAPI(
        title="DocVault",
        version="0.1.0",
        description="Retrieval-augmented answers over a personal document collection",
        lifespan=lifespan,
    )
    app.add_middleware(RequestTimingMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(documents_router, tags=["documents"])
    app.include_router(query_router, tags=["query"])
    return app
