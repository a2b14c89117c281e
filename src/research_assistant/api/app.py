"""FastAPI application factory with lifespan management."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from research_assistant.annotation.annotators import create_annotator
from research_assistant.api.auth import router as auth_router
from research_assistant.api.middleware import RequestContextMiddleware
from research_assistant.api.rate_limiter import SlidingWindowRateLimiter
from research_assistant.api.routes_analyze import router as analyze_router
from research_assistant.api.routes_citations import router as citations_router
from research_assistant.api.routes_health import router as health_router
from research_assistant.api.routes_research import router as research_router
from research_assistant.config.settings import Settings
from research_assistant.generation.gemini_provider import GeminiProvider
from research_assistant.generation.providers import ProviderRegistry
from research_assistant.observability.logger import get_logger, setup_logging
from research_assistant.pipeline.research_pipeline import ResearchPipeline
from research_assistant.protocols.annotator import TextAnnotator
from research_assistant.storage.sqlite_citation_store import SQLiteCitationStore
from research_assistant.storage.sqlite_message_store import SQLiteMessageStore

logger = get_logger("app")


def create_app(
    settings: Settings | None = None,
    providers: ProviderRegistry | None = None,
    annotator: TextAnnotator | None = None,
) -> FastAPI:
    """Build the app. Arguments override the env-driven defaults (used by tests)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        cfg = settings or Settings()
        setup_logging()

        Path(cfg.sqlite_db_path).parent.mkdir(parents=True, exist_ok=True)

        # Storage
        message_store = SQLiteMessageStore(cfg.sqlite_db_path)
        await message_store.initialize()
        citation_store = SQLiteCitationStore(cfg.sqlite_db_path)
        await citation_store.initialize()

        # Completion providers
        registry = providers
        if registry is None:
            registry = ProviderRegistry()
            registry.register(
                "google", GeminiProvider(api_key=cfg.google_api_key, model=cfg.gemini_model)
            )

        # Annotation (in-process unless a remote scorer is configured)
        text_annotator = annotator or create_annotator(cfg)

        research_pipeline = ResearchPipeline(
            providers=registry,
            annotator=text_annotator,
            message_store=message_store,
            citation_store=citation_store,
            settings=cfg,
        )

        app.state.settings = cfg
        app.state.rate_limiter = SlidingWindowRateLimiter()
        app.state.message_store = message_store
        app.state.citation_store = citation_store
        app.state.annotator = text_annotator
        app.state.research_pipeline = research_pipeline

        logger.info(
            "startup_complete",
            messages=await message_store.count_messages(),
            citations=await citation_store.count_citations(),
            remote_annotator=bool(cfg.annotator_url),
        )

        yield

        logger.info("shutdown_complete")

    app = FastAPI(
        title="Research Assistant",
        version="1.0.0",
        description="Citation extraction and message annotation for research chats",
        lifespan=lifespan,
    )
    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router)
    app.include_router(research_router, tags=["research"])
    app.include_router(analyze_router, tags=["analyze"])
    app.include_router(citations_router, tags=["citations"])
    return app
