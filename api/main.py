"""
FastAPI Application - Market News Triage API
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from llm import get_client
from processor import InsightsGenerator, TriageOrchestrator
from utils import logger, init_logging
from .routes import router


init_logging(app_name="api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting API server")

    # Missing API keys: keep serving health checks, affected routes answer 503
    llm_client = None
    try:
        llm_client = get_client()
    except ValueError as e:
        logger.error(f"AI features disabled: {e}")

    app.state.insights = (
        InsightsGenerator(llm_client, timeout=settings.INSIGHTS_TIMEOUT_SECONDS) if llm_client else None
    )

    try:
        app.state.orchestrator = TriageOrchestrator.from_settings(settings, llm_client=llm_client)
    except ValueError as e:
        logger.error(f"News triage disabled: {e}")
        app.state.orchestrator = None

    yield

    logger.info("Shutting down API server")
    if app.state.orchestrator is not None:
        await app.state.orchestrator.aclose()
    elif llm_client is not None:
        await llm_client.aclose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Market News Triage",
        description="Multi-region news triage with AI risk scoring for commodities and currencies",
        version="1.0.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix="/api")

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": "Market News Triage",
            "version": "1.0.0",
            "status": "running"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host=settings.API_HOST, port=settings.API_PORT)
