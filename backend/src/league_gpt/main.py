"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from league_gpt.api.routes.champ_select import router as champ_select_router
from league_gpt.config import get_settings
from league_gpt.services.assistant import LeagueAssistant


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup: tests may pre-populate app.state.assistant
    started_here = False
    if not hasattr(app.state, "assistant"):
        settings = getattr(app.state, "settings", None) or get_settings()
        assistant = LeagueAssistant(settings)
        await assistant.start()
        app.state.assistant = assistant
        started_here = True
    yield
    # Shutdown: stop pollers and close HTTP clients
    if started_here:
        await app.state.assistant.stop()
        del app.state.assistant


app = FastAPI(
    title="League GPT",
    description="Champion select assistant - AI pick recommendations and ready check auto accept",
    version="0.1.0",
    lifespan=lifespan,
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "league-gpt"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    settings = getattr(app.state, "settings", None) or get_settings()
    return {
        "name": "League GPT API",
        "version": "0.1.0",
        "docs": "/docs",
        "recommendations_configured": settings.has_api_key or settings.use_mock_recommendations,
        "auto_accept_enabled": settings.auto_accept_enabled,
    }


# Register routers
app.include_router(champ_select_router)
