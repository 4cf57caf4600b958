from fastapi import FastAPI
from contextlib import asynccontextmanager
from jina_reader.api.routes import router
from jina_reader.core.config import settings
from jina_reader.services import reader_command

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Build the command handler on startup, drop it on shutdown.
    """
    # Startup
    print(f"Initializing Jina Reader slash command (mode={settings.FETCH_MODE}, mock={settings.USE_MOCK})...")
    reader_command.get_handler()
    print("Command handler ready")

    yield

    # Shutdown
    print("Shutting down Jina Reader slash command...")
    reader_command.reset_handler()

app = FastAPI(
    title="Jina Reader Slash Command",
    description="Slash command that fetches a URL through the Jina AI Reader proxy",
    version="1.0.0",
    lifespan=lifespan
)

# Include API routes
app.include_router(router)

@app.get("/")
async def root():
    """Root endpoint with basic info"""
    return {
        "service": "Jina Reader Slash Command",
        "version": "1.0.0",
        "mode": settings.FETCH_MODE,
        "endpoints": {
            "commands": "GET /slash-commands",
            "run": "POST /slash-command",
            "result": "GET /slash-command/{invocation_id}",
            "health": "GET /health"
        }
    }
