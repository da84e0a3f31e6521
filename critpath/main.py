"""
Critpath - task-dependency scheduling engine (critical path analysis and
timeline projection).
"""

from fastapi import FastAPI

from critpath import __version__
from critpath.config import get_settings
from critpath.routes import schedule
from critpath.exceptions import register_exception_handlers
from critpath.logging_config import setup_logging, get_logger

# Initialize logging
setup_logging()
logger = get_logger(__name__)

settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Critical path analysis and timeline projection for task dependency graphs",
    version=__version__,
)

# Register custom exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(schedule.router, prefix="/schedule", tags=["Schedule"])

logger.info(f"{settings.app_name} API ready (version {__version__})")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
