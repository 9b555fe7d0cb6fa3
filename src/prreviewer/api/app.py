"""FastAPI app factory"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .. import __version__
from ..core.assignment.selector import ReviewerSelector
from ..core.config.settings import ReviewerServiceConfig, get_config
from ..core.storage.database import init_db
from .errors import register_exception_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager.

    Handles startup and shutdown events for the FastAPI application.
    """
    # Startup
    config = app.state.config
    db = init_db(config.get_database_url(), echo=config.db_echo)
    await db.create_tables()

    # Store in app state for access in routes
    app.state.db = db

    logger.info("PR reviewer API started")

    yield

    # Shutdown
    await db.close()
    logger.info("PR reviewer API stopped")


def create_app(config: Optional[ReviewerServiceConfig] = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        config: Configuration to use; defaults to the global configuration

    Returns:
        Configured FastAPI application instance
    """
    config = config or get_config()

    app = FastAPI(
        title="PR Reviewer Assignment API",
        description="Assigns and reassigns pull request reviewers within teams",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.config = config
    # Seeded once per process; tests override the get_selector dependency
    app.state.selector = ReviewerSelector(config.make_random(), max_reviewers=config.max_reviewers)

    register_exception_handlers(app)

    # Register routes
    from .routes import pull_requests, stats, teams, users

    app.include_router(teams.router, tags=["teams"])
    app.include_router(users.router, tags=["users"])
    app.include_router(pull_requests.router, tags=["pull requests"])
    app.include_router(stats.router, tags=["stats"])

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "service": "pr-reviewer"}

    return app


app = create_app()
