"""FastAPI dependencies."""
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.assignment.selector import ReviewerSelector
from ..core.config.settings import ReviewerServiceConfig
from ..core.storage.database import get_db


async def get_session() -> AsyncIterator[AsyncSession]:
    """Get database session dependency."""
    db = get_db()
    async with db.session() as session:
        yield session


def get_selector(request: Request) -> ReviewerSelector:
    """Reviewer selector created once per application."""
    return request.app.state.selector


def get_settings(request: Request) -> ReviewerServiceConfig:
    """Config the application was created with."""
    return request.app.state.config
