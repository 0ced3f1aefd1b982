"""
Application lifecycle event handlers.

Startup builds the process-wide collaborators (achievement catalog, shared
HTTP client, repositories and services) onto app.state; shutdown lets
in-flight streak refreshes finish and closes connections.
"""

from datetime import timedelta
from typing import Callable

import httpx
import structlog
from fastapi import FastAPI

from core.config import settings
from db.cosmos_session import close_cosmos
from repositories.provider import get_party_repository, get_user_repository
from services.achievement_catalog import CATALOG_VERSION, get_catalog
from services.achievement_service import AchievementService
from services.streak_service import StreakService
from services.submission_feed import LeetCodeSubmissionFeed

logger = structlog.get_logger(__name__)


def create_start_app_handler(app: FastAPI) -> Callable:
    """Create startup event handler."""

    async def start_app() -> None:
        logger.info("Starting StreakForge API...")

        catalog = get_catalog()
        logger.info("achievement_catalog_loaded", version=CATALOG_VERSION, achievements=len(catalog))

        http_client = httpx.AsyncClient(timeout=settings.SUBMISSION_FEED_TIMEOUT_SECONDS)
        user_repo = get_user_repository()
        party_repo = get_party_repository()

        streak_service = StreakService(
            feed=LeetCodeSubmissionFeed(http_client),
            user_repo=user_repo,
            cache_ttl=timedelta(seconds=settings.STREAK_CACHE_TTL_SECONDS),
        )

        app.state.http_client = http_client
        app.state.streak_service = streak_service
        app.state.achievement_service = AchievementService(
            user_repo=user_repo,
            party_repo=party_repo,
            streak_service=streak_service,
            catalog=catalog,
        )

        logger.info("StreakForge API started successfully")

    return start_app


def create_stop_app_handler(app: FastAPI) -> Callable:
    """Create shutdown event handler."""

    async def stop_app() -> None:
        logger.info("Shutting down StreakForge API...")

        streak_service = getattr(app.state, "streak_service", None)
        if streak_service is not None:
            await streak_service.drain()

        http_client = getattr(app.state, "http_client", None)
        if http_client is not None:
            await http_client.aclose()

        await close_cosmos()

        logger.info("StreakForge API shutdown complete")

    return stop_app
