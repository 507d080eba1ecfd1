"""
Admin dashboard aggregator.
Runs every count concurrently, each on its own session, and assembles one summary.
"""

from typing import Any, Dict, Optional
from sqlalchemy.ext.asyncio import async_sessionmaker
from estatehub.repositories.base import BaseRepository
from estatehub.models.user import User, UserRole
from estatehub.models.property import Property, PropertyStatus
from estatehub.models.review import Review
from estatehub.schemas.dashboard import DashboardSummary
from estatehub.utils.exceptions import InternalServerError
import asyncio
import logging

logger = logging.getLogger(__name__)

# summary key -> (model, filters)
SUMMARY_COUNTS = {
    "total_users": (User, {"role": UserRole.USER}),
    "total_admins": (User, {"role": UserRole.ADMIN}),
    "total_agents": (User, {"role": UserRole.AGENT}),
    "all_properties": (Property, None),
    "pending_properties": (Property, {"status": PropertyStatus.PENDING}),
    "accepted_properties": (Property, {"status": PropertyStatus.VERIFIED}),
    "rejected_properties": (Property, {"status": PropertyStatus.REJECTED}),
    "total_reviews": (Review, None),
    "advertised_properties": (Property, {"advertise": True}),
}


class DashboardService:
    """Live marketplace counts for the admin dashboard. Nothing is cached."""

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def _count(self, model, filters: Optional[Dict[str, Any]]) -> int:
        async with self.session_factory() as session:
            return await BaseRepository(model, session).count(filters)

    async def get_summary(self) -> DashboardSummary:
        """
        Build the dashboard summary.

        Raises:
            InternalServerError: If any of the counts fails; the remaining
                counts are cancelled first
        """
        tasks = [
            asyncio.create_task(self._count(model, filters))
            for model, filters in SUMMARY_COUNTS.values()
        ]
        try:
            counts = await asyncio.gather(*tasks)
        except Exception as e:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.error(f"Failed to load dashboard summary: {e}", exc_info=True)
            raise InternalServerError("Failed to load summary")

        return DashboardSummary(**dict(zip(SUMMARY_COUNTS.keys(), counts)))
