"""
Review repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from estatehub.repositories.base import BaseRepository
from estatehub.models.review import Review
from typing import List
import uuid


class ReviewRepository(BaseRepository[Review]):
    """Repository for property reviews."""

    def __init__(self, db: AsyncSession):
        super().__init__(Review, db)

    async def get_latest(self, limit: int = 3) -> List[Review]:
        """Most recent reviews across all properties."""
        return await self.get_multi(order_by="-date", limit=limit)

    async def get_by_reviewer_email(self, reviewer_email: str) -> List[Review]:
        return await self.get_multi(filters={"reviewer_email": reviewer_email.lower().strip()})

    async def get_by_property(self, property_id: uuid.UUID) -> List[Review]:
        """Reviews for one property, newest first."""
        return await self.get_multi(filters={"property_id": property_id}, order_by="-date")
