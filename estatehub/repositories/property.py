"""
Property repository for listing queries and status changes.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from estatehub.repositories.base import BaseRepository
from estatehub.models.property import Property, PropertyStatus
from typing import Optional, List, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository[Property]):
    """Repository for property listings."""

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def create_property(self, property_data: Dict[str, Any]) -> Property:
        """
        Create a new listing. New listings always start out pending and unadvertised.

        Args:
            property_data: Dictionary containing property information

        Returns:
            Created property instance
        """
        create_data = {
            **property_data,
            "status": PropertyStatus.PENDING,
            "advertise": False,
        }
        property_obj = await self.create(create_data)
        logger.info(f"Created property: {property_obj.title} (ID: {property_obj.id})")
        return property_obj

    async def get_verified(self) -> List[Property]:
        """Verified listings, cheapest minimum price first."""
        return await self.get_multi(
            filters={"status": PropertyStatus.VERIFIED},
            order_by="min_price"
        )

    async def get_by_agent_email(self, agent_email: str) -> List[Property]:
        return await self.get_multi(filters={"agent_email": agent_email.lower().strip()})

    async def get_advertised(self) -> List[Property]:
        return await self.get_multi(filters={"advertise": True})

    async def set_status(self, property_id: uuid.UUID, status: PropertyStatus) -> Optional[Property]:
        """
        Set the verification status of a listing.

        Returns:
            Updated property, or None if it does not exist
        """
        updated = await self.update(property_id, {"status": status})
        if updated:
            logger.info(f"Property {property_id} status set to {status.value}")
        return updated

    async def set_advertise(self, property_id: uuid.UUID, advertise: bool = True) -> Optional[Property]:
        return await self.update(property_id, {"advertise": advertise})

    async def replace(self, property_id: uuid.UUID, property_data: Dict[str, Any]) -> Optional[Property]:
        """
        Overwrite every client-editable field of a listing, including clearing
        optional fields left out of the payload.
        """
        return await self.update(property_id, property_data, exclude_none=False)
