"""
Property service for listing management and admin review.
"""

from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from estatehub.repositories.property import PropertyRepository
from estatehub.models.property import Property, PropertyStatus
from estatehub.schemas.property import PropertyCreate
from estatehub.utils.exceptions import NotFoundError, BadRequestError
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertyService:
    """
    Property service for listing CRUD, verification and advertising.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)

    async def create_property(self, property_data: PropertyCreate) -> Property:
        """Create a listing awaiting admin verification."""
        return await self.property_repo.create_property(property_data.model_dump())

    async def list_properties(self) -> List[Property]:
        return await self.property_repo.get_multi()

    async def list_verified(self) -> List[Property]:
        return await self.property_repo.get_verified()

    async def list_advertised(self) -> List[Property]:
        return await self.property_repo.get_advertised()

    async def list_agent_properties(self, agent_email: Optional[str]) -> List[Property]:
        """
        Listings created by one agent.

        Raises:
            BadRequestError: If no email is given
        """
        if not agent_email:
            raise BadRequestError("Email is required")
        return await self.property_repo.get_by_agent_email(agent_email)

    async def get_property(self, property_id: uuid.UUID) -> Property:
        """
        Get a listing by id.

        Raises:
            NotFoundError: If the listing does not exist
        """
        property_obj = await self.property_repo.get_by_id(property_id)
        if not property_obj:
            raise NotFoundError("Property", detail="Property not found")
        return property_obj

    async def replace_property(self, property_id: uuid.UUID, property_data: PropertyCreate) -> Property:
        """
        Overwrite the editable fields of a listing. Status and advertising are kept.

        Raises:
            NotFoundError: If the listing does not exist
        """
        property_obj = await self.property_repo.replace(property_id, property_data.model_dump())
        if not property_obj:
            raise NotFoundError("Property", detail="Property not found")
        logger.info(f"Property {property_id} updated")
        return property_obj

    async def delete_property(self, property_id: uuid.UUID) -> None:
        """
        Hard delete a listing. Offers, reviews and wishlist entries referencing it are kept.

        Raises:
            NotFoundError: If the listing does not exist
        """
        if not await self.property_repo.delete(property_id):
            raise NotFoundError("Property", detail="Property not found")

    async def set_status(self, property_id: uuid.UUID, status: PropertyStatus) -> Property:
        """
        Verify or reject a listing.

        Raises:
            NotFoundError: If the listing does not exist
        """
        property_obj = await self.property_repo.set_status(property_id, status)
        if not property_obj:
            raise NotFoundError("Property", detail="Property not found")
        return property_obj

    async def advertise(self, property_id: uuid.UUID) -> Property:
        property_obj = await self.property_repo.set_advertise(property_id, True)
        if not property_obj:
            raise NotFoundError("Property", detail="Property not found")
        logger.info(f"Property {property_id} advertised")
        return property_obj
