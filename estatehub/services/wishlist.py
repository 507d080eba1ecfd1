"""
Wishlist service.
"""

from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from estatehub.repositories.wishlist import WishlistRepository
from estatehub.models.wishlist import WishlistItem
from estatehub.schemas.wishlist import WishlistCreate
from estatehub.utils.exceptions import NotFoundError, BadRequestError
import uuid


class WishlistService:
    """Saved properties per user. The same property may be saved more than once."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.wishlist_repo = WishlistRepository(db_session)

    async def add_item(self, item_data: WishlistCreate) -> WishlistItem:
        return await self.wishlist_repo.create(item_data.model_dump(exclude_none=True))

    async def list_for_user(self, user_email: Optional[str]) -> List[WishlistItem]:
        if not user_email:
            raise BadRequestError("Email is required")
        return await self.wishlist_repo.get_by_user_email(user_email)

    async def get_item(self, item_id: uuid.UUID) -> WishlistItem:
        item = await self.wishlist_repo.get_by_id(item_id)
        if not item:
            raise NotFoundError("Wishlist item", detail="Wishlist item not found")
        return item

    async def remove_item(self, item_id: uuid.UUID) -> None:
        if not await self.wishlist_repo.delete(item_id):
            raise NotFoundError("Wishlist item", detail="Wishlist item not found")
