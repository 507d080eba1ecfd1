"""
Wishlist repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from estatehub.repositories.base import BaseRepository
from estatehub.models.wishlist import WishlistItem
from typing import List


class WishlistRepository(BaseRepository[WishlistItem]):
    """Repository for saved properties. No uniqueness is enforced per user/property."""

    def __init__(self, db: AsyncSession):
        super().__init__(WishlistItem, db)

    async def get_by_user_email(self, user_email: str) -> List[WishlistItem]:
        return await self.get_multi(filters={"user_email": user_email.lower().strip()})
