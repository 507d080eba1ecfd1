"""
User service for registration, role management and account removal.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from estatehub.repositories.user import UserRepository
from estatehub.models.user import User, UserRole
from estatehub.schemas.user import UserCreate
from estatehub.services.identity import IdentityService
from estatehub.utils.exceptions import (
    NotFoundError,
    DuplicateResourceError,
    InsufficientPermissionsError,
)
import uuid
import logging

logger = logging.getLogger(__name__)

TOP_AGENTS_LIMIT = 6


class UserService:
    """
    User service handling registration, lookups and admin-only account changes.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)

    async def register_user(self, user_data: UserCreate) -> User:
        """
        Register a user after sign up with the identity provider.

        Args:
            user_data: Registration data

        Returns:
            Created user

        Raises:
            DuplicateResourceError: If the email is already registered
            InsufficientPermissionsError: If the payload asks for the admin role
        """
        # Admins are only ever promoted by another admin
        if user_data.role == UserRole.ADMIN:
            raise InsufficientPermissionsError(UserRole.ADMIN.value)

        try:
            return await self.user_repo.create_user(user_data.model_dump(exclude_none=True))
        except ValueError:
            logger.info(f"Registration skipped, {user_data.email} already exists")
            raise DuplicateResourceError("User")

    async def list_users(self) -> List[User]:
        return await self.user_repo.get_multi()

    async def get_user_by_email(self, email: str) -> User:
        """
        Get a user by email.

        Raises:
            NotFoundError: If no user has this email
        """
        user = await self.user_repo.get_by_email(email)
        if not user:
            raise NotFoundError("User", detail="User not found")
        return user

    async def get_top_agents(self) -> List[User]:
        return await self.user_repo.get_users_by_role(UserRole.AGENT, limit=TOP_AGENTS_LIMIT)

    async def change_role(self, user_id: uuid.UUID, role: UserRole) -> User:
        """
        Set a user's role.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = await self.user_repo.update_user_role(user_id, role)
        if not user:
            raise NotFoundError("User", detail="User not found")
        return user

    async def mark_fraud(self, user_id: uuid.UUID) -> User:
        """
        Flag a user as fraudulent.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = await self.user_repo.mark_fraud(user_id)
        if not user:
            raise NotFoundError("User", detail="User not found")
        return user

    async def delete_user(self, user_id: uuid.UUID, identity: IdentityService) -> None:
        """
        Remove a user from the identity provider, then from the database.

        The identity provider call is best effort; the database row is
        deleted even when it fails.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", detail="User not found")

        if user.uid:
            deleted = await identity.delete_user(user.uid)
            if not deleted:
                logger.warning(f"Identity provider account for {user.email} was not removed")

        if not await self.user_repo.delete(user_id):
            raise NotFoundError("User", detail="User not found")

        logger.info(f"Deleted user {user.email} (ID: {user_id})")
