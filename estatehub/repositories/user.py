"""
User repository for account and role management operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from estatehub.repositories.base import BaseRepository
from estatehub.models.user import User, UserRole
from typing import Optional, List, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """
    Repository for user accounts.
    The stored role is the only authorization signal in the system.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Create a new user after normalizing the email.

        Args:
            user_data: Dictionary containing user information, must include email

        Returns:
            Created user instance

        Raises:
            ValueError: If the email is invalid or already registered
        """
        try:
            email = User.validate_email_format(user_data["email"])

            existing_user = await self.get_by_email(email)
            if existing_user:
                raise ValueError(f"User with email {email} already exists")

            create_data = {
                **user_data,
                "email": email,
                "role": user_data.get("role") or UserRole.USER,
            }

            try:
                created_user = await self.create(create_data)
            except IntegrityError:
                # Lost a race with a concurrent registration of the same email
                raise ValueError(f"User with email {email} already exists")

            logger.info(f"Created user: {created_user.email} (ID: {created_user.id})")
            return created_user
        except ValueError as e:
            logger.error(f"User validation failed: {e}")
            raise

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: Email address to search for

        Returns:
            User instance if found, None otherwise
        """
        try:
            normalized_email = email.lower().strip()

            query = select(User).where(User.email == normalized_email)
            result = await self.db.execute(query)
            user = result.scalar_one_or_none()

            if user:
                logger.debug(f"Retrieved user by email: {email}")
            else:
                logger.debug(f"User with email {email} not found")

            return user
        except Exception as e:
            logger.error(f"Failed to get user by email {email}: {e}")
            raise

    async def get_role_by_email(self, email: str) -> Optional[UserRole]:
        """
        Read only the stored role for an email.

        Returns:
            The user's current role, or None if no such user exists
        """
        query = select(User.role).where(User.email == email.lower().strip())
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def update_user_role(self, user_id: uuid.UUID, new_role: UserRole) -> Optional[User]:
        """
        Update user's role.

        Args:
            user_id: UUID of the user
            new_role: New user role

        Returns:
            Updated user instance or None if not found
        """
        updated_user = await self.update(user_id, {"role": new_role})

        if updated_user:
            logger.info(f"User {updated_user.email} role changed to {new_role.value}")

        return updated_user

    async def mark_fraud(self, user_id: uuid.UUID) -> Optional[User]:
        """Flag a user as fraudulent. Returns None if not found."""
        updated_user = await self.update(user_id, {"fraud": True})

        if updated_user:
            logger.info(f"User {updated_user.email} marked as fraud")

        return updated_user

    async def get_users_by_role(self, role: UserRole, limit: Optional[int] = None) -> List[User]:
        """
        Get users with a specific role.

        Args:
            role: User role to filter by
            limit: Maximum number of users to return

        Returns:
            List of users with the specified role
        """
        return await self.get_multi(filters={"role": role}, limit=limit)
