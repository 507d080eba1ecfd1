#!/usr/bin/env python3
"""
Database management script.
Creates and resets the schema and bootstraps the first admin account, which
cannot be obtained through self-registration.
"""

import asyncio
import sys
import argparse
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from estatehub.config import settings
from estatehub.database import engine, AsyncSessionLocal, Base
from estatehub.models.user import User, UserRole
from estatehub.repositories.user import UserRepository
import estatehub.models  # noqa: F401

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class DatabaseManager:
    """Schema and bootstrap operations against one database."""

    def __init__(
        self,
        target_engine: Optional[AsyncEngine] = None,
        session_factory: Optional[async_sessionmaker] = None
    ):
        self.engine = target_engine or engine
        self.session_factory = session_factory or AsyncSessionLocal

    async def create_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("All tables created")

    async def reset_database(self) -> None:
        """Drop and recreate every table. Refused outside development and testing."""
        if not (settings.is_development or settings.is_testing):
            raise RuntimeError("Database reset is only allowed in development or test mode")

        logger.warning("Resetting database - all data will be lost!")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            logger.info("All tables dropped")
            await conn.run_sync(Base.metadata.create_all)
            logger.info("All tables created")

    async def seed_admin(self, email: str, name: Optional[str] = None) -> User:
        """
        Make `email` an admin, creating the account if it does not exist yet.

        Returns:
            The admin user
        """
        async with self.session_factory() as session:
            user_repo = UserRepository(session)
            user = await user_repo.get_by_email(email)

            if user is None:
                user = await user_repo.create_user({
                    "email": email,
                    "name": name or "Administrator",
                    "role": UserRole.ADMIN,
                })
                logger.info(f"Admin user created: {user.email}")
            elif not user.is_admin:
                user = await user_repo.update_user_role(user.id, UserRole.ADMIN)
                logger.info(f"Existing user {user.email} promoted to admin")
            else:
                logger.info(f"{user.email} is already an admin, skipping seed")

            return user


def main():
    """Command line interface for database management."""
    parser = argparse.ArgumentParser(description="EstateHub database management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create", help="Create all tables")

    reset_parser = subparsers.add_parser("reset", help="Drop and recreate all tables (development only)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    seed_parser = subparsers.add_parser("seed-admin", help="Create or promote an admin account")
    seed_parser.add_argument("email", help="Admin email")
    seed_parser.add_argument("--name", help="Display name for a newly created admin")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    manager = DatabaseManager()

    try:
        if args.command == "create":
            asyncio.run(manager.create_tables())

        elif args.command == "reset":
            if not args.confirm:
                print("Database reset requires --confirm flag")
                return
            asyncio.run(manager.reset_database())

        elif args.command == "seed-admin":
            asyncio.run(manager.seed_admin(args.email, args.name))

    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
