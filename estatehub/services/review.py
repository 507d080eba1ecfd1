"""
Review service.
"""

from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from estatehub.repositories.review import ReviewRepository
from estatehub.models.review import Review
from estatehub.schemas.review import ReviewCreate
from estatehub.utils.exceptions import NotFoundError, BadRequestError
import uuid
import logging

logger = logging.getLogger(__name__)

LATEST_REVIEWS_LIMIT = 3


class ReviewService:
    """Property reviews written by buyers."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.review_repo = ReviewRepository(db_session)

    async def create_review(self, review_data: ReviewCreate) -> Review:
        """Post a review. Omitting the date stamps it with the current time."""
        review = await self.review_repo.create(review_data.model_dump(exclude_none=True))
        logger.info(f"Review {review.id} posted on property {review.property_id}")
        return review

    async def list_reviews(self) -> List[Review]:
        return await self.review_repo.get_multi()

    async def latest_reviews(self) -> List[Review]:
        return await self.review_repo.get_latest(LATEST_REVIEWS_LIMIT)

    async def list_by_reviewer(self, reviewer_email: Optional[str]) -> List[Review]:
        if not reviewer_email:
            raise BadRequestError("Email is required")
        return await self.review_repo.get_by_reviewer_email(reviewer_email)

    async def list_for_property(self, property_id: uuid.UUID) -> List[Review]:
        return await self.review_repo.get_by_property(property_id)

    async def delete_review(self, review_id: uuid.UUID) -> None:
        if not await self.review_repo.delete(review_id):
            raise NotFoundError("Review", detail="Review not found")
