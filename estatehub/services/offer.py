"""
Offer service implementing the purchase offer lifecycle.

An offer starts out pending. The listing agent accepts it, which rejects every
other offer on the same property, or rejects it. The buyer then pays and the
offer is marked bought with the payment transaction id.

Two transition policies are supported. "lenient" lets any state be
overwritten; "strict" only allows pending -> accepted/rejected and
accepted -> bought and raises a conflict otherwise.
"""

from typing import Optional, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from estatehub.config import settings
from estatehub.repositories.offer import OfferRepository
from estatehub.models.offer import Offer, OfferStatus, allowed_predecessors, can_transition
from estatehub.schemas.offer import OfferCreate, OfferUpdate
from estatehub.utils.exceptions import (
    NotFoundError,
    BadRequestError,
    OfferTransitionError,
)
import uuid
import logging

logger = logging.getLogger(__name__)

OFFER_NOT_UPDATED = "Offer not found or already updated"


class OfferService:
    """
    Offer service for creating offers and moving them through their lifecycle.
    """

    def __init__(self, db_session: AsyncSession, policy: Optional[str] = None):
        self.db = db_session
        self.offer_repo = OfferRepository(db_session)
        self.policy = policy or settings.offer_transition_policy

    @property
    def is_strict(self) -> bool:
        return self.policy == "strict"

    async def create_offer(self, offer_data: OfferCreate) -> Offer:
        return await self.offer_repo.create_offer(offer_data.model_dump())

    async def get_offer(self, offer_id: uuid.UUID) -> Offer:
        offer = await self.offer_repo.get_by_id(offer_id)
        if not offer:
            raise NotFoundError("Offer", detail="Offer not found")
        return offer

    async def list_bought(self, buyer_email: Optional[str]) -> List[Offer]:
        """Every offer a buyer has made, whatever its status."""
        if not buyer_email:
            raise BadRequestError("Email is required")
        return await self.offer_repo.get_by_buyer_email(buyer_email)

    async def list_for_agent(self, agent_email: Optional[str]) -> List[Offer]:
        """Pending, accepted and rejected offers on an agent's listings."""
        if not agent_email:
            raise BadRequestError("Agent email is required")
        return await self.offer_repo.get_open_for_agent(agent_email)

    async def list_sold(self, agent_email: str) -> List[Offer]:
        return await self.offer_repo.get_sold_by_agent(agent_email)

    def _check_transition(self, offer: Offer, target: OfferStatus) -> None:
        if self.is_strict and not can_transition(offer.status, target):
            logger.warning(f"Refused offer {offer.id} move {offer.status.value} -> {target.value}")
            raise OfferTransitionError(offer.status.value, target.value)

    def _check_cascade(self, target: Offer, offers: List[Offer]) -> None:
        """Strict mode check run while the property's offers are locked."""
        self._check_transition(target, OfferStatus.ACCEPTED)
        for sibling in offers:
            if sibling.id != target.id and sibling.status != OfferStatus.REJECTED:
                self._check_transition(sibling, OfferStatus.REJECTED)

    async def accept_offer(self, offer_id: uuid.UUID) -> Tuple[Offer, int]:
        """
        Accept an offer and reject every other offer on the same property,
        atomically.

        Returns:
            (accepted offer, number of sibling offers rejected)

        Raises:
            NotFoundError: If the offer does not exist or is already accepted
            OfferTransitionError: In strict mode, if any move is not allowed
        """
        result = await self.offer_repo.accept_with_cascade(
            offer_id,
            check=self._check_cascade if self.is_strict else None
        )
        if result is None:
            raise NotFoundError("Offer", detail=OFFER_NOT_UPDATED)
        return result

    async def reject_offer(self, offer_id: uuid.UUID) -> Offer:
        """
        Reject an offer.

        Raises:
            NotFoundError: If the offer does not exist or is already rejected
            OfferTransitionError: In strict mode, if the offer is not pending
        """
        offer = await self._set_status(offer_id, OfferStatus.REJECTED)
        if not offer:
            raise NotFoundError("Offer", detail=OFFER_NOT_UPDATED)
        return offer

    async def mark_bought(self, offer_id: uuid.UUID, transaction_id: str) -> Offer:
        """
        Record a completed payment on an offer.

        Raises:
            NotFoundError: If the offer does not exist, or is already bought
                with the same transaction id
            OfferTransitionError: In strict mode, if the offer is not accepted
        """
        offer = await self._set_status(offer_id, OfferStatus.BOUGHT, transaction_id)
        if not offer:
            raise NotFoundError("Offer", detail=OFFER_NOT_UPDATED)
        logger.info(f"Offer {offer_id} bought, transaction {transaction_id}")
        return offer

    async def replace_offer(self, offer_id: uuid.UUID, offer_data: OfferUpdate) -> Offer:
        """
        Overwrite the editable fields of an offer. Property, status and
        transaction id are kept.

        Raises:
            NotFoundError: If the offer does not exist
        """
        offer = await self.offer_repo.replace(offer_id, offer_data.model_dump())
        if not offer:
            raise NotFoundError("Offer", detail="Offer not found")
        return offer

    async def _set_status(
        self,
        offer_id: uuid.UUID,
        target: OfferStatus,
        transaction_id: Optional[str] = None
    ) -> Optional[Offer]:
        if not self.is_strict:
            return await self.offer_repo.set_status(offer_id, target, transaction_id)

        # Predecessors are checked by the UPDATE itself
        predecessors = allowed_predecessors(target)
        offer = await self.offer_repo.set_status(
            offer_id, target, transaction_id, allowed_from=predecessors
        )
        if offer is not None:
            return offer

        current = await self.offer_repo.get_by_id(offer_id)
        if current is not None and current.status not in predecessors:
            logger.warning(f"Refused offer {offer_id} move {current.status.value} -> {target.value}")
            raise OfferTransitionError(current.status.value, target.value)
        return None
