"""
Offer repository, including the accept-and-reject-siblings cascade.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, or_
from estatehub.repositories.base import BaseRepository
from estatehub.models.offer import Offer, OfferStatus, OPEN_OFFER_STATUSES
from typing import Callable, Iterable, List, Optional, Tuple
import uuid
import logging

logger = logging.getLogger(__name__)

# Called with (target, all offers of the property) while the rows are locked
CascadeCheck = Callable[[Offer, List[Offer]], None]


class OfferRepository(BaseRepository[Offer]):
    """Repository for purchase offers."""

    def __init__(self, db: AsyncSession):
        super().__init__(Offer, db)

    async def create_offer(self, offer_data: dict) -> Offer:
        """Insert a new offer; every offer starts out pending."""
        offer = await self.create({**offer_data, "status": OfferStatus.PENDING})
        logger.info(f"Created offer {offer.id} on property {offer.property_id} by {offer.buyer_email}")
        return offer

    async def get_by_buyer_email(self, buyer_email: str) -> List[Offer]:
        return await self.get_multi(filters={"buyer_email": buyer_email.lower().strip()})

    async def get_open_for_agent(self, agent_email: str) -> List[Offer]:
        """Offers an agent still has to act on or has acted on, excluding sales."""
        return await self.get_multi(
            filters={"agent_email": agent_email.lower().strip(), "status": OPEN_OFFER_STATUSES}
        )

    async def get_sold_by_agent(self, agent_email: str) -> List[Offer]:
        return await self.get_multi(
            filters={"agent_email": agent_email.lower().strip(), "status": OfferStatus.BOUGHT}
        )

    async def set_status(
        self,
        offer_id: uuid.UUID,
        status: OfferStatus,
        transaction_id: Optional[str] = None,
        allowed_from: Optional[Iterable[OfferStatus]] = None
    ) -> Optional[Offer]:
        """
        Move an offer to `status`, storing `transaction_id` when given.

        A row that already holds exactly these values is not modified and is
        reported like a missing row. With `allowed_from`, only a row whose
        current status is one of those is modified; the check is part of the
        UPDATE itself.

        Returns:
            Updated offer, or None if nothing was modified
        """
        try:
            values = {"status": status}
            changed = Offer.status != status
            if transaction_id is not None:
                values["transaction_id"] = transaction_id
                changed = or_(changed, Offer.transaction_id.is_distinct_from(transaction_id))

            conditions = [Offer.id == offer_id, changed]
            if allowed_from is not None:
                conditions.append(Offer.status.in_(list(allowed_from)))

            stmt = (
                update(Offer)
                .where(*conditions)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            result = await self.db.execute(stmt)
            await self.db.commit()

            if result.rowcount == 0:
                logger.debug(f"Offer {offer_id} not found or already {status.value}")
                return None

            logger.info(f"Offer {offer_id} status set to {status.value}")
            return await self.get_by_id(offer_id)
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to set status of offer {offer_id}: {e}")
            raise

    async def accept_with_cascade(
        self,
        offer_id: uuid.UUID,
        check: Optional[CascadeCheck] = None
    ) -> Optional[Tuple[Offer, int]]:
        """
        Accept one offer and reject every other offer on the same property in a
        single transaction.

        All offers of the property are locked in id order before either write,
        so two concurrent accepts on the same property serialize instead of
        both succeeding.

        Args:
            offer_id: Offer to accept
            check: Optional validation run on the locked rows; raising aborts

        Returns:
            (accepted offer, number of siblings rejected), or None if the offer
            does not exist or is already accepted
        """
        try:
            property_id = (
                await self.db.execute(select(Offer.property_id).where(Offer.id == offer_id))
            ).scalar_one_or_none()

            if property_id is None:
                await self.db.commit()
                logger.debug(f"Offer {offer_id} not found for accept")
                return None

            locked = await self.db.execute(
                select(Offer)
                .where(Offer.property_id == property_id)
                .order_by(Offer.id)
                .with_for_update()
                .execution_options(populate_existing=True)
            )
            offers = list(locked.scalars().all())
            target = next((o for o in offers if o.id == offer_id), None)

            if target is None or target.status == OfferStatus.ACCEPTED:
                await self.db.commit()
                logger.debug(f"Offer {offer_id} vanished or already accepted")
                return None

            if check is not None:
                check(target, offers)

            target.status = OfferStatus.ACCEPTED
            rejected = 0
            for sibling in offers:
                if sibling.id != target.id and sibling.status != OfferStatus.REJECTED:
                    sibling.status = OfferStatus.REJECTED
                    rejected += 1

            await self.db.commit()
            await self.db.refresh(target)

            logger.info(
                f"Offer {offer_id} accepted on property {property_id}, {rejected} sibling offers rejected"
            )
            return target, rejected
        except Exception:
            await self.db.rollback()
            raise

    async def replace(self, offer_id: uuid.UUID, offer_data: dict) -> Optional[Offer]:
        """Overwrite every client-editable field of an offer. The property is never changed."""
        offer_data = {k: v for k, v in offer_data.items() if k != "property_id"}
        return await self.update(offer_id, offer_data, exclude_none=False)
