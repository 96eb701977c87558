import logging
from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from review_moderation.database.enums import ReviewStatus
from review_moderation.database.models import Review
from review_moderation.repo.review_repo import find_all, set_status

logger = logging.getLogger(__name__)


class ModerationService:
    """
    Moderator decisions over review status.

    Any status can be replaced by either decision, so a moderator may flip an
    approved review to rejected and back. Callers are expected to have checked
    the moderator role already.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db

    async def approve(self, review_id: str, moderator_id: Optional[str] = None) -> Review:
        return await self._transition(review_id, ReviewStatus.APPROVED, moderator_id)

    async def reject(self, review_id: str, moderator_id: Optional[str] = None) -> Review:
        return await self._transition(review_id, ReviewStatus.REJECTED, moderator_id)

    async def list(self, status: Optional[str] = None) -> List[Review]:
        return await find_all(self.db, status)

    async def _transition(
        self, review_id: str, status: ReviewStatus, moderator_id: Optional[str]
    ) -> Review:
        review = await set_status(self.db, review_id, status, moderator_id)
        logger.info(f"Review {review_id} set to {status.value} by moderator={moderator_id}")
        return review
