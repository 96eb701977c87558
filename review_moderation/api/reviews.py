from typing import Optional

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from review_moderation.core.dependencies import (
    get_moderation_service,
    require_moderator,
    require_submitter,
)
from review_moderation.database.db import get_db_dep
from review_moderation.repo.review_repo import create_review, find_by_user
from review_moderation.schemas.reviews import (
    ReviewCreate,
    ReviewData,
    ReviewListResponse,
    ReviewResponse,
)
from review_moderation.schemas.users import CurrentUser
from review_moderation.services.moderation_service import ModerationService

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.post(
    "",
    status_code=201,
    response_model=ReviewResponse,
    summary="Submit a review",
)
async def submit_review(
    body: ReviewCreate,
    user: CurrentUser = Depends(require_submitter),
    db: AsyncIOMotorDatabase = Depends(get_db_dep),
):
    review = await create_review(
        db,
        user_id=user.id,
        item_id=body.itemId,
        item_name=body.itemName,
        review_text=body.reviewText,
        rating=body.rating,
    )
    return ReviewResponse(
        message="Review submitted successfully. Awaiting moderator approval.",
        data=ReviewData(review=review),
    )


@router.get("/my", response_model=ReviewListResponse, summary="List my reviews")
async def list_my_reviews(
    user: CurrentUser = Depends(require_submitter),
    db: AsyncIOMotorDatabase = Depends(get_db_dep),
):
    return ReviewListResponse.of(await find_by_user(db, user.id))


@router.get("", response_model=ReviewListResponse, summary="List all reviews")
async def list_reviews(
    status: Optional[str] = Query(
        default=None, description="PENDING, APPROVED or REJECTED (case-insensitive)"
    ),
    _: CurrentUser = Depends(require_moderator),
    service: ModerationService = Depends(get_moderation_service),
):
    """Unknown status values are ignored and every review is returned."""
    return ReviewListResponse.of(await service.list(status))


@router.put("/{review_id}/approve", response_model=ReviewResponse, summary="Approve a review")
async def approve_review(
    review_id: str,
    moderator: CurrentUser = Depends(require_moderator),
    service: ModerationService = Depends(get_moderation_service),
):
    review = await service.approve(review_id, moderator.id)
    return ReviewResponse(message="Review approved successfully", data=ReviewData(review=review))


@router.put("/{review_id}/reject", response_model=ReviewResponse, summary="Reject a review")
async def reject_review(
    review_id: str,
    moderator: CurrentUser = Depends(require_moderator),
    service: ModerationService = Depends(get_moderation_service),
):
    review = await service.reject(review_id, moderator.id)
    return ReviewResponse(message="Review rejected", data=ReviewData(review=review))
