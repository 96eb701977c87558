from typing import List, Optional

from pydantic import BaseModel, Field

from review_moderation.database.models import Review
from review_moderation.schemas.common import ApiResponse


class ReviewCreate(BaseModel):
    """
    Body of POST /api/reviews.

    Fields are optional here so that missing or blank values reach the store
    validation and get its single "Please provide ..." message.
    """

    itemId: Optional[str] = None
    itemName: Optional[str] = None
    reviewText: Optional[str] = None
    rating: Optional[int] = Field(default=None, description="1 to 5, omit for no rating")


class ReviewData(BaseModel):
    review: Review


class ReviewListData(BaseModel):
    reviews: List[Review]


class ReviewResponse(ApiResponse):
    data: ReviewData


class ReviewListResponse(ApiResponse):
    count: int
    data: ReviewListData

    @classmethod
    def of(cls, reviews: List[Review]) -> "ReviewListResponse":
        return cls(count=len(reviews), data=ReviewListData(reviews=reviews))
