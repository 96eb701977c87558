from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from review_moderation.database.enums import ReviewStatus

# Field limits, counted after trimming
REVIEW_TEXT_MIN_LENGTH = 10
REVIEW_TEXT_MAX_LENGTH = 1000
RATING_MIN = 1
RATING_MAX = 5


class DocumentModel(BaseModel):
    """Base for models stored with camelCase keys in MongoDB."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Submitter(DocumentModel):
    """Public view of the user who wrote a review (owned by the identity provider)."""

    id: str
    username: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Submitter":
        return cls(id=str(doc["_id"]), username=doc.get("username"), email=doc.get("email"))


class Review(DocumentModel):
    id: str = Field(..., description="Review identifier")
    user_id: str = Field(..., description="Identifier of the submitting user")
    user: Optional[Submitter] = Field(
        default=None, description="Submitter details, attached by the store lookup"
    )
    item_id: str
    item_name: str
    review_text: str
    rating: Optional[int] = Field(default=None, ge=RATING_MIN, le=RATING_MAX)
    status: ReviewStatus = ReviewStatus.PENDING
    created_at: datetime
    moderated_by: Optional[str] = None
    moderated_at: Optional[datetime] = None

    @classmethod
    def from_document(
        cls, doc: Dict[str, Any], user: Optional[Submitter] = None
    ) -> "Review":
        data = {**doc}
        data["id"] = str(data.pop("_id"))
        data["user"] = user
        return cls.model_validate(data)
