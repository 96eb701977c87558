import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from review_moderation.core.exceptions import (
    DuplicateReviewError,
    ReviewNotFoundError,
    ReviewValidationError,
)
from review_moderation.database.enums import ReviewStatus
from review_moderation.database.models import (
    RATING_MAX,
    RATING_MIN,
    REVIEW_TEXT_MAX_LENGTH,
    REVIEW_TEXT_MIN_LENGTH,
    Review,
    Submitter,
)

logger = logging.getLogger(__name__)

COLL = "reviews"
USERS_COLL = "users"

USER_ITEM_INDEX = "ux_reviews_user_item"
STATUS_CREATED_INDEX = "ix_reviews_status_created"

NEWEST_FIRST = [("createdAt", DESCENDING)]


async def ensure_review_indexes(db: AsyncIOMotorDatabase) -> List[str]:
    """
    Create the review indexes (idempotent).

    The unique (userId, itemId) index is what makes the one-review-per-item
    rule hold under concurrent submissions.
    """
    coll = db[COLL]
    names = [
        await coll.create_index(
            [("userId", ASCENDING), ("itemId", ASCENDING)],
            unique=True,
            name=USER_ITEM_INDEX,
        ),
        await coll.create_index(
            [("status", ASCENDING), ("createdAt", DESCENDING)],
            name=STATUS_CREATED_INDEX,
        ),
    ]
    logger.info(f"Review indexes ensured: {names}")
    return names


def _clean_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def validate_review_fields(
    item_id: Any, item_name: Any, review_text: Any, rating: Any = None
) -> Dict[str, Any]:
    """
    Trim and validate a submission.

    Returns the cleaned fields keyed by their document names, or raises
    ReviewValidationError carrying every problem found.
    """
    item_id = _clean_text(item_id)
    item_name = _clean_text(item_name)
    review_text = _clean_text(review_text)

    if not item_id or not item_name or not review_text:
        raise ReviewValidationError("Please provide itemId, itemName, and reviewText")

    errors: List[str] = []
    if len(review_text) < REVIEW_TEXT_MIN_LENGTH:
        errors.append(f"Review must be at least {REVIEW_TEXT_MIN_LENGTH} characters")
    if len(review_text) > REVIEW_TEXT_MAX_LENGTH:
        errors.append(f"Review cannot exceed {REVIEW_TEXT_MAX_LENGTH} characters")

    if rating is not None:
        if isinstance(rating, bool) or not isinstance(rating, int):
            errors.append("Rating must be a whole number")
        elif rating < RATING_MIN:
            errors.append(f"Rating must be at least {RATING_MIN}")
        elif rating > RATING_MAX:
            errors.append(f"Rating cannot exceed {RATING_MAX}")

    if errors:
        raise ReviewValidationError(errors)

    return {
        "itemId": item_id,
        "itemName": item_name,
        "reviewText": review_text,
        "rating": rating,
    }


def _as_object_id(value: str) -> Optional[ObjectId]:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


async def _load_submitters(
    db: AsyncIOMotorDatabase, user_ids: Iterable[str]
) -> Dict[str, Submitter]:
    """Batched lookup of submitter details for a set of review owners."""
    wanted = set(user_ids)
    if not wanted:
        return {}
    keys: List[Any] = list(wanted)
    keys += [oid for oid in (_as_object_id(u) for u in wanted) if oid is not None]

    out: Dict[str, Submitter] = {}
    cursor = db[USERS_COLL].find(
        {"_id": {"$in": keys}}, {"username": 1, "email": 1}
    )
    async for doc in cursor:
        submitter = Submitter.from_document(doc)
        out[submitter.id] = submitter
    return out


async def _to_reviews(db: AsyncIOMotorDatabase, docs: List[Dict[str, Any]]) -> List[Review]:
    submitters = await _load_submitters(db, (d["userId"] for d in docs))
    return [Review.from_document(d, submitters.get(d["userId"])) for d in docs]


async def _to_review(db: AsyncIOMotorDatabase, doc: Dict[str, Any]) -> Review:
    return (await _to_reviews(db, [doc]))[0]


async def _find_existing(
    db: AsyncIOMotorDatabase, user_id: str, item_id: str
) -> Optional[Dict[str, Any]]:
    return await db[COLL].find_one({"userId": user_id, "itemId": item_id}, {"_id": 1})


async def create_review(
    db: AsyncIOMotorDatabase,
    user_id: str,
    item_id: Any,
    item_name: Any,
    review_text: Any,
    rating: Any = None,
    *,
    now: Optional[datetime] = None,
) -> Review:
    """
    Store a new PENDING review for `user_id`.

    Raises ReviewValidationError for bad input and DuplicateReviewError when the
    user already reviewed the item, whether the pre-check or the unique index
    catches it.
    """
    fields = validate_review_fields(item_id, item_name, review_text, rating)

    if await _find_existing(db, user_id, fields["itemId"]):
        logger.info(f"Duplicate review rejected: user={user_id} item={fields['itemId']}")
        raise DuplicateReviewError()

    doc = {
        "userId": user_id,
        **fields,
        "status": ReviewStatus.PENDING.value,
        "createdAt": now or datetime.now(timezone.utc),
        "moderatedBy": None,
        "moderatedAt": None,
    }
    try:
        res = await db[COLL].insert_one(doc)
    except DuplicateKeyError:
        logger.info(
            f"Duplicate review rejected by unique index: user={user_id} item={fields['itemId']}"
        )
        raise DuplicateReviewError()

    doc["_id"] = res.inserted_id
    logger.info(f"Review {res.inserted_id} created by user={user_id} item={fields['itemId']}")
    return await _to_review(db, doc)


async def _find_sorted(db: AsyncIOMotorDatabase, query: Dict[str, Any]) -> List[Review]:
    cursor = db[COLL].find(query).sort(NEWEST_FIRST)
    docs = [d async for d in cursor]
    return await _to_reviews(db, docs)


async def find_by_user(db: AsyncIOMotorDatabase, user_id: str) -> List[Review]:
    """Reviews written by `user_id`, newest first."""
    return await _find_sorted(db, {"userId": user_id})


async def find_all(db: AsyncIOMotorDatabase, status: Optional[str] = None) -> List[Review]:
    """
    All reviews, newest first.

    `status` is matched case-insensitively; a value that is not a known status
    is ignored and the full list is returned.
    """
    query: Dict[str, Any] = {}
    parsed = ReviewStatus.parse(status)
    if parsed is not None:
        query["status"] = parsed.value
    elif status:
        logger.debug(f"Ignoring unknown status filter: {status!r}")
    return await _find_sorted(db, query)


async def find_by_id(db: AsyncIOMotorDatabase, review_id: str) -> Review:
    oid = _as_object_id(review_id)
    doc = await db[COLL].find_one({"_id": oid}) if oid is not None else None
    if not doc:
        raise ReviewNotFoundError()
    return await _to_review(db, doc)


async def set_status(
    db: AsyncIOMotorDatabase,
    review_id: str,
    status: ReviewStatus,
    moderator_id: Optional[str] = None,
    *,
    now: Optional[datetime] = None,
) -> Review:
    """
    Overwrite the status of a review, whatever it was before.

    The moderator and time of this decision replace any earlier ones.
    """
    oid = _as_object_id(review_id)
    if oid is None:
        raise ReviewNotFoundError()

    doc = await db[COLL].find_one_and_update(
        {"_id": oid},
        {
            "$set": {
                "status": ReviewStatus(status).value,
                "moderatedBy": moderator_id,
                "moderatedAt": now or datetime.now(timezone.utc),
            }
        },
        return_document=ReturnDocument.AFTER,
    )
    if not doc:
        raise ReviewNotFoundError()
    return await _to_review(db, doc)
