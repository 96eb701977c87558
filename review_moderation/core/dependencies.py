from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from review_moderation.core.security import require_role
from review_moderation.database.db import get_db_dep
from review_moderation.database.enums import UserRole
from review_moderation.services.moderation_service import ModerationService

# Define dependencies here

require_submitter = require_role(UserRole.USER)
require_moderator = require_role(UserRole.MODERATOR)


def get_moderation_service(
    db: AsyncIOMotorDatabase = Depends(get_db_dep),
) -> ModerationService:
    return ModerationService(db)
