from pydantic import BaseModel, Field

from review_moderation.database.enums import UserRole


class CurrentUser(BaseModel):
    """Caller identity forwarded by the authenticator for one request"""

    id: str = Field(..., description="User unique identifier")
    role: UserRole = Field(..., description="Role of the caller (USER or MODERATOR)")
