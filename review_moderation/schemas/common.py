from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel


class ApiResponse(BaseModel):
    """Envelope shared by every JSON response."""

    success: bool = True
    message: Optional[str] = None
    data: Optional[Any] = None


class HealthResponse(ApiResponse):
    timestamp: datetime
