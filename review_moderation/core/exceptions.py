"""
Domain errors raised by the review store, the moderation workflow and the
caller identity dependencies.

Every error carries the HTTP status and the user-facing message it is rendered
with; the handlers in `review_moderation.app` turn them into the standard
`{"success": false, "message": ...}` envelope.
"""

from fastapi import status


class ReviewModerationError(Exception):
    """Base error for the review moderation service."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request could not be processed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ReviewValidationError(ReviewModerationError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid review data"

    def __init__(self, errors: list[str] | str | None = None):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = errors or []
        super().__init__(", ".join(self.errors) or None)


class DuplicateReviewError(ReviewModerationError):
    status_code = status.HTTP_409_CONFLICT
    default_message = (
        "You have already submitted a review for this item. "
        "Duplicate reviews are not allowed."
    )


class ReviewNotFoundError(ReviewModerationError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Review not found"


class UnauthorizedError(ReviewModerationError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized, no credentials supplied"


class ForbiddenError(ReviewModerationError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You are not allowed to access this route"


class InternalError(ReviewModerationError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"
