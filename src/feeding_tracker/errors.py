"""Error types and helpers shared by the views."""

import httpx
from postgrest.exceptions import APIError

DELETE_REJECTED_MESSAGE = (
    "Delete was not applied. Check the feed_logs delete policy in Supabase."
)

# Failures raised by the Supabase client for a single request.
STORE_ERRORS: tuple[type[Exception], ...] = (APIError, httpx.HTTPError)


class FeedTrackerError(Exception):
    """Base class for errors synthesized by the tracker itself."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class DeleteRejectedError(FeedTrackerError):
    """The store answered a delete with zero affected rows."""

    def __init__(self, record_id: str) -> None:
        super().__init__(DELETE_REJECTED_MESSAGE)
        self.record_id = record_id


def describe_error(exc: Exception) -> str:
    """Return the message to show for a failed operation."""
    if isinstance(exc, APIError) and exc.message:
        return str(exc.message)
    text = str(exc).strip()
    return text or type(exc).__name__


# Failures a single view operation reports instead of propagating.
OPERATION_ERRORS: tuple[type[Exception], ...] = (FeedTrackerError, *STORE_ERRORS)
