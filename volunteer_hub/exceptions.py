"""
Error taxonomy for the volunteer scheduling engine.

Every error carries a notification key that the client shows to the user,
plus the HTTP status the API answers with. Nothing here is retried
automatically; the caller decides whether to try the whole operation again.
"""

from typing import Optional


class ErrorKind:
    """Machine-readable error kinds returned alongside the notification key"""
    FORMAT = "format_error"
    CONFLICT = "conflict_error"
    NO_SELECTION = "no_selection_error"
    NOT_FOUND = "not_found_error"
    PERMISSION = "permission_error"
    CONCURRENT_UPDATE = "concurrent_update_error"


class VolunteerHubError(Exception):
    """Base error with a notification key and HTTP status"""

    kind = ErrorKind.FORMAT
    status_code = 400
    default_notification = "invalidFormat"

    def __init__(self, message: str, notification: Optional[str] = None, details: Optional[dict] = None):
        self.message = message
        self.notification = notification or self.default_notification
        self.details = details or {}
        super().__init__(self.message)


class FormatError(VolunteerHubError):
    """Malformed time, date or window"""


class MalformedTokenError(FormatError):
    """A slot token does not match its expected form"""

    def __init__(self, token: str, expected: str):
        super().__init__(
            f"Malformed {expected} slot token: {token!r}",
            details={"token": token, "expected": expected},
        )


class ConflictError(VolunteerHubError):
    kind = ErrorKind.CONFLICT
    status_code = 409
    default_notification = "alreadyVolunteered"


class NoSelectionError(VolunteerHubError):
    kind = ErrorKind.NO_SELECTION
    status_code = 400
    default_notification = "alreadyVolunteered"


class NotFoundError(VolunteerHubError):
    kind = ErrorKind.NOT_FOUND
    status_code = 404
    default_notification = "notFound"


class PermissionDeniedError(VolunteerHubError):
    kind = ErrorKind.PERMISSION
    status_code = 403
    default_notification = "permissionDenied"


class ConcurrentUpdateError(VolunteerHubError):
    """Another transaction changed the same user or event first"""
    kind = ErrorKind.CONCURRENT_UPDATE
    status_code = 409
    default_notification = "concurrentUpdate"
