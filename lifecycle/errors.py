class LifecycleError(Exception):
    """Base class for movement request errors."""


class ValidationError(LifecycleError, ValueError):
    """Malformed submission; raised before any state is touched."""


class NotFoundError(LifecycleError, LookupError):
    """The request does not exist."""


class InvalidStateError(NotFoundError):
    """The request exists but is already APPROVED or REJECTED."""


class TransitionError(LifecycleError, ValueError):
    """The approver's role or base may not act on the request in its current state."""


class SyncError(LifecycleError):
    """The durable store rejected a write or could not be reached."""


class StaleStateError(SyncError):
    """The stored request was already decided by another worker."""
