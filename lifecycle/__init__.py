from .errors import (
    LifecycleError,
    ValidationError,
    NotFoundError,
    InvalidStateError,
    TransitionError,
    SyncError,
    StaleStateError,
)
from .records import (
    Actor,
    Item,
    Request,
    RequestLine,
    SubmitResult,
    DecisionResult,
    SyncResult,
)
from .manager import RequestLifecycleManager

__all__ = [n for n in dir() if n[:1].isupper()]
