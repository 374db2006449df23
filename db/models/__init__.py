from .user import User, UserRole
from .inventory import InventoryItem
from .movement_request import (
    MovementRequest,
    RequestItem,
    RequestStatus,
    RequestType,
)

__all__ = [n for n in dir() if n[:1].isupper()]
