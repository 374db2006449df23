"""Writes the outcome of a fully approved request onto inventory items."""
from dataclasses import replace
from datetime import date
from typing import Optional

from db.models.inventory import IN_STORE
from db.models.movement_request import RequestStatus, RequestType
from lifecycle.errors import InvalidStateError
from lifecycle.records import Item, Request

UNKNOWN_SITE = "Unknown Site"


def tracking_fields(request: Request, item: Item, today: Optional[str] = None) -> dict:
    """Tracking columns the item takes once ``request`` is APPROVED.

    The result is a full overwrite, never a delta, so applying it twice leaves
    the item exactly as applying it once.
    """
    today = today or date.today().isoformat()
    if request.type is RequestType.BORROW:
        return {
            "equipment_status": f"Borrowed by {request.staff_name}",
            "person_in_charge": request.staff_name,
            "current_location": request.target_location or UNKNOWN_SITE,
            "last_movement_date": request.target_date or today,
        }
    # RETURN: về lại vị trí kho cố định, bỏ qua target_location của người trả
    return {
        "equipment_status": IN_STORE,
        "person_in_charge": None,
        "current_location": item.location,
        "last_movement_date": today,
    }


def apply(request: Request, item: Item, today: Optional[str] = None) -> Item:
    if request.status is not RequestStatus.APPROVED:
        raise InvalidStateError(
            f"Request {request.id} is {request.status.value}, not APPROVED."
        )
    return replace(item, **tracking_fields(request, item, today))
