"""Approval chain for movement requests.

Every allowed step is one row of ``TRANSITIONS``, keyed by
``(current status, approver role, approve?, request type)``. Anything not in
the table is refused.
"""
from typing import Optional

from db.models.movement_request import RequestStatus, RequestType, TERMINAL_STATUSES
from db.models.user import UserRole
from lifecycle.errors import InvalidStateError, TransitionError

PENDING = RequestStatus.PENDING
PENDING_MANAGER = RequestStatus.PENDING_MANAGER
APPROVED = RequestStatus.APPROVED
REJECTED = RequestStatus.REJECTED

BORROW = RequestType.BORROW
RETURN = RequestType.RETURN

TRANSITIONS = {
    # thủ kho: bước 1 cho cả BORROW và RETURN
    (PENDING, UserRole.STOREKEEPER, True, BORROW): PENDING_MANAGER,
    (PENDING, UserRole.STOREKEEPER, True, RETURN): APPROVED,
    (PENDING, UserRole.STOREKEEPER, False, BORROW): REJECTED,
    (PENDING, UserRole.STOREKEEPER, False, RETURN): REJECTED,
    # manager: chỉ ký duyệt cuối cho BORROW
    (PENDING_MANAGER, UserRole.BASE_MANAGER, True, BORROW): APPROVED,
    (PENDING_MANAGER, UserRole.BASE_MANAGER, False, BORROW): REJECTED,
    (PENDING_MANAGER, UserRole.BASE_MANAGER, False, RETURN): REJECTED,
}

# admin override: duyệt/từ chối thẳng ở mọi bước chưa kết thúc
for _status in (PENDING, PENDING_MANAGER):
    for _type in RequestType:
        TRANSITIONS[(_status, UserRole.ADMIN, True, _type)] = APPROVED
        TRANSITIONS[(_status, UserRole.ADMIN, False, _type)] = REJECTED

# field on the request that records who acted
ACTOR_FIELDS = {
    UserRole.STOREKEEPER: "storekeeper_id",
    UserRole.BASE_MANAGER: "manager_id",
    UserRole.ADMIN: "admin_id",
}


def next_status(
    status: RequestStatus, role: UserRole, approve: bool, request_type: RequestType
) -> RequestStatus:
    if status in TERMINAL_STATUSES:
        raise InvalidStateError(f"Request is already {status.value}.")
    try:
        return TRANSITIONS[(status, role, bool(approve), request_type)]
    except KeyError:
        action = "approve" if approve else "reject"
        raise TransitionError(
            f"{_role_label(role)} cannot {action} a {request_type.value} request "
            f"in state {status.value}."
        ) from None


def actionable_statuses(role: UserRole) -> set:
    """Statuses a role has at least one move from."""
    return {key[0] for key in TRANSITIONS if key[1] == role}


def can_act(
    role: UserRole,
    status: RequestStatus,
    request_type: RequestType,
    approve: Optional[bool] = None,
) -> bool:
    """approve=None: có ít nhất 1 bước (duyệt hoặc từ chối) cho role này."""
    flags = (True, False) if approve is None else (bool(approve),)
    return any((status, role, flag, request_type) in TRANSITIONS for flag in flags)


def _role_label(role) -> str:
    value = getattr(role, "value", role) or "UNKNOWN"
    return str(value).replace("_", " ").title()
