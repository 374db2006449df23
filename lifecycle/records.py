from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from db.models.inventory import IN_STORE
from utils.clock import utcnow
from db.models.user import UserRole
from db.models.movement_request import RequestStatus, RequestType, TERMINAL_STATUSES


@dataclass
class Item:
    id: str
    description: str
    base: str
    location: str = IN_STORE
    no: str = ""
    maker: str = ""
    range: str = ""
    type_model: str = ""
    serial_no: str = ""
    unit_price: str = ""
    date: str = ""
    po_no: str = ""
    quantity: int = 1
    asset_no: str = ""
    equipment_status: str = IN_STORE
    status: str = "Working"
    sems_category: str = ""
    physical_status: str = ""
    remarks: str = ""
    current_location: Optional[str] = None
    person_in_charge: Optional[str] = None
    last_movement_date: Optional[str] = None

    @property
    def in_store(self) -> bool:
        return self.person_in_charge is None


@dataclass(frozen=True)
class RequestLine:
    item_id: str
    description: str
    serial_no: str


@dataclass
class Request:
    id: str
    type: RequestType
    staff_id: str
    staff_name: str
    base: str
    items: List[RequestLine]
    status: RequestStatus = RequestStatus.PENDING
    timestamp: datetime = field(default_factory=utcnow)
    storekeeper_id: Optional[str] = None
    manager_id: Optional[str] = None
    admin_id: Optional[str] = None
    rejection_reason: Optional[str] = None
    target_location: Optional[str] = None
    target_date: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def item_ids(self) -> List[str]:
        return [line.item_id for line in self.items]

    def actor_history(self):
        """[(role label, user id)] theo thứ tự các bước đã duyệt."""
        history = [("Requester", self.staff_id)]
        if self.storekeeper_id:
            history.append(("Storekeeper", self.storekeeper_id))
        if self.manager_id:
            history.append(("Base Manager", self.manager_id))
        if self.admin_id:
            history.append(("Admin", self.admin_id))
        return history


@dataclass
class Actor:
    """Anything with id/name/role/base can act; User rows qualify too."""

    id: str
    name: str
    role: UserRole
    base: str


@dataclass
class SubmitResult:
    request: Request
    warnings: List[str] = field(default_factory=list)

    @property
    def durable(self) -> bool:
        return not self.warnings


@dataclass
class DecisionResult:
    request: Request
    previous_status: RequestStatus
    new_status: RequestStatus
    updated_items: List[Item] = field(default_factory=list)
    missing_items: List[str] = field(default_factory=list)
    unsynced_items: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def projected(self) -> bool:
        return self.new_status is RequestStatus.APPROVED

    @property
    def durable(self) -> bool:
        return not self.warnings


@dataclass
class SyncResult:
    """Kết quả cho các thao tác ghi best-effort khác (import, sửa item)."""

    count: int = 0
    warnings: List[str] = field(default_factory=list)

    @property
    def durable(self) -> bool:
        return not self.warnings
