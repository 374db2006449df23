"""Request lifecycle manager.

Keeps a local view of requests and inventory, moves requests through the
approval chain and projects approved requests onto inventory. Local state is
updated first and then written to the store; a store failure leaves the local
view ahead of the store and is reported on the returned result.
"""
from datetime import datetime
from typing import Dict, Iterable, List, Optional
from uuid import uuid4

from db.models.inventory import IN_STORE
from db.models.movement_request import RequestStatus, RequestType
from db.models.user import UserRole
from lifecycle import projector
from lifecycle.errors import (
    InvalidStateError,
    NotFoundError,
    StaleStateError,
    SyncError,
    TransitionError,
    ValidationError,
)
from lifecycle.records import (
    DecisionResult,
    Item,
    Request,
    RequestLine,
    SubmitResult,
    SyncResult,
)
from lifecycle.transitions import ACTOR_FIELDS, actionable_statuses, next_status
from utils.clock import utcnow
from utils.logger import get_logger

logger = get_logger("lifecycle.manager")

UNKNOWN = "Unknown"


def new_request_id(now: datetime) -> str:
    return f"REQ-{int(now.timestamp() * 1000)}-{uuid4().hex[:6]}"


def _clean(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


class RequestLifecycleManager:
    def __init__(self, store, reserve_items: bool = False, clock=None):
        self.store = store
        self.reserve_items = reserve_items
        self._clock = clock or utcnow
        self.requests: List[Request] = []
        self.inventory: Dict[str, Item] = {}
        self.loaded = False

    # ---------- loading ----------
    def load(self) -> List[str]:
        """Đọc lại toàn bộ dữ liệu từ store. Lỗi store -> view rỗng + cảnh báo."""
        warnings = []
        try:
            items = self.store.list_inventory_items()
        except SyncError as exc:
            logger.warning("Could not load inventory: %s", exc)
            warnings.append("Inventory could not be loaded from the database.")
            items = []
        self.inventory = {item.id: item for item in items}

        try:
            requests = self.store.list_requests()
        except SyncError as exc:
            logger.warning("Could not load requests: %s", exc)
            warnings.append("Requests could not be loaded from the database.")
            requests = []
        self.requests = sorted(requests, key=lambda r: r.timestamp, reverse=True)
        self.loaded = True
        logger.info(
            "Loaded %d items and %d requests", len(self.inventory), len(self.requests)
        )
        return warnings

    # ---------- queries ----------
    def get_request(self, request_id: str) -> Request:
        for req in self.requests:
            if req.id == request_id:
                return req
        raise NotFoundError(f"Request {request_id} not found.")

    def get_item(self, item_id: str) -> Optional[Item]:
        return self.inventory.get(item_id)

    def list_requests(self, **filters) -> List[Request]:
        rows = [
            r
            for r in self.requests
            if all(getattr(r, k) == v for k, v in filters.items())
        ]
        return sorted(rows, key=lambda r: r.timestamp, reverse=True)

    def list_items(self, **filters) -> List[Item]:
        return [
            i
            for i in self.inventory.values()
            if all(getattr(i, k) == v for k, v in filters.items())
        ]

    def actionable_queue(self, user) -> List[Request]:
        """Requests the user's role can act on now, scoped to the user's base."""
        statuses = actionable_statuses(user.role)
        if not statuses:
            return []
        rows = [r for r in self.list_requests() if r.status in statuses]
        if user.role is not UserRole.ADMIN:
            rows = [r for r in rows if r.base == user.base]
        return rows

    def history(self, user) -> List[Request]:
        rows = self.list_requests()
        if user.role is UserRole.ADMIN:
            return rows
        if user.role is UserRole.STOREKEEPER:
            return [
                r for r in rows if r.base == user.base and r.status is not RequestStatus.PENDING
            ]
        if user.role is UserRole.BASE_MANAGER:
            return [r for r in rows if r.base == user.base]
        return [r for r in rows if r.staff_id == str(user.id)]

    def visible_items(self, user, base: Optional[str] = None) -> List[Item]:
        if user.role is UserRole.ADMIN:
            return self.list_items(base=base) if base else self.list_items()
        return self.list_items(base=user.base)

    def selectable_items(self, user, mode: str) -> List[Item]:
        """Items a staff member may put in a BORROW or RETURN request."""
        if user.role is not UserRole.STAFF:
            return []
        items = self.visible_items(user)
        if mode == "borrow":
            return [
                i
                for i in items
                if i.equipment_status == IN_STORE
                and "scrap" not in (i.status or "").lower()
            ]
        if mode == "return":
            name = (user.name or "").strip().lower()
            if not name:
                return []
            held = []
            for i in items:
                pic = (i.person_in_charge or "").strip().lower()
                if pic and (pic in name or name in pic):
                    held.append(i)
            return held
        return []

    def outstanding_item_ids(self) -> set:
        ids = set()
        for req in self.requests:
            if not req.is_terminal:
                ids.update(req.item_ids)
        return ids

    def document_context(self, request_id: str, approver) -> dict:
        """Data handed to the movement form generator for an approved BORROW."""
        req = self.get_request(request_id)
        if req.type is not RequestType.BORROW or req.status is not RequestStatus.APPROVED:
            raise InvalidStateError(
                f"Request {request_id} is not an approved BORROW request."
            )
        items = [self.inventory[i] for i in req.item_ids if i in self.inventory]
        signer = approver.name if approver.role is UserRole.STOREKEEPER else "System"
        return {"request": req, "items": items, "approver_name": signer}

    # ---------- commands ----------
    def submit(
        self,
        item_ids: Iterable[str],
        request_type,
        target_location: Optional[str],
        target_date: Optional[str],
        requester,
    ) -> SubmitResult:
        if requester is None:
            raise ValidationError("A requester is required.")
        ids = list(dict.fromkeys(str(i).strip() for i in (item_ids or []) if i))
        ids = [i for i in ids if i]
        if not ids:
            raise ValidationError("Select at least one item.")
        try:
            request_type = RequestType(str(getattr(request_type, "value", request_type)).upper())
        except ValueError:
            raise ValidationError(f"Unknown request type: {request_type!r}.") from None

        if self.reserve_items:
            busy = sorted(set(ids) & self.outstanding_item_ids())
            if busy:
                raise ValidationError(
                    "Items already have an open request: " + ", ".join(busy)
                )

        now = self._clock()
        req = Request(
            id=new_request_id(now),
            type=request_type,
            staff_id=str(requester.id),
            staff_name=requester.name,
            base=requester.base,
            items=[self._snapshot(i) for i in ids],
            status=RequestStatus.PENDING,
            timestamp=now,
            target_location=_clean(target_location),
            target_date=_clean(target_date),
        )
        self.requests.insert(0, req)
        logger.info(
            "%s request %s submitted by %s for %d item(s)",
            req.type.value,
            req.id,
            req.staff_id,
            len(req.items),
        )

        result = SubmitResult(request=req)
        try:
            self.store.insert_request(req)
        except SyncError as exc:
            logger.error("Request %s not saved: %s", req.id, exc)
            result.warnings.append(
                "Failed to submit request to the database. It is visible locally only."
            )
        return result

    def decide(
        self, request_id: str, approver, approve: bool, reason: Optional[str] = None
    ) -> DecisionResult:
        req = self.get_request(request_id)
        if req.is_terminal:
            raise InvalidStateError(
                f"Request {request_id} is already {req.status.value}."
            )
        role = approver.role
        if role is not UserRole.ADMIN and approver.base != req.base:
            raise TransitionError(
                f"Request {request_id} belongs to base {req.base}, not {approver.base}."
            )
        new_status = next_status(req.status, role, approve, req.type)

        updates = {"status": new_status, ACTOR_FIELDS[role]: str(approver.id)}
        if new_status is RequestStatus.REJECTED and _clean(reason):
            updates["rejection_reason"] = _clean(reason)

        previous = req.status
        before = {key: getattr(req, key) for key in updates}
        for key, value in updates.items():
            setattr(req, key, value)
        logger.info(
            "Request %s: %s -> %s by %s %s",
            req.id,
            previous.value,
            new_status.value,
            role.value,
            approver.id,
        )

        result = DecisionResult(request=req, previous_status=previous, new_status=new_status)
        try:
            self.store.update_request_status(req.id, updates)
        except StaleStateError as exc:
            # worker khác đã chốt request này; bỏ thay đổi local, không chiếu inventory
            for key, value in before.items():
                setattr(req, key, value)
            logger.warning("Decision on %s discarded: %s", req.id, exc)
            raise InvalidStateError(str(exc)) from exc
        except SyncError as exc:
            logger.error("Status of %s not saved: %s", req.id, exc)
            result.warnings.append("Database sync failed. Changes applied locally.")

        if new_status is RequestStatus.APPROVED:
            self._project(req, result)
        return result

    def update_item(self, item: Item) -> SyncResult:
        if item.id not in self.inventory:
            raise NotFoundError(f"Item {item.id} not found.")
        self.inventory[item.id] = item
        result = SyncResult(count=1)
        fields = {k: v for k, v in vars(item).items() if k != "id"}
        try:
            self.store.update_inventory_item(item.id, fields)
        except SyncError as exc:
            logger.error("Item %s not saved: %s", item.id, exc)
            result.warnings.append("Failed to update item in database.")
        return result

    def import_items(self, items: List[Item]) -> SyncResult:
        for item in items:
            self.inventory[item.id] = item
        result = SyncResult(count=len(items))
        if not items:
            return result
        try:
            self.store.insert_inventory_batch(items)
        except SyncError as exc:
            logger.error("Inventory batch of %d not saved: %s", len(items), exc)
            result.warnings.append(
                "Failed to save imported items to the database. They are visible locally only."
            )
        return result

    # ---------- helpers ----------
    def _snapshot(self, item_id: str) -> RequestLine:
        item = self.inventory.get(item_id)
        if item is None:
            logger.warning("Item %s not found while building request snapshot", item_id)
            return RequestLine(item_id=item_id, description=UNKNOWN, serial_no=UNKNOWN)
        return RequestLine(
            item_id=item_id,
            description=item.description or UNKNOWN,
            serial_no=item.serial_no or UNKNOWN,
        )

    def _project(self, req: Request, result: DecisionResult) -> None:
        today = self._clock().date().isoformat()
        for item_id in req.item_ids:
            item = self.inventory.get(item_id)
            if item is None:
                logger.warning("Approved request %s references missing item %s", req.id, item_id)
                result.missing_items.append(item_id)
                result.warnings.append(f"Item {item_id} no longer exists.")
                continue
            updated = projector.apply(req, item, today)
            fields = projector.tracking_fields(req, item, today)
            self.inventory[item_id] = updated
            result.updated_items.append(updated)
            try:
                self.store.update_inventory_item(item_id, fields)
            except SyncError as exc:
                logger.error("Item %s not saved after %s: %s", item_id, req.id, exc)
                result.unsynced_items.append(item_id)
                result.warnings.append(f"Item {item_id} could not be updated in the database.")
