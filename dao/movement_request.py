# dao/movement_request.py
from typing import Dict, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from configs import db
from db.models.movement_request import MovementRequest, RequestItem, TERMINAL_STATUSES
from lifecycle.records import Request, RequestLine

# các cột được phép cập nhật sau khi tạo
STATUS_FIELDS = (
    "status",
    "storekeeper_id",
    "manager_id",
    "admin_id",
    "rejection_reason",
)


class TerminalStatusError(ValueError):
    """Request trong DB đã APPROVED/REJECTED, không ghi đè trạng thái."""


def to_record(row: MovementRequest) -> Request:
    return Request(
        id=row.id,
        type=row.type,
        staff_id=row.staff_id,
        staff_name=row.staff_name,
        base=row.base,
        items=[
            RequestLine(
                item_id=ln.item_id,
                description=ln.description or "",
                serial_no=ln.serial_no or "",
            )
            for ln in row.items
        ],
        status=row.status,
        timestamp=row.timestamp,
        storekeeper_id=row.storekeeper_id,
        manager_id=row.manager_id,
        admin_id=row.admin_id,
        rejection_reason=row.rejection_reason,
        target_location=row.target_location,
        target_date=row.target_date,
    )


def list_requests(filters: Optional[Dict] = None) -> List[MovementRequest]:
    q = MovementRequest.query
    if filters:
        q = q.filter_by(**filters)
    return q.order_by(MovementRequest.timestamp.desc()).all()


def get_request(request_id: str) -> Optional[MovementRequest]:
    return db.session.get(MovementRequest, request_id)


def create_request(rec: Request) -> MovementRequest:
    row = MovementRequest(
        id=rec.id,
        type=rec.type,
        staff_id=rec.staff_id,
        staff_name=rec.staff_name,
        base=rec.base,
        status=rec.status,
        timestamp=rec.timestamp,
        target_location=rec.target_location,
        target_date=rec.target_date,
    )
    # dòng item đi theo cascade của backref, flush nằm trong _commit()
    row.items = [
        RequestItem(
            position=pos,
            item_id=ln.item_id,
            description=ln.description,
            serial_no=ln.serial_no,
        )
        for pos, ln in enumerate(rec.items)
    ]
    db.session.add(row)
    _commit()
    return row


def update_request_status(request_id: str, **fields) -> Optional[MovementRequest]:
    row = get_request(request_id)
    if row is None:
        return None
    for k in fields:
        if k not in STATUS_FIELDS:
            raise ValueError(f"Không được sửa cột '{k}' của request.")
    if row.status in TERMINAL_STATUSES:
        raise TerminalStatusError(
            f"Request {request_id} is already {row.status.value} in the database."
        )
    for k, v in fields.items():
        setattr(row, k, v)
    _commit()
    return row


def _commit():
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise
