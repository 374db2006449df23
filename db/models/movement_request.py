from configs import db
from utils.clock import utcnow
import enum


class RequestStatus(enum.Enum):
    PENDING = "PENDING"  # chờ thủ kho
    PENDING_MANAGER = "PENDING_MANAGER"  # thủ kho đã duyệt, chờ manager
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class RequestType(enum.Enum):
    BORROW = "BORROW"
    RETURN = "RETURN"


TERMINAL_STATUSES = (RequestStatus.APPROVED, RequestStatus.REJECTED)


class MovementRequest(db.Model):
    __tablename__ = "movement_request"
    id = db.Column(db.String(64), primary_key=True)
    type = db.Column(db.Enum(RequestType), nullable=False)
    staff_id = db.Column(db.String(64), nullable=False, index=True)
    staff_name = db.Column(db.String(120), nullable=False)
    storekeeper_id = db.Column(db.String(64))
    manager_id = db.Column(db.String(64))
    admin_id = db.Column(db.String(64))
    base = db.Column(db.String(80), nullable=False, index=True)
    status = db.Column(
        db.Enum(RequestStatus),
        default=RequestStatus.PENDING,
        nullable=False,
    )
    timestamp = db.Column(db.DateTime, default=utcnow, nullable=False)
    rejection_reason = db.Column(db.Text)
    target_location = db.Column(db.String(160))
    target_date = db.Column(db.String(40))


class RequestItem(db.Model):
    __tablename__ = "request_item"
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    request_id = db.Column(
        db.String(64),
        db.ForeignKey("movement_request.id", ondelete="CASCADE"),
        nullable=False,
    )
    position = db.Column(db.Integer, nullable=False, default=0)
    # snapshot lúc tạo request, không FK để giữ nguyên khi item bị sửa/xóa
    item_id = db.Column(db.String(64), nullable=False, index=True)
    description = db.Column(db.String(255))
    serial_no = db.Column(db.String(120))
    request = db.relationship(
        "MovementRequest",
        backref=db.backref(
            "items", cascade="all, delete-orphan", order_by="RequestItem.position"
        ),
    )
