# utils/clock.py
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Giờ UTC dạng naive, cùng kiểu với giá trị cột DateTime đọc từ DB."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
