# utils/flashing.py
from flask import flash


def flash_warnings(result) -> None:
    """Lỗi đồng bộ DB không chặn thao tác, chỉ hiện cảnh báo."""
    for w in getattr(result, "warnings", None) or []:
        flash(w, "warning")
