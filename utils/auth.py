# utils/auth.py
from functools import wraps
from flask import abort, request
from flask_login import current_user
from db.models.user import UserRole
from utils.logger import get_logger

logger = get_logger("auth")


def _as_role(role) -> UserRole:
    return role if isinstance(role, UserRole) else UserRole(str(role).upper())


def roles_required(*roles):
    """Chỉ cho phép user có 1 trong các role; nhận cả enum lẫn chuỗi ("ADMIN")."""
    allowed = tuple(_as_role(r) for r in roles)

    def deco(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            if not current_user.is_authenticated:
                abort(401)
            if not current_user.has_role(*allowed):
                logger.warning(
                    "User %s (%s) denied %s %s",
                    current_user.id,
                    current_user.role.value,
                    request.method,
                    request.path,
                )
                abort(403)
            return fn(*args, **kwargs)

        return wrapper

    return deco
