from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import generate_password_hash
from configs import db
from db.models.user import User, UserRole


def list_users() -> List[User]:
    return User.query.order_by(User.base.asc(), User.name.asc()).all()


def get_user(user_id: str) -> Optional[User]:
    return db.session.get(User, user_id)


def list_bases() -> List[str]:
    rows = db.session.query(User.base).distinct().order_by(User.base.asc()).all()
    return [r[0] for r in rows]


def create_user(
    user_id: str,
    name: str,
    email: str,
    role: str,
    base: str,
    password: Optional[str] = None,
) -> User:
    name, email, base = (name or "").strip(), (email or "").strip(), (base or "").strip()
    if not (name and email and base):
        raise ValueError("Name, email and base are required.")
    try:
        role_enum = UserRole((role or "").upper())
    except ValueError:
        raise ValueError(f"Unknown role: {role}") from None
    u = User(
        id=user_id,
        name=name,
        email=email,
        role=role_enum,
        base=base,
        password_hash=generate_password_hash(password) if password else None,
    )
    db.session.add(u)
    _commit()
    return u


def _commit():
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise
