from uuid import uuid4
from flask import Blueprint, render_template, request, redirect, url_for, flash
from flask_login import login_required
from sqlalchemy.exc import SQLAlchemyError
from db.models.user import UserRole
from dao import user as user_dao
from utils.auth import roles_required
from utils.logger import get_logger

users_bp = Blueprint("users_web", __name__)
logger = get_logger("routes.users")


@users_bp.route("/users")
@login_required
@roles_required(UserRole.ADMIN)
def users_list():
    return render_template(
        "users/users.html", users=user_dao.list_users(), bases=user_dao.list_bases()
    )


@users_bp.route("/users/add", methods=["POST"])
@login_required
@roles_required(UserRole.ADMIN)
def users_add():
    try:
        u = user_dao.create_user(
            user_id=f"U-{uuid4().hex[:8]}",
            name=request.form.get("name", ""),
            email=request.form.get("email", ""),
            role=request.form.get("role", UserRole.STAFF.value),
            base=request.form.get("base", ""),
            password=request.form.get("password") or None,
        )
    except ValueError as e:
        flash(str(e), "danger")
        return redirect(url_for("users_web.users_list"))
    except SQLAlchemyError:
        logger.exception("Could not create user")
        flash("Failed to save user to the database.", "danger")
        return redirect(url_for("users_web.users_list"))

    flash(f"User {u.name} created", "success")
    return redirect(url_for("users_web.users_list"))
