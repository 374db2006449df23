from flask import Blueprint, render_template, request, redirect, url_for, flash, session
from flask_login import login_user, logout_user, current_user
from dao import user as user_dao

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


# Đăng nhập giả lập: chọn user trong danh sách, không kiểm tra mật khẩu
@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    users = user_dao.list_users()
    if request.method == "POST":
        session.pop("_flashes", None)

        user_id = request.form.get("user_id", "").strip()
        user = user_dao.get_user(user_id) if user_id else None

        if not user:
            flash("Unknown user", "danger")
            return render_template("auth/login.html", users=users)

        if not user.is_active:
            flash("Account is disabled", "warning")
            return render_template("auth/login.html", users=users)

        login_user(user, remember=True)
        flash(f"Signed in as {user.name}", "success")
        next_url = request.args.get("next") or url_for("main.home")
        return redirect(next_url)

    return render_template("auth/login.html", users=users)


@auth_bp.route("/logout")
def logout():
    if current_user.is_authenticated:
        logout_user()
        session.pop("_flashes", None)
        flash("Signed out", "info")
    return redirect(url_for("auth.login"))
