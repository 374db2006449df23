# admin/setup.py
from flask import redirect, url_for, request, flash
from flask_login import current_user, logout_user
from flask_admin import Admin, AdminIndexView, expose
from flask_admin.contrib.sqla import ModelView
from flask_admin.menu import MenuLink
from flask_admin.theme import Bootstrap4Theme
from configs import db
from db.models.user import UserRole
from lifecycle.ext import invalidate


# Chặn truy cập nếu không phải admin


class MyAdminIndex(AdminIndexView):
    @expose("/")
    def index(self):
        # Chưa đăng nhập -> đưa về trang login (KHÔNG flash lỗi)
        if not current_user.is_authenticated:
            return redirect(url_for("auth.login", next=request.url))

        if not current_user.has_role(UserRole.ADMIN):
            flash("You do not have access to the admin area.", "danger")
            return redirect(url_for("main.home"))

        return super().index()

    @expose("/logout")
    def admin_logout(self):
        if current_user.is_authenticated:
            logout_user()
            flash("Signed out", "success")
        return redirect(url_for("auth.login"))

    def is_accessible(self):
        return current_user.is_authenticated and current_user.has_role(UserRole.ADMIN)

    def inaccessible_callback(self, name, **kwargs):
        if not current_user.is_authenticated:
            return redirect(url_for("auth.login", next=request.url))

        flash("You do not have access to the admin area.", "danger")
        return redirect(url_for("main.home"))


class SecureModelView(ModelView):
    can_view_details = True
    can_export = True

    def is_accessible(self):
        return current_user.is_authenticated and current_user.has_role(UserRole.ADMIN)

    def inaccessible_callback(self, name, **kwargs):
        return redirect(url_for("auth.login", next=request.url))


class UserView(SecureModelView):
    column_searchable_list = ["name", "email"]
    column_filters = ["role", "base", "is_active"]
    column_list = ["id", "name", "email", "role", "base", "is_active"]
    form_columns = ["id", "name", "email", "role", "base", "is_active"]


class InventoryItemView(SecureModelView):
    column_searchable_list = ["description", "serial_no", "asset_no"]
    column_filters = ["base", "equipment_status", "status", "location"]
    column_list = [
        "id",
        "description",
        "serial_no",
        "asset_no",
        "base",
        "location",
        "equipment_status",
        "current_location",
        "person_in_charge",
    ]
    # cột tracking chỉ đổi qua quy trình duyệt
    form_excluded_columns = [
        "equipment_status",
        "current_location",
        "person_in_charge",
        "last_movement_date",
    ]

    # local view của manager phải thấy thay đổi từ trang quản trị
    def after_model_change(self, form, model, is_created):
        invalidate()

    def after_model_delete(self, model):
        invalidate()


class MovementRequestView(SecureModelView):
    # request không bao giờ bị xóa/sửa tay
    can_create = False
    can_edit = False
    can_delete = False
    column_filters = ["status", "type", "base"]
    column_list = [
        "id",
        "timestamp",
        "type",
        "staff_name",
        "base",
        "status",
        "storekeeper_id",
        "manager_id",
        "admin_id",
    ]
    column_default_sort = ("timestamp", True)


class RequestItemView(SecureModelView):
    can_create = False
    can_edit = False
    can_delete = False
    column_searchable_list = ["item_id", "serial_no"]
    column_list = ["request_id", "position", "item_id", "description", "serial_no"]


def init_admin(app):

    admin = Admin(
        app,
        name="Equipment Admin",
        theme=Bootstrap4Theme(),
        index_view=MyAdminIndex(url="/manage"),  # index sẽ là /manage/
        url="/manage",  # toàn bộ admin ở /manage
    )
    # Import model ở đây để tránh circular import
    from db.models.user import User
    from db.models.inventory import InventoryItem
    from db.models.movement_request import MovementRequest, RequestItem

    admin.add_view(
        UserView(
            User,
            db.session,
            category="System",
            endpoint="admin_user",
            name="Users",
        )
    )
    admin.add_view(
        InventoryItemView(
            InventoryItem,
            db.session,
            category="Inventory",
            endpoint="admin_inventory_item",
            name="Inventory Items",
        )
    )
    admin.add_view(
        MovementRequestView(
            MovementRequest,
            db.session,
            category="Requests",
            endpoint="admin_request",
            name="Movement Requests",
        )
    )
    admin.add_view(
        RequestItemView(
            RequestItem,
            db.session,
            category="Requests",
            endpoint="admin_request_item",
            name="Request Items",
        )
    )
    admin.add_link(
        MenuLink(
            name="Logout",
            category="System",
            endpoint="admin.admin_logout",
        )
    )

    return admin
