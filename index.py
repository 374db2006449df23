# index.py
from flask import Blueprint, render_template
from flask_login import login_required, current_user
from datetime import datetime
from db.models.inventory import IN_STORE
from db.models.movement_request import RequestStatus
from db.models.user import UserRole
from lifecycle.ext import get_manager

main_bp = Blueprint("main", __name__)


@main_bp.app_context_processor
def inject_now():
    return {"current_year": datetime.now().year}


def dashboard_stats(manager, user) -> dict:
    stats = {}
    if user.has_role(UserRole.STOREKEEPER, UserRole.BASE_MANAGER):
        base_items = manager.list_items(base=user.base)
        stats["pending"] = len(manager.actionable_queue(user))
        stats["in_store"] = sum(1 for i in base_items if i.equipment_status == IN_STORE)
        stats["total_items"] = len(base_items)
    elif user.has_role(UserRole.STAFF):
        mine = [r for r in manager.requests if r.staff_id == str(user.id)]
        stats["my_pending"] = sum(
            1
            for r in mine
            if r.status in (RequestStatus.PENDING, RequestStatus.PENDING_MANAGER)
        )
        stats["items_held"] = len(manager.selectable_items(user, "return"))
    else:
        stats["total_requests"] = len(manager.requests)
        stats["total_items"] = len(manager.inventory)
        stats["open_requests"] = len(manager.actionable_queue(user))
    return stats


@main_bp.route("/")
@login_required
def home():
    stats = dashboard_stats(get_manager(), current_user)
    return render_template("index.html", stats=stats)
