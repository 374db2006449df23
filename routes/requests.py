from flask import Blueprint, render_template, request, redirect, url_for, flash, jsonify
from flask_login import login_required, current_user
from db.models.user import UserRole
from lifecycle.errors import (
    InvalidStateError,
    NotFoundError,
    TransitionError,
    ValidationError,
)
from lifecycle.ext import get_manager
from utils.auth import roles_required
from utils.flashing import flash_warnings

requests_bp = Blueprint("requests_web", __name__)


@requests_bp.route("/requests")
@login_required
def request_list():
    manager = get_manager()
    return render_template(
        "requests/requests.html",
        queue=manager.actionable_queue(current_user),
        history=manager.history(current_user),
    )


@requests_bp.route("/requests/add", methods=["POST"])
@login_required
@roles_required(UserRole.STAFF)
def request_add():
    item_ids = request.form.getlist("item_ids")
    req_type = request.form.get("type", "")
    try:
        result = get_manager().submit(
            item_ids,
            req_type,
            request.form.get("target_location"),
            request.form.get("target_date"),
            current_user,
        )
    except ValidationError as e:
        flash(str(e), "danger")
        return redirect(url_for("inventory_web.inventory_list", mode=req_type.lower()))

    flash_warnings(result)
    flash(f"Request {result.request.id} submitted", "success")
    return redirect(url_for("requests_web.request_list"))


@requests_bp.route("/requests/<request_id>/decide", methods=["POST"])
@login_required
@roles_required(UserRole.STOREKEEPER, UserRole.BASE_MANAGER, UserRole.ADMIN)
def request_decide(request_id: str):
    approve = request.form.get("approve") in ("1", "true", "yes", "on")
    try:
        result = get_manager().decide(
            request_id, current_user, approve, request.form.get("reason")
        )
    except InvalidStateError as e:
        flash(str(e), "warning")
        return redirect(url_for("requests_web.request_list"))
    except NotFoundError:
        flash("Request not found", "warning")
        return redirect(url_for("requests_web.request_list"))
    except TransitionError as e:
        flash(str(e), "danger")
        return redirect(url_for("requests_web.request_list"))

    flash_warnings(result)
    flash(f"Request {request_id} is now {result.new_status.value}", "success")
    return redirect(url_for("requests_web.request_list"))


@requests_bp.route("/requests/<request_id>/document")
@login_required
@roles_required(UserRole.STOREKEEPER, UserRole.ADMIN)
def request_document(request_id: str):
    """Dữ liệu cho biểu mẫu xuất/nhập thiết bị (phần render PDF nằm ngoài app)."""
    try:
        ctx = get_manager().document_context(request_id, current_user)
    except InvalidStateError as e:
        return jsonify({"error": str(e)}), 409
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404

    req = ctx["request"]
    return jsonify(
        {
            "request": {
                "id": req.id,
                "type": req.type.value,
                "status": req.status.value,
                "staff_id": req.staff_id,
                "staff_name": req.staff_name,
                "base": req.base,
                "timestamp": req.timestamp.isoformat(),
                "target_location": req.target_location,
                "target_date": req.target_date,
                "actors": [
                    {"role": role, "user_id": uid} for role, uid in req.actor_history()
                ],
            },
            "items": [
                {
                    "id": i.id,
                    "description": i.description,
                    "serial_no": i.serial_no,
                    "asset_no": i.asset_no,
                    "maker": i.maker,
                    "type_model": i.type_model,
                    "quantity": i.quantity,
                }
                for i in ctx["items"]
            ],
            "approver_name": ctx["approver_name"],
        }
    )
