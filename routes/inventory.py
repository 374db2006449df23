from dataclasses import replace
from flask import (
    Blueprint,
    render_template,
    request,
    redirect,
    url_for,
    flash,
    send_file,
    current_app,
)
from flask_login import login_required, current_user
from db.models.user import UserRole
from dao import user as user_dao
from lifecycle.ext import get_manager
from utils.auth import roles_required
from utils.flashing import flash_warnings
from utils.spreadsheet import (
    SpreadsheetError,
    read_inventory_workbook,
    write_inventory_workbook,
    export_filename,
)

inventory_bp = Blueprint("inventory_web", __name__)

# các cột mô tả được sửa tay; cột tracking chỉ do lifecycle ghi
EDITABLE_FIELDS = [
    "no",
    "description",
    "maker",
    "range",
    "type_model",
    "serial_no",
    "unit_price",
    "date",
    "po_no",
    "asset_no",
    "location",
    "status",
    "sems_category",
    "physical_status",
    "remarks",
]


@inventory_bp.route("/inventory")
@login_required
def inventory_list():
    manager = get_manager()
    base = request.args.get("base") or None
    mode = request.args.get("mode", "borrow")
    items = manager.visible_items(current_user, base)
    selectable = {i.id for i in manager.selectable_items(current_user, mode)}
    return render_template(
        "inventory/inventory.html",
        items=items,
        base=base,
        mode=mode,
        selectable=selectable,
        bases=user_dao.list_bases(),
    )


@inventory_bp.route("/inventory/edit/<item_id>", methods=["GET", "POST"])
@login_required
@roles_required(UserRole.ADMIN, UserRole.STOREKEEPER)
def inventory_edit(item_id: str):
    manager = get_manager()
    item = manager.get_item(item_id)
    if not item or (
        not current_user.has_role(UserRole.ADMIN) and item.base != current_user.base
    ):
        flash("Item not found", "warning")
        return redirect(url_for("inventory_web.inventory_list"))

    if request.method == "POST":
        fields = {f: (request.form.get(f) or "").strip() for f in EDITABLE_FIELDS}
        if not fields["description"]:
            flash("Description is required", "danger")
            return redirect(url_for("inventory_web.inventory_edit", item_id=item_id))
        try:
            fields["quantity"] = int(request.form.get("quantity") or item.quantity)
        except ValueError:
            flash("Quantity must be a whole number", "danger")
            return redirect(url_for("inventory_web.inventory_edit", item_id=item_id))
        result = manager.update_item(replace(item, **fields))
        flash_warnings(result)
        flash("Item updated", "success")
        return redirect(url_for("inventory_web.inventory_list"))

    return render_template(
        "inventory/item_form.html", item=item, fields=EDITABLE_FIELDS
    )


@inventory_bp.route("/inventory/import", methods=["POST"])
@login_required
@roles_required(UserRole.ADMIN)
def inventory_import():
    upload = request.files.get("file")
    base = (request.form.get("base") or "").strip() or (
        current_user.base or current_app.config["DEFAULT_BASE"]
    )
    if not upload or not upload.filename:
        flash("Choose an Excel file to import", "warning")
        return redirect(url_for("inventory_web.inventory_list"))
    try:
        items = read_inventory_workbook(upload.stream, base)
    except SpreadsheetError as e:
        flash(str(e), "danger")
        return redirect(url_for("inventory_web.inventory_list"))

    result = get_manager().import_items(items)
    flash_warnings(result)
    flash(f"Imported {result.count} item(s) to {base}", "success")
    return redirect(url_for("inventory_web.inventory_list", base=base))


@inventory_bp.route("/inventory/export")
@login_required
@roles_required(UserRole.ADMIN)
def inventory_export():
    base = request.args.get("base") or None
    items = get_manager().visible_items(current_user, base)
    return send_file(
        write_inventory_workbook(items),
        mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        as_attachment=True,
        download_name=export_filename(base),
    )
