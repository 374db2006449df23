# utils/spreadsheet.py
"""Đọc / xuất danh sách thiết bị dạng Excel (openpyxl)."""
import re
from datetime import date, datetime
from io import BytesIO
from typing import List, Optional

import openpyxl

from db.models.inventory import IN_STORE
from lifecycle.records import Item
from utils.clock import utcnow

HEADER_SCAN_ROWS = 25
MISSING = "-"

# từ khóa nhận diện cột, cột đầu tiên chứa 1 trong các từ khóa sẽ được chọn
COLUMN_KEYWORDS = {
    "no": ["no.", "no", "bil", "number"],
    "description": ["description"],
    "maker": ["maker", "brand"],
    "range": ["range", "capacity"],
    "type_model": ["type", "model"],
    "serial_no": ["serial", "s/n"],
    "unit_price": ["unit price", "price"],
    "date": ["date"],
    "po_no": ["p.o.", "po no", "purchase order"],
    "quantity": ["qty", "quantity"],
    "asset_no": ["asset no", "asset"],
    "location": ["location"],
    "status": ["status"],
    "sems_category": ["sems", "category"],
    "physical_status": ["physical"],
    "remarks": ["remark", "note"],
}

EXPORT_COLUMNS = [
    ("No.", None),
    ("Description", "description"),
    ("Maker / Brand", "maker"),
    ("Range / Capacity", "range"),
    ("Type / Model", "type_model"),
    ("Serial No.", "serial_no"),
    ("Unit Price", "unit_price"),
    ("Purchase Date", "date"),
    ("P.O. No.", "po_no"),
    ("Quantity", "quantity"),
    ("Asset No.", "asset_no"),
    ("Location (Store)", "location"),
    ("Equipment Status", "equipment_status"),
    ("Status", "status"),
    ("SEMS Category", "sems_category"),
    ("Physical Status", "physical_status"),
    ("Remarks", "remarks"),
    ("Current Live Location", "current_location"),
    ("Person In Charge", "person_in_charge"),
    ("Last Movement Date", "last_movement_date"),
    ("Base", "base"),
]


class SpreadsheetError(ValueError):
    pass


def _text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def find_header_row(rows: List[list]) -> int:
    for idx, row in enumerate(rows[:HEADER_SCAN_ROWS]):
        cells = [_text(c).lower() for c in row]
        if any("description" in c for c in cells) and any("serial" in c for c in cells):
            return idx
    return -1


def map_columns(header: list) -> dict:
    headers = [_text(h).lower() for h in header]
    mapping = {}
    for field, keywords in COLUMN_KEYWORDS.items():
        mapping[field] = next(
            (i for i, h in enumerate(headers) if any(k in h for k in keywords)), -1
        )
    return mapping


def _parse_quantity(raw: str) -> int:
    m = re.match(r"\s*(\d+)", raw or "")
    qty = int(m.group(1)) if m else 0
    return qty or 1


def read_inventory_workbook(stream, base: str, now: Optional[datetime] = None) -> List[Item]:
    """
    Đọc sheet đầu tiên, tự dò dòng tiêu đề (có "Description" và "Serial")
    trong 25 dòng đầu, rồi map cột theo từ khóa.
    """
    now = now or utcnow()
    stamp = int(now.timestamp() * 1000)
    try:
        wb = openpyxl.load_workbook(stream, read_only=True, data_only=True)
    except Exception as exc:  # openpyxl ném nhiều loại lỗi khác nhau cho file hỏng
        raise SpreadsheetError(f"Could not read Excel file: {exc}") from exc
    ws = wb.worksheets[0]
    rows = [list(r) for r in ws.iter_rows(values_only=True)]
    wb.close()

    header_idx = find_header_row(rows)
    if header_idx == -1:
        raise SpreadsheetError(
            'Could not find the table header (looking for "Description" and '
            f'"Serial No.") in the first {HEADER_SCAN_ROWS} rows.'
        )
    cols = map_columns(rows[header_idx])

    items = []
    for i in range(header_idx + 1, len(rows)):
        row = rows[i]
        if not row or not any(_text(c) for c in row):
            continue
        if cols["description"] > -1 and not _text(_cell(row, cols["description"])):
            continue

        def val(field):
            idx = cols[field]
            v = _text(_cell(row, idx)) if idx > -1 else ""
            return v or MISSING

        raw_status = val("status")
        storage = val("location")
        storage = storage if storage != MISSING else IN_STORE
        serial = val("serial_no")
        asset = val("asset_no")
        no = val("no")
        remarks = val("remarks")
        items.append(
            Item(
                id=f"IMP-{stamp}-{i}",
                no=no if no != MISSING else str(i - header_idx),
                description=val("description"),
                maker=val("maker"),
                range=val("range"),
                type_model=val("type_model"),
                serial_no=serial if serial != MISSING else f"NO-SN-{stamp}-{i}",
                unit_price=val("unit_price"),
                date=val("date"),
                po_no=val("po_no"),
                quantity=_parse_quantity(val("quantity")),
                asset_no=asset if asset != MISSING else f"AST-{stamp}-{i}",
                location=storage,
                equipment_status=IN_STORE,
                status=raw_status if raw_status != MISSING else "Working",
                sems_category=val("sems_category"),
                physical_status=val("physical_status"),
                remarks=remarks if remarks != MISSING else "",
                current_location=storage,
                person_in_charge=None,
                last_movement_date=None,
                base=base,
            )
        )
    return items


def _cell(row, idx):
    return row[idx] if idx < len(row) else None


def write_inventory_workbook(items: List[Item]) -> BytesIO:
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Inventory"
    ws.append([title for title, _ in EXPORT_COLUMNS])
    for n, item in enumerate(items, start=1):
        ws.append(
            [n if field is None else getattr(item, field) for _, field in EXPORT_COLUMNS]
        )
    for col in ws.columns:
        ws.column_dimensions[col[0].column_letter].width = 20

    out = BytesIO()
    wb.save(out)
    out.seek(0)
    return out


def export_filename(base: Optional[str] = None, today: Optional[date] = None) -> str:
    safe = re.sub(r"[^a-z0-9]", "_", base, flags=re.I) if base else "MasterList"
    today = today or date.today()
    return f"Inventory_{safe}_{today.isoformat()}.xlsx"
