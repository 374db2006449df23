from datetime import date, datetime
from io import BytesIO

import openpyxl
import pytest

from conftest import make_item
from utils.spreadsheet import (
    EXPORT_COLUMNS,
    SpreadsheetError,
    export_filename,
    find_header_row,
    map_columns,
    read_inventory_workbook,
    write_inventory_workbook,
)

NOW = datetime(2024, 1, 5, 8, 0, 0)


def _workbook(rows):
    wb = openpyxl.Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    out = BytesIO()
    wb.save(out)
    out.seek(0)
    return out


def test_header_found_below_title_rows():
    rows = [
        ["LEMAL BASE EQUIPMENT LIST"],
        [None],
        ["Bil", "Description", "Brand", "Serial No.", "Qty", "Location"],
    ]
    assert find_header_row(rows) == 2


def test_header_beyond_scan_window_is_ignored():
    rows = [["title"]] * 25 + [["Description", "Serial No."]]
    assert find_header_row(rows) == -1


def test_map_columns_uses_first_matching_heading():
    cols = map_columns(["No.", "Description", "Maker", "Type/Model", "S/N", "Remarks"])
    assert cols["description"] == 1
    assert cols["maker"] == 2
    assert cols["type_model"] == 3
    assert cols["serial_no"] == 4
    assert cols["remarks"] == 5
    assert cols["po_no"] == -1


def test_read_workbook_fills_defaults():
    stream = _workbook(
        [
            ["Company inventory"],
            ["No.", "Description", "Serial No.", "Qty", "Location", "Status", "Asset No."],
            [1, "Torque wrench", "TW-100", "3 pcs", "Cabinet 2", "Working", "A-77"],
            [2, "Gauge", None, None, None, None, None],
            [None, None, None, None, None, None, None],
            [3, None, "ORPHAN", 1, None, None, None],
        ]
    )

    items = read_inventory_workbook(stream, "Lemal", now=NOW)

    assert [i.description for i in items] == ["Torque wrench", "Gauge"]
    wrench, gauge = items
    assert wrench.quantity == 3
    assert wrench.location == "Cabinet 2"
    assert wrench.current_location == "Cabinet 2"
    assert wrench.asset_no == "A-77"
    assert wrench.equipment_status == "In Store"
    assert wrench.person_in_charge is None
    assert wrench.base == "Lemal"
    assert wrench.maker == "-"

    assert gauge.quantity == 1
    assert gauge.location == "In Store"
    assert gauge.status == "Working"
    assert gauge.serial_no.startswith("NO-SN-")
    assert gauge.asset_no.startswith("AST-")
    assert gauge.remarks == ""
    assert wrench.id != gauge.id


def test_read_workbook_without_header_raises():
    stream = _workbook([["Name", "Qty"], ["Hammer", 1]])
    with pytest.raises(SpreadsheetError, match="table header"):
        read_inventory_workbook(stream, "Lemal", now=NOW)


def test_unreadable_file_raises():
    with pytest.raises(SpreadsheetError):
        read_inventory_workbook(BytesIO(b"not a workbook"), "Lemal", now=NOW)


def test_export_has_headings_and_rows():
    out = write_inventory_workbook([make_item("EQ-1"), make_item("EQ-2", person_in_charge="Bob")])

    ws = openpyxl.load_workbook(out).active
    rows = list(ws.iter_rows(values_only=True))
    assert ws.title == "Inventory"
    assert list(rows[0]) == [title for title, _ in EXPORT_COLUMNS]
    assert rows[1][0] == 1
    assert rows[1][1] == "Multimeter EQ-1"
    assert rows[2][EXPORT_COLUMNS.index(("Person In Charge", "person_in_charge"))] == "Bob"


def test_export_filename():
    assert export_filename("Base 2", date(2024, 1, 5)) == "Inventory_Base_2_2024-01-05.xlsx"
    assert export_filename(None, date(2024, 1, 5)) == "Inventory_MasterList_2024-01-05.xlsx"
