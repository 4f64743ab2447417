"""
Spreadsheet export of the ledger.
"""

from io import BytesIO
from typing import Iterable, List

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment
from openpyxl.utils import get_column_letter

from backend.app.models.entry import Entry

EXPORT_COLUMNS = ["Date", "Name", "UID", "Amount", "Paid", "Due", "Expenditure", "Balance"]

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def entry_row(entry: Entry) -> list:
    """Project one entry onto the export columns."""
    return [
        entry.date,
        entry.name,
        entry.unique_id,
        entry.amount,
        entry.paid,
        entry.due,
        entry.expenditure,
        entry.balance,
    ]


def _style_header(ws):
    for cell in ws[1]:
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center")


def _autosize_columns(ws, min_width=10, max_width=40):
    for col in range(1, ws.max_column + 1):
        letter = get_column_letter(col)
        max_len = max((len(str(c.value)) for c in ws[letter] if c.value is not None), default=0)
        ws.column_dimensions[letter].width = max(min_width, min(max_width, max_len + 2))


def build_workbook(entries: Iterable[Entry], sheet_name: str = "Ledger") -> Workbook:
    """Single-sheet workbook, one row per entry in iteration order."""
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name

    ws.append(EXPORT_COLUMNS)
    _style_header(ws)
    ws.freeze_panes = "A2"

    for entry in entries:
        ws.append(entry_row(entry))

    _autosize_columns(ws)
    return wb


def export_ledger(entries: List[Entry], sheet_name: str = "Ledger") -> bytes:
    """Serialize the entries to .xlsx bytes."""
    buffer = BytesIO()
    build_workbook(entries, sheet_name).save(buffer)
    return buffer.getvalue()
