"""
Excel report of extraction results.
One row per record, four flat columns, sorted by file name.
"""

import io
from datetime import date
from typing import Iterable, Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from app.config import settings
from app.models.enums import RecordStatus
from app.pipeline.natural_sort import sort_records
from app.schemas.contracts import ResultRecord


# Header -> column width (characters)
COLUMNS: list[tuple[str, int]] = [
    ("Nome do Arquivo", 40),
    ("Código da Retenção", 20),
    ("Valor da Retenção", 20),
    ("Status", 50),
]

MONEY_FORMAT = "#,##0.00"


def status_label(record: ResultRecord) -> str:
    if record.status == RecordStatus.SUCCESS:
        return "OK"
    return record.message or "Erro"


def record_to_row(record: ResultRecord) -> list:
    """Flat row; the amount stays numeric so the sheet can sum it."""
    return [record.filename, record.code, record.value, status_label(record)]


def export_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"{settings.EXPORT_FILE_PREFIX}_{today.isoformat()}.xlsx"


def build_workbook(records: Iterable[ResultRecord]) -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = settings.EXPORT_SHEET_NAME

    header_font = Font(bold=True, color="FFFFFF")
    header_fill = PatternFill("solid", fgColor="1F4E79")
    header_align = Alignment(horizontal="center", vertical="center")
    warning_font = Font(color="9C5700")
    error_font = Font(color="CC0000")

    for col_idx, (header, width) in enumerate(COLUMNS, 1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = header_align
        ws.column_dimensions[cell.column_letter].width = width

    ws.freeze_panes = "A2"

    for row_idx, record in enumerate(sort_records(records), 2):
        for col_idx, value in enumerate(record_to_row(record), 1):
            ws.cell(row=row_idx, column=col_idx, value=value)

        ws.cell(row=row_idx, column=3).number_format = MONEY_FORMAT
        status_cell = ws.cell(row=row_idx, column=4)
        if record.status == RecordStatus.WARNING:
            status_cell.font = warning_font
        elif record.status == RecordStatus.ERROR:
            status_cell.font = error_font

    ws.auto_filter.ref = ws.dimensions
    return wb


def export_xlsx_bytes(records: Iterable[ResultRecord]) -> bytes:
    output = io.BytesIO()
    build_workbook(records).save(output)
    return output.getvalue()
