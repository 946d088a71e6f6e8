"""Excel invoice for one reservation breakdown.

Every amount is pre-computed in Python; the sheet holds values, not
formulas. Cells carry full precision and the number format shows cents.
"""

from __future__ import annotations

from pathlib import Path

import openpyxl
from openpyxl.styles import Alignment, Border, Font, Side

from limo_rates.confirmation import ConfirmationLine, confirmation_lines
from limo_rates.models import ChargeBreakdown

# Sheet layout
TITLE_ROW = 1
CONFIRMATION_ROW = 2
COLUMN_HEADER_ROW = 4
DATA_START_ROW = 5

DESCRIPTION_COL = 1
DETAIL_COL = 2
AMOUNT_COL = 3

# Formatting constants
THIN_BORDER = Border(
    left=Side(style='thin'),
    right=Side(style='thin'),
    top=Side(style='thin'),
    bottom=Side(style='thin'),
)
TOP_BORDER = Border(top=Side(style='thin'))

HEADER_FONT = Font(name='Calibri', size=11, bold=True)
DATA_FONT = Font(name='Calibri', size=11)
TITLE_FONT = Font(name='Calibri', size=12, bold=True)
CENTER_ALIGN = Alignment(horizontal='center', vertical='center')
DOLLAR_FORMAT = '_("$"* #,##0.00_);_("$"* \\(#,##0.00\\);_("$"* "-"??_);_(@_)'


def _write_line(ws, row: int, description: str, detail: str, amount, bold: bool = False) -> None:
    font = HEADER_FONT if bold else DATA_FONT
    ws.cell(row=row, column=DESCRIPTION_COL).value = description
    ws.cell(row=row, column=DESCRIPTION_COL).font = font
    ws.cell(row=row, column=DETAIL_COL).value = detail or None
    ws.cell(row=row, column=DETAIL_COL).font = DATA_FONT

    c = ws.cell(row=row, column=AMOUNT_COL)
    c.value = float(amount)
    c.font = font
    c.number_format = DOLLAR_FORMAT


def generate_invoice_workbook(
    breakdown: ChargeBreakdown,
    output_path: str | Path,
    confirmation_number: str = "NEW",
    hide_zero: bool = True,
) -> Path:
    """Write the itemized invoice workbook and return its path."""
    output_path = Path(output_path)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Invoice"

    # --- Title & header ---
    ws.merge_cells(start_row=TITLE_ROW, start_column=1, end_row=TITLE_ROW, end_column=AMOUNT_COL)
    title_cell = ws.cell(row=TITLE_ROW, column=1)
    title_cell.value = 'Reservation Invoice'
    title_cell.font = TITLE_FONT
    title_cell.alignment = CENTER_ALIGN

    ws.cell(row=CONFIRMATION_ROW, column=1).value = 'Confirmation #'
    ws.cell(row=CONFIRMATION_ROW, column=1).font = HEADER_FONT
    ws.cell(row=CONFIRMATION_ROW, column=2).value = confirmation_number
    ws.cell(row=CONFIRMATION_ROW, column=2).font = HEADER_FONT

    for col, label in ((DESCRIPTION_COL, 'Description'), (DETAIL_COL, 'Detail'), (AMOUNT_COL, 'Amount')):
        c = ws.cell(row=COLUMN_HEADER_ROW, column=col)
        c.value = label
        c.font = HEADER_FONT
        c.alignment = CENTER_ALIGN
        c.border = THIN_BORDER

    # --- Line items ---
    row = DATA_START_ROW
    subtotal_written = False
    lines: list[ConfirmationLine] = confirmation_lines(breakdown, hide_zero=hide_zero)
    for line in lines:
        if line.kind == "percent" and not subtotal_written:
            _write_line(ws, row, 'Subtotal', '', breakdown.primary_subtotal, bold=True)
            row += 1
            subtotal_written = True

        bold = line.kind == "total"
        _write_line(ws, row, line.label, line.detail, line.amount, bold=bold)
        if line.key == "grand_total":
            for col in (DESCRIPTION_COL, DETAIL_COL, AMOUNT_COL):
                ws.cell(row=row, column=col).border = TOP_BORDER
        row += 1

    # --- Set column widths ---
    ws.column_dimensions['A'].width = 28
    ws.column_dimensions['B'].width = 24
    ws.column_dimensions['C'].width = 16

    wb.save(str(output_path))
    return output_path
