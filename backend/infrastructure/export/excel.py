"""
Excel export helpers (openpyxl).
"""

from io import BytesIO

from django.http import HttpResponse
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter


XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

MAX_COLUMN_WIDTH = 50

HEADER_FONT = Font(bold=True, color='FFFFFF')
HEADER_FILL = PatternFill('solid', fgColor='3B82F6')


def build_workbook(sheets):
    """
    Build a workbook from (title, headers, rows) tuples.

    Column widths follow the longest value, capped at MAX_COLUMN_WIDTH.
    """
    wb = Workbook()
    wb.remove(wb.active)

    for title, headers, rows in sheets:
        ws = wb.create_sheet(title=title[:31])
        ws.append(list(headers))
        for cell in ws[1]:
            cell.font = HEADER_FONT
            cell.fill = HEADER_FILL

        for row in rows:
            ws.append([_cell_value(v) for v in row])

        for index, column in enumerate(ws.columns, start=1):
            longest = max((len(str(c.value)) for c in column if c.value is not None), default=0)
            ws.column_dimensions[get_column_letter(index)].width = min(longest + 2, MAX_COLUMN_WIDTH)

    return wb


def _cell_value(value):
    if value is None:
        return ''
    if isinstance(value, (int, float, str)):
        return value
    # Decimal, UUID, dates
    try:
        return float(value)
    except (TypeError, ValueError):
        return str(value)


def workbook_response(wb, filename: str) -> HttpResponse:
    buffer = BytesIO()
    wb.save(buffer)
    response = HttpResponse(buffer.getvalue(), content_type=XLSX_CONTENT_TYPE)
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response
