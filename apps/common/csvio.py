"""
CSV helpers for exports and imports.

Exports are written with ``csv_escape`` rather than ``csv.writer``: Excel mode
emits phone numbers as the formula ``="6281..."`` and that cell must reach the
file unquoted, which ``csv.writer`` cannot do per cell.

Imports go through ``csv.reader`` (quoted fields, doubled quotes, CRLF).
"""
import csv
import io
import re

from django.http import HttpResponse
from django.utils import timezone

_NEEDS_QUOTES = re.compile(r'[",\n\r]')
_EXCEL_TEXT = re.compile(r'^="(.*)"$', re.DOTALL)


def csv_escape(value):
    """Quote a value only if it contains a quote, comma, CR or LF."""
    text = '' if value is None else str(value)
    if _NEEDS_QUOTES.search(text):
        return '"' + text.replace('"', '""') + '"'
    return text


def excel_text(value):
    """Wrap digits as ``="<value>"`` so Excel keeps leading digits as text."""
    if not value:
        return ''
    return f'="{value}"'


def phone_cell(value, excel=False):
    return excel_text(value) if excel and value else csv_escape(value)


def unwrap_excel_text(value):
    """Undo ``excel_text`` on an imported cell."""
    match = _EXCEL_TEXT.match(value.strip())
    return match.group(1) if match else value


def render_csv(header, rows):
    """
    Join a header and pre-escaped rows into CSV text.

    ``rows`` are lists of cells that have already been passed through
    ``csv_escape``/``phone_cell``.
    """
    lines = [','.join(header)]
    lines.extend(','.join(row) for row in rows)
    return '\n'.join(lines)


def csv_attachment(content, filename):
    response = HttpResponse(content, content_type='text/csv; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    response['Cache-Control'] = 'no-store'
    return response


def dated_filename(*parts):
    """``customers-simple-2025-01-31.csv`` style names."""
    stamp = timezone.localdate().isoformat()
    return '-'.join([p for p in parts if p] + [stamp]) + '.csv'


def parse_csv(text):
    """
    Parse CSV text into ``(headers, rows)``.

    A UTF-8 BOM is dropped. Trailing completely empty lines are ignored.
    """
    if text.startswith('\ufeff'):
        text = text[1:]
    reader = csv.reader(io.StringIO(text, newline=''))
    rows = [row for row in reader]
    while rows and not any(cell.strip() for cell in rows[-1]):
        rows.pop()
    if not rows:
        return [], []
    return rows[0], rows[1:]
