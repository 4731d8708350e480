"""
Customer CSV export and import.

Export formats:
    full:   id,name,whatsapp,address,created_at
    simple: name,whatsapp,address

Import matches ``name``, ``whatsapp`` and ``address`` headers
case-insensitively. Rows with a WhatsApp number upsert by it; rows without one
always create. ``replace`` then removes customers whose number is not in the
file (customers without a number, or with orders, are kept).
"""

import logging
from typing import Any, Dict, List, Tuple

from django.conf import settings
from django.db import DatabaseError, transaction

from apps.common.csvio import (
    csv_escape,
    dated_filename,
    parse_csv,
    phone_cell,
    render_csv,
    unwrap_excel_text,
)
from ..models import Customer
from .exceptions import ImportFileTooLargeError, InvalidImportFileError
from .phone import normalize_whatsapp

logger = logging.getLogger(__name__)

IMPORT_COLUMNS = ('name', 'whatsapp', 'address')


def export_customers(*, simple: bool = False, excel: bool = False) -> Tuple[str, str]:
    """
    Render customers newest first.

    Returns:
        ``(filename, csv_text)``
    """
    limit = settings.POS['EXPORT_MAX_ROWS']
    customers = Customer.objects.order_by('-created_at')[:limit]

    if simple:
        header = ['name', 'whatsapp', 'address']
    else:
        header = ['id', 'name', 'whatsapp', 'address', 'created_at']

    rows = []
    for customer in customers:
        row = [
            csv_escape(customer.name),
            phone_cell(customer.whatsapp, excel=excel),
            csv_escape(customer.address),
        ]
        if not simple:
            row = [csv_escape(customer.id)] + row + [csv_escape(customer.created_at.isoformat())]
        rows.append(row)

    filename = dated_filename(
        'customers',
        'simple' if simple else '',
        'excel' if excel else '',
    )
    return filename, render_csv(header, rows)


def _read_upload(upload) -> str:
    if upload is None:
        raise InvalidImportFileError("Missing file 'file' in form-data.")

    max_bytes = settings.POS['IMPORT_MAX_BYTES']
    if upload.size > max_bytes:
        raise ImportFileTooLargeError(f'File too large (max {max_bytes // (1024 * 1024)}MB).')

    try:
        return upload.read().decode('utf-8')
    except UnicodeDecodeError:
        raise InvalidImportFileError('File must be UTF-8 encoded.')


def _column_index(headers: List[str]) -> Dict[str, int]:
    lowered = [h.strip().lower() for h in headers]
    return {
        column: lowered.index(column) if column in lowered else -1
        for column in IMPORT_COLUMNS
    }


def _cell(row: List[str], index: int) -> str:
    if index < 0 or index >= len(row):
        return ''
    return unwrap_excel_text(row[index]).strip()


def _import_row(name: str, whatsapp: str, address: str) -> str:
    """Upsert one row; returns ``'created'`` or ``'updated'``."""
    if whatsapp:
        customer = Customer.objects.select_for_update().filter(whatsapp=whatsapp).first()
        if customer is not None:
            customer.name = name or customer.name
            customer.address = address or customer.address
            customer.save()
            return 'updated'

    Customer.objects.create(name=name, address=address or None, whatsapp=whatsapp or None)
    return 'created'


def import_customers(*, upload, replace: bool = False) -> Dict[str, Any]:
    """
    Import customers from an uploaded CSV file.

    Each row is applied in its own savepoint so a failing row does not undo
    the others. Failures are reported with 1-based line numbers counting the
    header.

    Raises:
        ImportFileTooLargeError: If the file exceeds ``POS['IMPORT_MAX_BYTES']``
        InvalidImportFileError: If the file is missing, not UTF-8, or has none of
            the known headers
    """
    headers, rows = parse_csv(_read_upload(upload))

    idx = _column_index(headers)
    if all(position < 0 for position in idx.values()):
        raise InvalidImportFileError(
            'CSV must include at least one of: name, whatsapp, address (header row required).'
        )

    result = {'created': 0, 'updated': 0, 'skipped': 0, 'deleted': 0, 'errors': [], 'replace': replace}
    keep = set()

    for i, row in enumerate(rows):
        name = _cell(row, idx['name'])
        address = _cell(row, idx['address'])
        whatsapp = normalize_whatsapp(_cell(row, idx['whatsapp']))

        if not (name or address or whatsapp):
            result['skipped'] += 1
            continue

        if whatsapp:
            keep.add(whatsapp)

        try:
            with transaction.atomic():
                outcome = _import_row(name, whatsapp, address)
        except (DatabaseError, ValueError) as e:
            result['errors'].append({'line': i + 2, 'message': str(e) or 'Unknown error'})
            continue
        result[outcome] += 1

    if replace:
        with transaction.atomic():
            stale = (
                Customer.objects
                .filter(whatsapp__isnull=False)
                .exclude(whatsapp__in=keep)
                .filter(orders__isnull=True)
                .values_list('id', flat=True)
            )
            result['deleted'], _ = Customer.objects.filter(id__in=list(stale)).delete()

    logger.info(
        'Customer import: %d created, %d updated, %d skipped, %d deleted, %d error(s)',
        result['created'], result['updated'], result['skipped'],
        result['deleted'], len(result['errors']),
    )
    return result
