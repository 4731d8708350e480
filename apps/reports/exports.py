"""CSV export of the accounting ledger."""

import logging

from django.conf import settings
from django.utils import timezone

from apps.common.csvio import csv_escape, dated_filename, phone_cell, render_csv
from .reports import LEDGER_SELLER, ReportQueries

logger = logging.getLogger(__name__)

LEDGER_HEADER = [
    'Order ID',
    'Type',
    'Date',
    'Party Name',
    'Party WhatsApp',
    'Party Address',
    'Payment Status',
    'Delivery Status',
    'Payment Type',
    'Paid At',
    'Delivered At',
    'Delivery Note',
    'Subtotal',
    'Discount',
    'Delivery Fee',
    'Total',
    'Items',
]


def _local_date(value):
    return timezone.localtime(value).date().isoformat() if value else ''


def format_qty(qty):
    """``2.000`` -> ``2``, ``1.250`` -> ``1.25``."""
    return f'{qty.normalize():f}'


def describe_lines(order):
    """``Apple (2 PCS); Grapes (0.5 KG)``"""
    return '; '.join(
        f'{line.item.name} ({format_qty(line.qty)} {line.item.unit})'
        for line in order.items.all()
    )


def ledger_csv_row(row, excel=False):
    order = row['order']
    party = row['party']
    return [
        str(order.id),
        'Seller' if row['type'] == LEDGER_SELLER else 'Customer',
        _local_date(order.created_at),
        csv_escape(getattr(party, 'name', None)),
        phone_cell(getattr(party, 'whatsapp', None), excel),
        csv_escape(getattr(party, 'address', None)),
        order.payment_status,
        order.delivery_status,
        order.payment_type or '',
        _local_date(order.paid_at),
        _local_date(order.delivered_at),
        csv_escape(order.delivery_note),
        str(order.subtotal),
        str(order.discount),
        str(order.delivery_fee),
        str(order.total),
        csv_escape(describe_lines(order)),
    ]


def export_ledger(*, date_from=None, date_to=None, ledger_type='all', excel=False):
    """
    Render the ledger as CSV, newest first.

    Returns:
        tuple: ``(filename, text)``; the name looks like
        ``accounting-all-excel-2025-01-31.csv``.

    Raises:
        InvalidLedgerTypeError: If ``ledger_type`` is unknown.
    """
    refs = ReportQueries.ledger_refs(date_from, date_to, ledger_type=ledger_type)
    rows = ReportQueries.ledger_rows(refs[:settings.POS['EXPORT_MAX_ROWS']])

    text = render_csv(LEDGER_HEADER, [ledger_csv_row(row, excel) for row in rows])
    filename = dated_filename('accounting', ledger_type, 'excel' if excel else None)

    logger.info('Accounting export: %d row(s), type=%s', len(rows), ledger_type)
    return filename, text
