"""
Client and supplier ledgers, derived on the fly from invoices, trip notes
and their payments.

Nothing here touches the database: callers pass model instances (or
querysets) in and get plain dicts back, ready for a Response.

Sign conventions
----------------
Clients: invoices are debits, payments received are credits, and a positive
balance (``Dr``) is money the client still owes us.

Suppliers: trip freight is a credit, payments made are debits, and a positive
balance (``Cr``) means we have paid more than the freight booked.
"""
from collections import OrderedDict
from decimal import Decimal

from transpotrack.core.utils import get_financial_year, parse_date, to_decimal

ZERO = Decimal('0.00')
CANCELLED = 'Cancelled'

CLIENT_SORT_KEYS = ('name', 'totalDebits', 'totalCredits', 'balance')
SUPPLIER_SORT_KEYS = ('name', 'totalFreight', 'totalPaid', 'balance')
MONTH_NAMES = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun', 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')

__all__ = [
    'get_financial_year', 'client_summary', 'supplier_summary', 'search_and_sort',
    'client_statement', 'supplier_statement', 'financial_years', 'dashboard_summary',
]


def _in_year(value, financial_year):
    if not financial_year or financial_year == 'All':
        return True
    return get_financial_year(value) == financial_year


def _money(value):
    return float(value)


def month_label(year, month):
    return f"{MONTH_NAMES[month - 1]} {year}"


def client_summary(clients, invoices, payments, financial_year=None):
    """
    One row per client with activity: invoice totals against payments received.

    Cancelled invoices add no debit, but money already received on them still
    counts as a credit.
    Invoices and payments are each filtered by their own date.
    """
    rows = OrderedDict(
        (client.id, {'name': client.name, 'debits': ZERO, 'credits': ZERO}) for client in clients
    )
    invoice_clients = {}
    for invoice in invoices:
        invoice_clients[invoice.id] = invoice.client_id
        if invoice.status == CANCELLED:
            continue
        if invoice.client_id in rows and _in_year(invoice.date, financial_year):
            rows[invoice.client_id]['debits'] += to_decimal(invoice.total_amount)

    for payment in payments:
        client_id = invoice_clients.get(payment.invoice_id)
        if client_id in rows and _in_year(payment.date, financial_year):
            rows[client_id]['credits'] += to_decimal(payment.amount)

    summary = []
    for client_id, row in rows.items():
        if row['debits'] <= 0 and row['credits'] <= 0:
            continue
        balance = row['debits'] - row['credits']
        summary.append({
            'id': client_id,
            'name': row['name'],
            'totalDebits': _money(row['debits']),
            'totalCredits': _money(row['credits']),
            'balance': _money(balance),
            'balanceType': 'Dr' if balance >= 0 else 'Cr',
        })
    return summary


def supplier_summary(suppliers, trip_notes, supplier_payments, financial_year=None):
    """One row per supplier with activity: freight booked against payments made."""
    rows = OrderedDict(
        (supplier.id, {'name': supplier.name, 'freight': ZERO, 'paid': ZERO}) for supplier in suppliers
    )
    note_suppliers = {}
    for note in trip_notes:
        note_suppliers[note.id] = note.supplier_id
        if note.supplier_id in rows and _in_year(note.date, financial_year):
            rows[note.supplier_id]['freight'] += to_decimal(note.total_freight)

    for payment in supplier_payments:
        supplier_id = note_suppliers.get(payment.trip_note_id)
        if supplier_id in rows and _in_year(payment.date, financial_year):
            rows[supplier_id]['paid'] += to_decimal(payment.amount)

    summary = []
    for supplier_id, row in rows.items():
        if row['freight'] <= 0 and row['paid'] <= 0:
            continue
        balance = row['paid'] - row['freight']
        summary.append({
            'id': supplier_id,
            'name': row['name'],
            'totalFreight': _money(row['freight']),
            'totalPaid': _money(row['paid']),
            'balance': _money(balance),
            'balanceType': 'Cr' if balance >= 0 else 'Dr',
        })
    return summary


def search_and_sort(rows, search=None, ordering=None, allowed=CLIENT_SORT_KEYS):
    """
    Case-insensitive name search, then sort by one column.

    ``ordering`` is a column name, optionally prefixed with ``-`` for
    descending order; unknown columns fall back to ``name``.
    """
    if search:
        needle = search.strip().lower()
        rows = [row for row in rows if needle in row['name'].lower()]

    ordering = ordering or 'name'
    reverse = ordering.startswith('-')
    key = ordering.lstrip('-')
    if key not in allowed:
        key = 'name'
    if key == 'name':
        return sorted(rows, key=lambda row: row['name'].lower(), reverse=reverse)
    return sorted(rows, key=lambda row: row[key], reverse=reverse)


def _running_balance(entries):
    # sorted() is stable, so same-day entries keep their insertion order
    entries = sorted(entries, key=lambda entry: entry['date'])
    balance = ZERO
    total_debits = ZERO
    total_credits = ZERO
    for entry in entries:
        total_debits += entry['debit']
        total_credits += entry['credit']
        balance += entry['debit'] - entry['credit']
        entry['balance'] = balance

    for entry in entries:
        entry['date'] = entry['date'].isoformat()
        entry['debit'] = _money(entry['debit'])
        entry['credit'] = _money(entry['credit'])
        entry['balance'] = _money(entry['balance'])
    return entries, total_debits, total_credits, balance


def client_statement(client, invoices, payments, financial_year=None):
    """Dated invoice and payment rows for one client with a running balance"""
    entries = []
    invoice_numbers = {}
    for invoice in invoices:
        if invoice.client_id != client.id:
            continue
        invoice_numbers[invoice.id] = invoice.invoice_number
        if invoice.status == CANCELLED or not _in_year(invoice.date, financial_year):
            continue
        entries.append({
            'date': parse_date(invoice.date),
            'particulars': f"Invoice No: {invoice.invoice_number}",
            'debit': to_decimal(invoice.total_amount),
            'credit': ZERO,
            'id': invoice.id,
            'type': 'invoice',
            'dueDate': invoice.due_date.isoformat() if invoice.due_date else None,
            'status': invoice.status,
        })

    for payment in payments:
        if payment.invoice_id not in invoice_numbers or not _in_year(payment.date, financial_year):
            continue
        entries.append({
            'date': parse_date(payment.date),
            'particulars': f"Payment Received (Inv: {invoice_numbers[payment.invoice_id]})",
            'debit': ZERO,
            'credit': to_decimal(payment.amount),
            'id': payment.invoice_id,
            'type': 'payment',
        })

    entries, debits, credits, closing = _running_balance(entries)
    return {
        'client': {'id': client.id, 'name': client.name, 'gstin': client.gstin},
        'financialYear': financial_year or 'All',
        'entries': entries,
        'totalDebits': _money(debits),
        'totalCredits': _money(credits),
        'closingBalance': _money(closing),
        'balanceType': 'Dr' if closing >= 0 else 'Cr',
    }


def supplier_statement(supplier, trip_notes, supplier_payments, financial_year=None):
    """Dated freight and payment rows for one supplier with a running balance"""
    entries = []
    notes = {}
    for note in trip_notes:
        if note.supplier_id != supplier.id:
            continue
        notes[note.id] = note
        if not _in_year(note.date, financial_year):
            continue
        entries.append({
            'date': parse_date(note.date),
            'particulars': f"Trip Freight: {note.note_id} ({note.from_location} to {note.to_location})",
            'debit': ZERO,
            'credit': to_decimal(note.total_freight),
            'id': note.id,
            'type': 'trip_note',
        })

    for payment in supplier_payments:
        note = notes.get(payment.trip_note_id)
        if note is None or not _in_year(payment.date, financial_year):
            continue
        entries.append({
            'date': parse_date(payment.date),
            'particulars': f"Payment Paid ({payment.payment_type}) (TN: {note.note_id})",
            'debit': to_decimal(payment.amount),
            'credit': ZERO,
            'id': note.id,
            'type': 'supplier_payment',
        })

    entries, debits, credits, closing = _running_balance(entries)
    return {
        'supplier': {'id': supplier.id, 'name': supplier.name},
        'financialYear': financial_year or 'All',
        'entries': entries,
        'totalDebits': _money(debits),
        'totalCredits': _money(credits),
        'closingBalance': _money(closing),
        'balanceType': 'Cr' if closing >= 0 else 'Dr',
    }


def financial_years(invoices, trip_notes):
    """Financial years that have invoices or trip notes, newest first"""
    years = set()
    for document in list(invoices) + list(trip_notes):
        label = get_financial_year(document.date)
        if label:
            years.add(label)
    return sorted(years, reverse=True)


def dashboard_summary(lorry_receipts, invoices, trip_notes, supplier_payments):
    """Headline numbers for the dashboard.

    ``lorry_receipts`` and ``invoices`` must be in insertion order: the
    recent activity feed takes the last three of each.
    """
    lorry_receipts = list(lorry_receipts)
    invoices = list(invoices)

    outstanding = sum(
        (to_decimal(inv.total_amount) - to_decimal(inv.amount_paid)
         for inv in invoices if inv.status not in ('Paid', CANCELLED)),
        ZERO,
    )

    activity = [
        {'type': 'LR Created', 'description': lr.lr_number, 'id': lr.id, 'date': parse_date(lr.date)}
        for lr in lorry_receipts[-3:]
    ] + [
        {'type': 'Invoice Generated', 'description': inv.invoice_number, 'id': inv.id, 'date': parse_date(inv.date)}
        for inv in invoices[-3:]
    ]
    activity.sort(key=lambda item: item['date'], reverse=True)
    activity = activity[:5]
    for item in activity:
        item['date'] = item['date'].isoformat()

    monthly = {}
    for inv in invoices:
        if inv.status == CANCELLED:
            continue
        day = parse_date(inv.date)
        key = (day.year, day.month)
        monthly[key] = monthly.get(key, ZERO) + to_decimal(inv.total_amount)
    monthly_revenue = [
        {'month': month_label(year, month), 'revenue': _money(total)}
        for (year, month), total in sorted(monthly.items())
    ]

    freight = sum((to_decimal(note.total_freight) for note in trip_notes), ZERO)
    paid = sum((to_decimal(payment.amount) for payment in supplier_payments), ZERO)

    return {
        'totalLorryReceipts': len(lorry_receipts),
        'totalInvoices': len(invoices),
        'outstandingAmount': _money(outstanding),
        'recentActivity': activity,
        'monthlyRevenue': monthly_revenue,
        'supplierOutstanding': _money(freight - paid),
    }
