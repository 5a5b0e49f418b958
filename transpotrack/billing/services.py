"""
Invoice workflows: totals, LR linking and invoice payments.

Invoices own the link to their LRs (LorryReceipt.invoice_id). Creating,
editing, cancelling or deleting an invoice keeps those links in step, and
payments keep Invoice.amount_paid equal to the sum of the invoice's payments.
"""
import logging
from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP

from django.db import transaction
from django.utils import timezone

from transpotrack.consignments.models import LorryReceipt
from transpotrack.core.company import get_company_settings
from transpotrack.core.exceptions import WorkflowError
from transpotrack.core.utils import (
    create_audit_log, ensure_payment_amount, generate_reference_number, quantize, to_decimal,
)
from .models import Invoice, Payment

logger = logging.getLogger('transpotrack.billing')

DUE_DAYS = 15
HUNDRED = Decimal('100')
CALCULATION_FIELDS = ('lr_ids', 'manual_entries', 'discount', 'gst_details', 'tds_details', 'round_off')

ONES = ['', 'one', 'two', 'three', 'four', 'five', 'six', 'seven', 'eight', 'nine', 'ten',
        'eleven', 'twelve', 'thirteen', 'fourteen', 'fifteen', 'sixteen', 'seventeen',
        'eighteen', 'nineteen']
TENS = ['', '', 'twenty', 'thirty', 'forty', 'fifty', 'sixty', 'seventy', 'eighty', 'ninety']


def _below_thousand_in_words(n):
    words = []
    if n > 99:
        words += [ONES[n // 100], 'hundred']
        n %= 100
    if n > 19:
        words += [TENS[n // 10], ONES[n % 10]]
    else:
        words.append(ONES[n])
    return [word for word in words if word]


def amount_in_words(amount):
    """
    Indian-system rupee amount in words, e.g. 123456.50 ->
    'ONE LAKH TWENTY THREE THOUSAND FOUR HUNDRED FIFTY SIX AND PAISE FIFTY ONLY'
    """
    amount = quantize(amount)
    if amount < 0:
        return 'MINUS ' + amount_in_words(-amount)
    rupees = int(amount)
    paise = int((amount - rupees) * 100)
    if rupees == 0 and paise == 0:
        return 'ZERO ONLY'

    words = []
    if rupees > 9999999:
        words += _below_thousand_in_words(rupees // 10000000) + ['crore']
    rupees %= 10000000
    if rupees > 99999:
        words += _below_thousand_in_words(rupees // 100000) + ['lakh']
    rupees %= 100000
    if rupees > 999:
        words += _below_thousand_in_words(rupees // 1000) + ['thousand']
    rupees %= 1000
    words += _below_thousand_in_words(rupees)
    if paise > 0:
        words += ['and', 'paise'] + _below_thousand_in_words(paise)
    return ' '.join(words).upper() + ' ONLY'


def calculate_invoice_totals(invoice_type='LR-based', lr_charges=None, manual_entries=None,
                             discount=None, gst_details=None, tds_details=None,
                             apply_round_off=False, advance_received=None):
    """
    Work out an invoice's figures.

    lr_charges: one dict per LR with totalAmount and optional freightAmount,
    weightCharge, haltingCharge and extraCharge overrides.
    """
    if invoice_type == 'Manual':
        trip_total = sum((to_decimal(entry.get('freightAmount')) for entry in manual_entries or []), Decimal('0'))
    else:
        trip_total = Decimal('0')
        for lr in lr_charges or []:
            freight = to_decimal(lr.get('freightAmount')) or to_decimal(lr.get('totalAmount'))
            trip_total += (freight + to_decimal(lr.get('weightCharge'))
                           + to_decimal(lr.get('haltingCharge')) + to_decimal(lr.get('extraCharge')))

    discount = to_decimal(discount)
    taxable = trip_total - discount
    total = taxable

    gst_amount = Decimal('0')
    gst = gst_details or {}
    gst_rate = to_decimal(gst.get('rate'))
    if gst_rate > 0 and not gst.get('isReverseCharge'):
        gst_amount = taxable * gst_rate / HUNDRED
        total += gst_amount

    tds_amount = Decimal('0')
    if tds_details:
        tds_amount = taxable * to_decimal(tds_details.get('rate')) / HUNDRED
        if tds_details.get('type') == 'Addition':
            total += tds_amount
        else:
            total -= tds_amount

    round_off = Decimal('0')
    if apply_round_off:
        round_off = total.quantize(Decimal('1'), rounding=ROUND_HALF_UP) - total
    total += round_off

    payable = total - to_decimal(advance_received)
    return {
        'totalTripAmount': quantize(trip_total),
        'discount': quantize(discount),
        'taxableAmount': quantize(taxable),
        'gstAmount': quantize(gst_amount),
        'tdsAmount': quantize(tds_amount),
        'roundOff': quantize(round_off),
        'totalAmount': quantize(total),
        'payableAmount': quantize(payable),
        'amountInWords': amount_in_words(total),
    }


def lr_charges_for(lr_ids, overrides=None):
    """Charge dicts for calculate_invoice_totals, in lr_ids order"""
    overrides = {item.get('lrId'): item for item in overrides or [] if item.get('lrId')}
    lrs = LorryReceipt.objects.in_bulk(lr_ids)
    charges = []
    for lr_id in lr_ids:
        lr = lrs.get(lr_id)
        if lr is None:
            continue
        charge = {'totalAmount': lr.total_amount}
        charge.update(overrides.get(lr_id, {}))
        charges.append(charge)
    return charges


def get_payment_status(invoice):
    """Status implied by amountPaid; Cancelled invoices stay Cancelled"""
    if invoice.status == 'Cancelled':
        return 'Cancelled'
    paid = to_decimal(invoice.amount_paid)
    if paid <= 0:
        return 'Unpaid'
    if paid >= to_decimal(invoice.total_amount):
        return 'Paid'
    return 'Partially Paid'


def generate_invoice_number(invoice_type):
    number = generate_reference_number('INV')
    return f"MAN-{number}" if invoice_type == 'Manual' else number


def _unique_ids(ids):
    return list(dict.fromkeys(ids or []))


def _lock_lrs_for_billing(lr_ids, invoice_id=None):
    """Lock the LRs and make sure none of them is billed on another invoice"""
    lrs = list(LorryReceipt.objects.select_for_update().filter(pk__in=lr_ids))
    found = {lr.id for lr in lrs}
    missing = [lr_id for lr_id in lr_ids if lr_id not in found]
    if missing:
        raise WorkflowError({'lrIds': f"Lorry receipts not found: {', '.join(missing)}"})
    billed = [lr.lr_number or lr.id for lr in lrs if lr.invoice_id and lr.invoice_id != invoice_id]
    if billed:
        raise WorkflowError({'lrIds': f"Already billed on another invoice: {', '.join(billed)}"})
    return lrs


def _apply_calculated_totals(data, extra, instance=None):
    """Fill totalTripAmount/roundOff/totalAmount into `extra` from the posted figures"""
    def current(key, default=None):
        if key in extra:
            return extra[key]
        if key in data:
            return data[key]
        return getattr(instance, key, default) if instance is not None else default

    invoice_type = current('invoice_type', 'LR-based')
    round_off = current('round_off')
    totals = calculate_invoice_totals(
        invoice_type=invoice_type,
        lr_charges=lr_charges_for(current('lr_ids') or []),
        manual_entries=current('manual_entries') or [],
        discount=current('discount'),
        gst_details=current('gst_details'),
        tds_details=current('tds_details'),
        apply_round_off=round_off is not None,
        advance_received=current('advance_received'),
    )
    extra['total_trip_amount'] = totals['totalTripAmount']
    extra['total_amount'] = totals['totalAmount']
    if round_off is not None:
        extra['round_off'] = totals['roundOff']
    return totals


def _link_lrs(lrs, invoice, request):
    for lr in lrs:
        if lr.invoice_id == invoice.id:
            continue
        lr.invoice_id = invoice.id
        lr.save(update_fields=['invoice_id', 'updated_at'])
        create_audit_log(
            request=request,
            action='lr_link',
            model_name='LorryReceipt',
            object_id=lr.id,
            object_reference=lr.lr_number,
            changes={'invoice_id': invoice.id, 'invoice_number': invoice.invoice_number},
        )


def _unlink_lrs(invoice, request, lr_ids=None):
    """Clear invoice_id on LRs pointing at `invoice` (all of them, or only `lr_ids`)"""
    queryset = LorryReceipt.objects.select_for_update().filter(invoice_id=invoice.id)
    if lr_ids is not None:
        queryset = queryset.filter(pk__in=lr_ids)
    unlinked = []
    for lr in queryset:
        lr.invoice_id = None
        lr.save(update_fields=['invoice_id', 'updated_at'])
        unlinked.append(lr.id)
        create_audit_log(
            request=request,
            action='lr_unlink',
            model_name='LorryReceipt',
            object_id=lr.id,
            object_reference=lr.lr_number,
            changes={'invoice_id': invoice.id, 'invoice_number': invoice.invoice_number},
        )
    return unlinked


def create_invoice(serializer, request=None):
    """
    Save a new invoice as Unpaid with nothing received, fill in its number,
    due date, bank details and totals when omitted, and link its LRs.
    """
    data = serializer.validated_data
    invoice_type = data.get('invoice_type', 'LR-based')
    lr_ids = _unique_ids(data.get('lr_ids'))
    extra = {
        'status': 'Unpaid',
        'amount_paid': Decimal('0.00'),
        'lr_ids': lr_ids,
    }
    if not data.get('invoice_number'):
        extra['invoice_number'] = generate_invoice_number(invoice_type)
    if not data.get('due_date'):
        extra['due_date'] = data['date'] + timedelta(days=DUE_DAYS)
    if not data.get('bank_details'):
        extra['bank_details'] = get_company_settings()['defaultBankDetails']

    with transaction.atomic():
        lrs = _lock_lrs_for_billing(lr_ids, invoice_id=data.get('id'))
        if data.get('total_amount') is None:
            _apply_calculated_totals(data, extra)
        invoice = serializer.save(**extra)
        _link_lrs(lrs, invoice, request)
        create_audit_log(
            request=request,
            action='invoice_create',
            model_name='Invoice',
            object_id=invoice.id,
            object_reference=invoice.invoice_number,
            changes={'client_id': invoice.client_id, 'total_amount': str(invoice.total_amount),
                     'lr_ids': lr_ids},
        )
    logger.info(f"Invoice created: {invoice.invoice_number} ({invoice.id}) for {invoice.client_id}, "
                f"total {invoice.total_amount}, {len(lr_ids)} LR(s) linked")
    return invoice


def update_invoice(serializer, request=None):
    """
    Apply an edit. LRs added to lrIds are linked, LRs removed are unlinked,
    and a Cancelled invoice releases every LR still pointing at it.
    """
    invoice = serializer.instance
    old_status = invoice.status
    old_lr_ids = list(invoice.lr_ids or [])
    data = serializer.validated_data
    extra = {}
    if 'lr_ids' in data:
        extra['lr_ids'] = _unique_ids(data['lr_ids'])
    new_lr_ids = extra.get('lr_ids', old_lr_ids)
    new_status = data.get('status', old_status)

    with transaction.atomic():
        lrs = []
        if new_status != 'Cancelled':
            lrs = _lock_lrs_for_billing(new_lr_ids, invoice_id=invoice.id)
        if 'total_amount' not in data and any(field in data for field in CALCULATION_FIELDS):
            _apply_calculated_totals(data, extra, instance=invoice)
        invoice = serializer.save(**extra)

        if invoice.status == 'Cancelled':
            unlinked = _unlink_lrs(invoice, request)
        else:
            removed = [lr_id for lr_id in old_lr_ids if lr_id not in new_lr_ids]
            unlinked = _unlink_lrs(invoice, request, lr_ids=removed) if removed else []
            _link_lrs(lrs, invoice, request)
            status_now = get_payment_status(invoice)
            if status_now != invoice.status:
                invoice.status = status_now
                invoice.save(update_fields=['status', 'updated_at'])

        action = 'invoice_cancel' if invoice.status == 'Cancelled' and old_status != 'Cancelled' else 'invoice_update'
        create_audit_log(
            request=request,
            action=action,
            model_name='Invoice',
            object_id=invoice.id,
            object_reference=invoice.invoice_number,
            changes={'old_status': old_status, 'status': invoice.status,
                     'lr_ids': new_lr_ids, 'unlinked_lr_ids': unlinked},
        )
    logger.info(f"Invoice updated: {invoice.invoice_number} ({invoice.id}) status {old_status} -> {invoice.status}")
    return invoice


def cancel_invoice(invoice, request=None):
    """Mark an invoice Cancelled and release its LRs"""
    with transaction.atomic():
        old_status = invoice.status
        invoice.status = 'Cancelled'
        invoice.save(update_fields=['status', 'updated_at'])
        unlinked = _unlink_lrs(invoice, request)
        create_audit_log(
            request=request,
            action='invoice_cancel',
            model_name='Invoice',
            object_id=invoice.id,
            object_reference=invoice.invoice_number,
            changes={'old_status': old_status, 'unlinked_lr_ids': unlinked},
        )
    logger.info(f"Invoice cancelled: {invoice.invoice_number} ({invoice.id}), {len(unlinked)} LR(s) released")
    return invoice


def delete_invoice(invoice, request=None):
    """Delete an invoice with its payments; its LRs become unbilled again"""
    invoice_id = invoice.id
    with transaction.atomic():
        unlinked = _unlink_lrs(invoice, request)
        payments_removed = Payment.objects.filter(invoice_id=invoice_id).delete()[0]
        create_audit_log(
            request=request,
            action='delete',
            model_name='Invoice',
            object_id=invoice_id,
            object_reference=invoice.invoice_number,
            changes={'unlinked_lr_ids': unlinked, 'payments_removed': payments_removed},
        )
        invoice.delete()
    logger.info(f"Invoice deleted: {invoice.invoice_number} ({invoice_id}), "
                f"{len(unlinked)} LR(s) released, {payments_removed} payment(s) removed")


def mark_reminder_sent(invoice, request=None):
    invoice.last_reminder_sent = timezone.now()
    invoice.save(update_fields=['last_reminder_sent', 'updated_at'])
    logger.info(f"Payment reminder recorded for invoice {invoice.invoice_number}")
    return invoice


def _lock_invoice_for_payment(invoice_id):
    invoice = Invoice.objects.select_for_update().get(pk=invoice_id)
    if invoice.status == 'Cancelled':
        raise WorkflowError({'invoiceId': f"Invoice {invoice.invoice_number} is cancelled."})
    return invoice


def _set_amount_paid(invoice, amount_paid):
    invoice.amount_paid = quantize(max(amount_paid, Decimal('0')))
    invoice.status = get_payment_status(invoice)
    invoice.save(update_fields=['amount_paid', 'status', 'updated_at'])


def record_payment(serializer, request=None):
    """Save a payment and add it to the invoice's amountPaid"""
    data = serializer.validated_data
    with transaction.atomic():
        invoice = _lock_invoice_for_payment(data['invoice_id'])
        amount = ensure_payment_amount(data['amount'], invoice.get_balance_due())
        payment = serializer.save()
        _set_amount_paid(invoice, to_decimal(invoice.amount_paid) + amount)
        create_audit_log(
            request=request,
            action='payment_add',
            model_name='Payment',
            object_id=payment.id,
            object_reference=invoice.invoice_number,
            changes={'invoice_id': invoice.id, 'amount': str(amount), 'method': payment.method,
                     'status': invoice.status},
        )
    logger.info(f"Payment {payment.id} of {amount} recorded against {invoice.invoice_number}, now {invoice.status}")
    return payment


def update_payment(serializer, request=None):
    """Re-apply an edited payment: the old amount comes off, the new one goes on"""
    payment = serializer.instance
    old_invoice_id = payment.invoice_id
    old_amount = to_decimal(payment.amount)
    data = serializer.validated_data
    new_invoice_id = data.get('invoice_id', old_invoice_id)
    new_amount = to_decimal(data.get('amount', old_amount))

    with transaction.atomic():
        old_invoice = Invoice.objects.select_for_update().filter(pk=old_invoice_id).first()
        if old_invoice is not None:
            _set_amount_paid(old_invoice, to_decimal(old_invoice.amount_paid) - old_amount)

        invoice = _lock_invoice_for_payment(new_invoice_id)
        ensure_payment_amount(new_amount, invoice.get_balance_due())
        payment = serializer.save()
        _set_amount_paid(invoice, to_decimal(invoice.amount_paid) + new_amount)
        create_audit_log(
            request=request,
            action='payment_update',
            model_name='Payment',
            object_id=payment.id,
            object_reference=invoice.invoice_number,
            changes={'old_amount': str(old_amount), 'amount': str(new_amount),
                     'old_invoice_id': old_invoice_id, 'invoice_id': new_invoice_id},
        )
    logger.info(f"Payment {payment.id} updated: {old_amount} -> {new_amount}")
    return payment


def delete_payment(payment, request=None):
    """Delete a payment and take it back off the invoice's amountPaid"""
    amount = to_decimal(payment.amount)
    invoice_id = payment.invoice_id
    with transaction.atomic():
        invoice = Invoice.objects.select_for_update().filter(pk=invoice_id).first()
        if invoice is not None:
            _set_amount_paid(invoice, to_decimal(invoice.amount_paid) - amount)
        create_audit_log(
            request=request,
            action='payment_remove',
            model_name='Payment',
            object_id=payment.id,
            object_reference=invoice.invoice_number if invoice else None,
            changes={'invoice_id': invoice_id, 'amount': str(amount)},
        )
        payment.delete()
    logger.info(f"Payment deleted, {amount} reversed on invoice {invoice_id}")


def recalculate_invoice(invoice):
    """Rebuild amountPaid/status from the invoice's payments; returns True when something changed"""
    paid = sum((p.amount for p in Payment.objects.filter(invoice_id=invoice.id)), Decimal('0'))
    paid = quantize(paid)
    old = (invoice.amount_paid, invoice.status)
    invoice.amount_paid = paid
    invoice.status = get_payment_status(invoice)
    return old != (invoice.amount_paid, invoice.status)
