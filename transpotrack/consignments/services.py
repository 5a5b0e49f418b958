"""
Lorry receipt workflows: freight totals, payment status and LR payments.

Every function that writes runs inside one transaction so an LR and its
payments never disagree about amountPaid.
"""
import logging
from decimal import Decimal

from django.db import transaction

from transpotrack.billing.models import Invoice
from transpotrack.core.company import get_company_settings
from transpotrack.core.utils import (
    create_audit_log, ensure_payment_amount, generate_reference_number, quantize, to_decimal,
)
from transpotrack.trips.models import TripNote
from .models import LorryReceipt, LorryReceiptPayment

logger = logging.getLogger(__name__)

FREIGHT_FIELDS = ('basic_freight', 'other_charges', 'gst_details')


def calculate_lr_total(basic_freight, other_charges=None, gst_details=None):
    """basicFreight + sum(otherCharges.amount) + cgst + sgst + igst"""
    total = to_decimal(basic_freight)
    for charge in other_charges or []:
        total += to_decimal(charge.get('amount'))
    gst = gst_details or {}
    for key in ('cgst', 'sgst', 'igst'):
        total += to_decimal(gst.get(key))
    return quantize(total)


def get_lr_payment_status(lr):
    """Collection status of an LR; 'To be billed' freight is collected through invoices"""
    if lr.freight_type == 'To be billed':
        return 'To be Billed'
    paid = to_decimal(lr.amount_paid)
    if paid >= to_decimal(lr.total_amount):
        return 'Paid'
    if paid > 0:
        return 'Partially Paid'
    return 'Unpaid'


def create_lorry_receipt(serializer, request=None):
    """Save a new LR with generated number, computed total and document defaults"""
    data = serializer.validated_data
    extra = {'amount_paid': Decimal('0.00'), 'invoice_id': None}

    if not data.get('lr_number'):
        extra['lr_number'] = generate_reference_number('LR')
    if data.get('total_amount') is None:
        extra['total_amount'] = calculate_lr_total(
            data.get('basic_freight'), data.get('other_charges'), data.get('gst_details')
        )

    defaults = get_company_settings()
    if not data.get('risk_type'):
        extra['risk_type'] = defaults['defaultRiskType']
    if not data.get('terms_and_conditions'):
        extra['terms_and_conditions'] = defaults['defaultTerms']
    if not data.get('remarks'):
        extra['remarks'] = defaults['defaultRemarks']

    with transaction.atomic():
        lr = serializer.save(**extra)
        create_audit_log(
            request=request,
            action='create',
            model_name='LorryReceipt',
            object_id=lr.id,
            object_reference=lr.lr_number,
            changes={'total_amount': str(lr.total_amount), 'freight_type': lr.freight_type},
        )
    logger.info(f"LR created: {lr.lr_number} ({lr.id}) total {lr.total_amount}")
    return lr


def update_lorry_receipt(serializer, request=None):
    """Apply an update; the total follows the freight fields unless it was sent explicitly"""
    data = serializer.validated_data
    extra = {}
    if 'total_amount' not in data and any(field in data for field in FREIGHT_FIELDS):
        lr = serializer.instance
        extra['total_amount'] = calculate_lr_total(
            data.get('basic_freight', lr.basic_freight),
            data.get('other_charges', lr.other_charges),
            data.get('gst_details', lr.gst_details),
        )

    with transaction.atomic():
        lr = serializer.save(**extra)
    logger.info(f"LR updated: {lr.lr_number} ({lr.id})")
    return lr


def delete_lorry_receipt(lr, request=None):
    """
    Delete an LR together with its LR payments, and drop it from any invoice
    or trip note that lists it.
    """
    lr_id = lr.id
    with transaction.atomic():
        invoice = Invoice.objects.select_for_update().filter(pk=lr.invoice_id).first() if lr.invoice_id else None
        if invoice is not None:
            invoice.lr_ids = [linked for linked in invoice.lr_ids if linked != lr_id]
            invoice.save(update_fields=['lr_ids', 'updated_at'])
        # text match narrows the rows, the membership test below is exact
        for note in TripNote.objects.select_for_update().filter(linked_lr_ids__icontains=lr_id):
            if lr_id in (note.linked_lr_ids or []):
                note.linked_lr_ids = [linked for linked in note.linked_lr_ids if linked != lr_id]
                note.save(update_fields=['linked_lr_ids', 'updated_at'])
        payments_removed = LorryReceiptPayment.objects.filter(lr_id=lr_id).delete()[0]
        create_audit_log(
            request=request,
            action='delete',
            model_name='LorryReceipt',
            object_id=lr_id,
            object_reference=lr.lr_number,
            changes={'invoice_id': lr.invoice_id, 'payments_removed': payments_removed},
        )
        lr.delete()
    logger.info(f"LR deleted: {lr.lr_number} ({lr_id}), {payments_removed} LR payment(s) removed")


def _lock_lr(lr_id):
    return LorryReceipt.objects.select_for_update().get(pk=lr_id)


def record_lr_payment(serializer, request=None):
    """Save an LR payment and add it to the LR's amountPaid"""
    data = serializer.validated_data
    with transaction.atomic():
        lr = _lock_lr(data['lr_id'])
        amount = ensure_payment_amount(data['amount'], lr.get_balance_due())
        payment = serializer.save()
        lr.amount_paid = quantize(to_decimal(lr.amount_paid) + amount)
        lr.save(update_fields=['amount_paid', 'updated_at'])
        create_audit_log(
            request=request,
            action='payment_add',
            model_name='LorryReceiptPayment',
            object_id=payment.id,
            object_reference=lr.lr_number,
            changes={'lr_id': lr.id, 'amount': str(amount), 'method': payment.method},
        )
    logger.info(f"LR payment {payment.id} of {amount} recorded against {lr.lr_number}")
    return payment


def update_lr_payment(serializer, request=None):
    """Re-apply an edited LR payment: the old amount comes off, the new one goes on"""
    payment = serializer.instance
    old_lr_id = payment.lr_id
    old_amount = to_decimal(payment.amount)
    data = serializer.validated_data
    new_lr_id = data.get('lr_id', old_lr_id)
    new_amount = to_decimal(data.get('amount', old_amount))

    with transaction.atomic():
        old_lr = LorryReceipt.objects.select_for_update().filter(pk=old_lr_id).first()
        if old_lr is not None:
            old_lr.amount_paid = quantize(max(to_decimal(old_lr.amount_paid) - old_amount, Decimal('0')))
            old_lr.save(update_fields=['amount_paid', 'updated_at'])

        new_lr = _lock_lr(new_lr_id)
        ensure_payment_amount(new_amount, new_lr.get_balance_due())
        payment = serializer.save()
        new_lr.amount_paid = quantize(to_decimal(new_lr.amount_paid) + new_amount)
        new_lr.save(update_fields=['amount_paid', 'updated_at'])
        create_audit_log(
            request=request,
            action='payment_update',
            model_name='LorryReceiptPayment',
            object_id=payment.id,
            object_reference=new_lr.lr_number,
            changes={'old_amount': str(old_amount), 'amount': str(new_amount),
                     'old_lr_id': old_lr_id, 'lr_id': new_lr_id},
        )
    logger.info(f"LR payment {payment.id} updated: {old_amount} -> {new_amount}")
    return payment


def delete_lr_payment(payment, request=None):
    """Delete an LR payment and take it back off the LR's amountPaid"""
    amount = to_decimal(payment.amount)
    with transaction.atomic():
        lr = LorryReceipt.objects.select_for_update().filter(pk=payment.lr_id).first()
        if lr is not None:
            lr.amount_paid = quantize(max(to_decimal(lr.amount_paid) - amount, Decimal('0')))
            lr.save(update_fields=['amount_paid', 'updated_at'])
        create_audit_log(
            request=request,
            action='payment_remove',
            model_name='LorryReceiptPayment',
            object_id=payment.id,
            object_reference=lr.lr_number if lr else None,
            changes={'lr_id': payment.lr_id, 'amount': str(amount)},
        )
        payment.delete()
    logger.info(f"LR payment deleted, {amount} reversed on {payment.lr_id}")
