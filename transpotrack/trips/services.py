"""Trip note workflows: numbering, LR links and supplier payments"""
import logging

from django.db import transaction

from transpotrack.core.exceptions import WorkflowError
from transpotrack.core.utils import create_audit_log, generate_reference_number
from .models import TripNote, SupplierPayment

logger = logging.getLogger(__name__)


def _unique_ids(ids):
    return list(dict.fromkeys(ids or []))


def ensure_lrs_not_linked_elsewhere(lr_ids, trip_note_id=None):
    """An LR travels on one trip: refuse LRs another trip note already lists"""
    if not lr_ids:
        return
    wanted = set(lr_ids)
    taken = []
    notes = TripNote.objects.all()
    if trip_note_id:
        notes = notes.exclude(pk=trip_note_id)
    for note in notes:
        clash = wanted.intersection(note.linked_lr_ids or [])
        if clash:
            taken.extend(f"{lr_id} (on {note.note_id or note.id})" for lr_id in sorted(clash))
    if taken:
        raise WorkflowError({'linkedLrIds': f"Already linked to another trip note: {', '.join(taken)}"})


def create_trip_note(serializer, request=None):
    data = serializer.validated_data
    lr_ids = _unique_ids(data.get('linked_lr_ids'))
    extra = {'linked_lr_ids': lr_ids}
    if not data.get('note_id'):
        extra['note_id'] = generate_reference_number('TN')

    with transaction.atomic():
        ensure_lrs_not_linked_elsewhere(lr_ids, trip_note_id=data.get('id'))
        note = serializer.save(**extra)
        create_audit_log(
            request=request,
            action='create',
            model_name='TripNote',
            object_id=note.id,
            object_reference=note.note_id,
            changes={'supplier_id': note.supplier_id, 'total_freight': str(note.total_freight),
                     'linked_lr_ids': lr_ids},
        )
    logger.info(f"Trip note created: {note.note_id} ({note.id}) for supplier {note.supplier_id}")
    return note


def update_trip_note(serializer, request=None):
    data = serializer.validated_data
    extra = {}
    if 'linked_lr_ids' in data:
        extra['linked_lr_ids'] = _unique_ids(data['linked_lr_ids'])

    with transaction.atomic():
        ensure_lrs_not_linked_elsewhere(extra.get('linked_lr_ids'), trip_note_id=serializer.instance.id)
        note = serializer.save(**extra)
    logger.info(f"Trip note updated: {note.note_id} ({note.id}) status {note.status}")
    return note


def delete_trip_note(note, request=None):
    """Delete a trip note together with the supplier payments made against it"""
    note_id = note.id
    with transaction.atomic():
        payments_removed = SupplierPayment.objects.filter(trip_note_id=note_id).delete()[0]
        create_audit_log(
            request=request,
            action='delete',
            model_name='TripNote',
            object_id=note_id,
            object_reference=note.note_id,
            changes={'payments_removed': payments_removed},
        )
        note.delete()
    logger.info(f"Trip note deleted: {note.note_id} ({note_id}), {payments_removed} supplier payment(s) removed")


def record_supplier_payment(serializer, request=None):
    with transaction.atomic():
        payment = serializer.save()
        create_audit_log(
            request=request,
            action='payment_add',
            model_name='SupplierPayment',
            object_id=payment.id,
            object_reference=payment.trip_note_id,
            changes={'amount': str(payment.amount), 'type': payment.payment_type, 'method': payment.method},
        )
    logger.info(f"Supplier payment {payment.id} of {payment.amount} ({payment.payment_type}) on {payment.trip_note_id}")
    return payment
