from rest_framework import serializers
from transpotrack.consignments.models import LorryReceipt
from transpotrack.core.serializers import DocumentSerializer, AttachmentSerializer, check_reference
from transpotrack.parties.models import Supplier
from .models import TripNote, SupplierPayment


class TripNoteSerializer(DocumentSerializer):
    id_prefix = 'tn'
    api_names = {
        'from_location': 'from',
        'to_location': 'to',
    }

    linked_lr_ids = serializers.ListField(child=serializers.CharField(), required=False)
    pod = AttachmentSerializer(required=False, allow_null=True)

    class Meta:
        model = TripNote
        fields = [
            'id', 'note_id', 'date', 'supplier_id', 'vehicle_number', 'vehicle_type',
            'from_location', 'to_location', 'driver_name', 'driver_contact',
            'total_freight', 'payment_details',
            'loading_contact_person', 'loading_contact_number',
            'unloading_contact_person', 'unloading_contact_number',
            'remarks', 'status', 'linked_lr_ids', 'pod',
        ]
        extra_kwargs = {'id': {'required': False}}

    def validate(self, attrs):
        check_reference(attrs, 'supplier_id', Supplier, 'Supplier')
        lr_ids = attrs.get('linked_lr_ids') or []
        if lr_ids:
            found = set(LorryReceipt.objects.filter(pk__in=lr_ids).values_list('id', flat=True))
            missing = [lr_id for lr_id in lr_ids if lr_id not in found]
            if missing:
                raise serializers.ValidationError({'linkedLrIds': f"Lorry receipts not found: {', '.join(missing)}"})
        if 'total_freight' in attrs and attrs['total_freight'] < 0:
            raise serializers.ValidationError({'totalFreight': 'Freight cannot be negative.'})
        return attrs


class SupplierPaymentSerializer(DocumentSerializer):
    id_prefix = 'spay'
    api_names = {'payment_type': 'type'}

    class Meta:
        model = SupplierPayment
        fields = ['id', 'trip_note_id', 'date', 'amount', 'payment_type', 'method']
        extra_kwargs = {'id': {'required': False}}

    def validate(self, attrs):
        check_reference(attrs, 'trip_note_id', TripNote, 'Trip note')
        if 'amount' in attrs and attrs['amount'] <= 0:
            raise serializers.ValidationError({'amount': 'Amount must be greater than zero.'})
        return attrs
