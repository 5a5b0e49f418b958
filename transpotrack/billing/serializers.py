from rest_framework import serializers
from transpotrack.consignments.models import LorryReceipt
from transpotrack.core.serializers import (
    DocumentSerializer, AddressSerializer, BankDetailsSerializer, MoneyField, check_reference,
)
from .models import Invoice, Payment


class InvoiceLineItemSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, allow_blank=True, default='')
    description = serializers.CharField(required=False, allow_blank=True, default='')
    quantity = serializers.FloatField(required=False, default=0)
    rate = serializers.FloatField(required=False, default=0)
    amount = serializers.FloatField(required=False, default=0)


class ManualInvoiceEntrySerializer(serializers.Serializer):
    id = serializers.CharField(required=False, allow_blank=True, default='')
    lrNumber = serializers.CharField(required=False, allow_blank=True, default='')
    date = serializers.CharField(required=False, allow_blank=True, default='')
    truckNumber = serializers.CharField(required=False, allow_blank=True, default='')
    to = serializers.CharField(required=False, allow_blank=True, default='')
    materialDetails = serializers.CharField(required=False, allow_blank=True, default='')
    articleCount = serializers.FloatField(required=False, default=0)
    totalWeight = serializers.FloatField(required=False, default=0)
    haltingCharge = serializers.FloatField(required=False, default=0)
    extraCharge = serializers.FloatField(required=False, default=0)
    freightAmount = serializers.FloatField(required=False, default=0)
    advanceCash = serializers.FloatField(required=False, default=0)

    def get_fields(self):
        # 'from' is a keyword, so it cannot be declared in the class body
        fields = super().get_fields()
        fields['from'] = serializers.CharField(required=False, allow_blank=True, default='')
        return fields


class InvoiceGstSerializer(serializers.Serializer):
    rate = serializers.FloatField(required=False, default=0, min_value=0)
    isReverseCharge = serializers.BooleanField(required=False, default=False)


class InvoiceTdsSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=['Deduction', 'Addition'], required=False, default='Deduction')
    rate = serializers.FloatField(required=False, default=0, min_value=0, max_value=100)


class LRChargeSerializer(serializers.Serializer):
    """Per-LR adjustments used while pricing an LR-based invoice"""
    lrId = serializers.CharField()
    freightAmount = serializers.FloatField(required=False, default=0)
    weightCharge = serializers.FloatField(required=False, default=0)
    haltingCharge = serializers.FloatField(required=False, default=0)
    extraCharge = serializers.FloatField(required=False, default=0)


class InvoiceSerializer(DocumentSerializer):
    id_prefix = 'inv'
    api_names = {'invoice_type': 'type'}

    lr_ids = serializers.ListField(child=serializers.CharField(), required=False)
    line_items = InvoiceLineItemSerializer(many=True, required=False)
    manual_entries = ManualInvoiceEntrySerializer(many=True, required=False)
    billing_address = AddressSerializer(required=False, allow_null=True)
    bank_details = BankDetailsSerializer(required=False, allow_null=True)
    gst_details = InvoiceGstSerializer(required=False, allow_null=True)
    tds_details = InvoiceTdsSerializer(required=False, allow_null=True)

    class Meta:
        model = Invoice
        fields = [
            'id', 'invoice_number', 'date', 'lr_ids', 'line_items', 'manual_entries',
            'client_id', 'billing_address', 'total_amount', 'amount_paid', 'due_date',
            'status', 'invoice_type', 'hsn_code', 'remarks', 'bank_details',
            'total_trip_amount', 'discount', 'gst_details', 'tds_details', 'round_off',
            'advance_received', 'gst_filed_by', 'last_reminder_sent',
        ]
        read_only_fields = ['amount_paid', 'last_reminder_sent']
        extra_kwargs = {'id': {'required': False}}

    def validate(self, attrs):
        lr_ids = attrs.get('lr_ids') or []
        if lr_ids:
            found = set(LorryReceipt.objects.filter(pk__in=lr_ids).values_list('id', flat=True))
            missing = [lr_id for lr_id in lr_ids if lr_id not in found]
            if missing:
                raise serializers.ValidationError({'lrIds': f"Lorry receipts not found: {', '.join(missing)}"})
        return attrs


class PaymentSerializer(DocumentSerializer):
    id_prefix = 'pay'

    class Meta:
        model = Payment
        fields = ['id', 'invoice_id', 'date', 'amount', 'method']
        extra_kwargs = {'id': {'required': False}}

    def validate(self, attrs):
        check_reference(attrs, 'invoice_id', Invoice, 'Invoice')
        if 'amount' in attrs and attrs['amount'] <= 0:
            raise serializers.ValidationError({'amount': 'Amount must be greater than zero.'})
        return attrs


class InvoiceCalculationSerializer(serializers.Serializer):
    """Input of the invoice pricing endpoint"""
    type = serializers.ChoiceField(choices=['LR-based', 'Manual'], required=False, default='LR-based')
    lrIds = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    lrCharges = LRChargeSerializer(many=True, required=False, default=list)
    manualEntries = ManualInvoiceEntrySerializer(many=True, required=False, default=list)
    discount = MoneyField(required=False, default=0)
    gstDetails = InvoiceGstSerializer(required=False, allow_null=True, default=None)
    tdsDetails = InvoiceTdsSerializer(required=False, allow_null=True, default=None)
    applyRoundOff = serializers.BooleanField(required=False, default=False)
    advanceReceived = MoneyField(required=False, default=0)
