from rest_framework import serializers
from transpotrack.core.serializers import (
    DocumentSerializer, AddressSerializer, AttachmentSerializer, check_reference,
    PAYMENT_METHOD_CHOICES,
)
from transpotrack.parties.models import Client
from .models import LorryReceipt, LorryReceiptPayment


class MaterialDetailSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, default='')
    packagingType = serializers.CharField(required=False, allow_blank=True, default='')
    articleCount = serializers.FloatField(required=False, default=0)
    actualWeight = serializers.FloatField(required=False, default=0)
    actualWeightUnit = serializers.ChoiceField(choices=['MTS', 'KGS'], required=False, default='MTS')
    chargedWeight = serializers.FloatField(required=False, default=0)
    chargedWeightUnit = serializers.ChoiceField(choices=['MTS', 'KGS'], required=False, default='MTS')
    rate = serializers.FloatField(required=False, default=0)
    rateUnit = serializers.ChoiceField(choices=['Per MTS', 'Per KGS'], required=False, default='Per MTS')
    hsnCode = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class GoodsInvoiceSerializer(serializers.Serializer):
    invoiceNumber = serializers.CharField(required=False, allow_blank=True, default='')
    date = serializers.CharField(required=False, allow_blank=True, default='')
    amount = serializers.FloatField(required=False, default=0)


class EWayBillSerializer(serializers.Serializer):
    ewbNumber = serializers.CharField(required=False, allow_blank=True, default='')
    expiryDate = serializers.CharField(required=False, allow_blank=True, default='')


class OtherChargeSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, default='')
    amount = serializers.FloatField(required=False, default=0)


class InsuranceDetailsSerializer(serializers.Serializer):
    company = serializers.CharField(required=False, allow_blank=True, default='')
    policyNumber = serializers.CharField(required=False, allow_blank=True, default='')
    date = serializers.CharField(required=False, allow_blank=True, default='')
    amount = serializers.FloatField(required=False, default=0)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class DriverSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, default='')
    licenseNumber = serializers.CharField(required=False, allow_blank=True, default='')
    contact = serializers.CharField(required=False, allow_blank=True, default='')


class LRGstSerializer(serializers.Serializer):
    cgst = serializers.FloatField(required=False, default=0)
    sgst = serializers.FloatField(required=False, default=0)
    igst = serializers.FloatField(required=False, default=0)


class AdvanceSerializer(serializers.Serializer):
    amount = serializers.FloatField(required=False, default=0)
    mode = serializers.ChoiceField(choices=PAYMENT_METHOD_CHOICES, required=False, default='Cash')


class LRTdsSerializer(serializers.Serializer):
    percentage = serializers.FloatField(required=False, default=0, min_value=0, max_value=100)


class DemurrageSerializer(serializers.Serializer):
    charge = serializers.FloatField(required=False, default=0)
    chargeUnit = serializers.ChoiceField(choices=['Per Hour', 'Per Day'], required=False, default='Per Day')
    applicableAfter = serializers.FloatField(required=False, default=0)
    applicableAfterUnit = serializers.ChoiceField(choices=['hour', 'day'], required=False, default='day')
    loadingDate = serializers.CharField(required=False, allow_blank=True, default='')
    reportingDate = serializers.CharField(required=False, allow_blank=True, default='')


class LorryReceiptSerializer(DocumentSerializer):
    id_prefix = 'lr'
    api_names = {
        'from_location': 'from',
        'to_location': 'to',
        'eway_bills': 'eWayBills',
        'epod': 'ePod',
    }

    consignor = AddressSerializer()
    consignee = AddressSerializer()
    loading_addresses = AddressSerializer(many=True, required=False)
    delivery_addresses = AddressSerializer(many=True, required=False)
    driver = DriverSerializer(required=False, allow_null=True)
    materials = MaterialDetailSerializer(many=True, required=False)
    goods_invoices = GoodsInvoiceSerializer(many=True, required=False)
    eway_bills = EWayBillSerializer(many=True, required=False)
    other_charges = OtherChargeSerializer(many=True, required=False)
    gst_details = LRGstSerializer(required=False, allow_null=True)
    advance_details = AdvanceSerializer(required=False, allow_null=True)
    tds_details = LRTdsSerializer(required=False, allow_null=True)
    insurance_details = InsuranceDetailsSerializer(required=False, allow_null=True)
    demurrage = DemurrageSerializer(required=False, allow_null=True)
    epod = AttachmentSerializer(required=False, allow_null=True)
    attachments = AttachmentSerializer(many=True, required=False)

    class Meta:
        model = LorryReceipt
        fields = [
            'id', 'lr_number', 'date',
            'consignor_id', 'consignor', 'consignee_id', 'consignee',
            'loading_address_same_as_consignor', 'loading_addresses',
            'delivery_address_same_as_consignee', 'delivery_addresses', 'delivery_type',
            'truck_number', 'vehicle_type', 'from_location', 'to_location',
            'weight_guarantee', 'weight_guarantee_unit', 'driver', 'load_type',
            'materials', 'goods_invoice_type', 'goods_invoices', 'eway_bills', 'show_invoice_in_column',
            'freight_type', 'basic_freight', 'other_charges', 'gst_details', 'advance_details',
            'tds_details', 'total_amount', 'freight_pay_by', 'hide_freight',
            'insurance', 'insurance_details', 'risk_type', 'mode_of_transport', 'demurrage',
            'remarks', 'status', 'invoice_id', 'amount_paid', 'epod', 'attachments',
            'terms_and_conditions',
        ]
        read_only_fields = ['invoice_id', 'amount_paid']
        extra_kwargs = {'id': {'required': False}}

    def validate(self, attrs):
        check_reference(attrs, 'consignor_id', Client, 'Consignor client')
        check_reference(attrs, 'consignee_id', Client, 'Consignee client')
        return attrs


class LorryReceiptPaymentSerializer(DocumentSerializer):
    id_prefix = 'lrpay'

    class Meta:
        model = LorryReceiptPayment
        fields = ['id', 'lr_id', 'date', 'amount', 'method']
        extra_kwargs = {'id': {'required': False}}

    def validate(self, attrs):
        check_reference(attrs, 'lr_id', LorryReceipt, 'Lorry receipt')
        if 'amount' in attrs and attrs['amount'] <= 0:
            raise serializers.ValidationError({'amount': 'Amount must be greater than zero.'})
        return attrs
