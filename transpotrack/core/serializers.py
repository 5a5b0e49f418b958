from decimal import Decimal, ROUND_HALF_UP

from django.db import models
from rest_framework import serializers

from .models import AuditLog
from .utils import generate_document_id

PAYMENT_METHOD_CHOICES = ['Cash', 'Bank Transfer', 'Cheque']


def to_camel(name):
    """lr_ids -> lrIds"""
    first, *rest = name.split('_')
    return first + ''.join(part.capitalize() for part in rest)


class MoneyField(serializers.DecimalField):
    """Decimal field that rounds to two places instead of rejecting longer input"""

    def __init__(self, **kwargs):
        kwargs.setdefault('max_digits', 14)
        kwargs.setdefault('decimal_places', 2)
        super().__init__(**kwargs)

    def validate_precision(self, value):
        value = value.quantize(Decimal(1).scaleb(-self.decimal_places), rounding=ROUND_HALF_UP)
        return super().validate_precision(value)


class DocumentDateField(serializers.DateField):
    """Accepts plain dates as well as full ISO timestamps (only the date part is kept)"""

    def to_internal_value(self, value):
        if isinstance(value, str) and len(value) > 10 and value[4:5] == '-':
            value = value[:10]
        return super().to_internal_value(value)


class DocumentSerializer(serializers.ModelSerializer):
    """
    Base serializer for the string-keyed documents.

    Model attributes are snake_case; the API speaks camelCase. Every field is
    renamed on the way out and mapped back through `source` on the way in, so
    `validated_data` keeps the model attribute names. `api_names` overrides the
    automatic camelCase name (e.g. from_location -> from).

    Nested value objects are JSON columns, so create/update write them
    directly instead of going through DRF's nested-write machinery.
    """
    id_prefix = None
    api_names = {}

    serializer_field_mapping = dict(serializers.ModelSerializer.serializer_field_mapping)
    serializer_field_mapping[models.DecimalField] = MoneyField
    serializer_field_mapping[models.DateField] = DocumentDateField

    def get_fields(self):
        fields = super().get_fields()
        renamed = {}
        for name, field in fields.items():
            api_name = self.api_names.get(name, to_camel(name))
            if api_name != name and field.source is None:
                field.source = name
            renamed[api_name] = field
        return renamed

    def create(self, validated_data):
        model = self.Meta.model
        if not validated_data.get('id'):
            validated_data['id'] = generate_document_id(model, self.id_prefix)
        return model.objects.create(**validated_data)

    def update(self, instance, validated_data):
        validated_data.pop('id', None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()
        return instance


def check_reference(attrs, key, model, label):
    """Raise a field error when attrs[key] is set but names no existing `model` document"""
    value = attrs.get(key)
    if value and not model.objects.filter(pk=value).exists():
        raise serializers.ValidationError({to_camel(key): f"{label} '{value}' does not exist."})
    return value


# Value objects stored inside JSON columns. Keys stay camelCase, numbers are floats.

class AddressSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, default='')
    gstin = serializers.CharField(required=False, allow_blank=True, default='')
    contact = serializers.CharField(required=False, allow_blank=True, default='')
    address = serializers.CharField(required=False, allow_blank=True, default='')
    city = serializers.CharField(required=False, allow_blank=True, default='')
    state = serializers.CharField(required=False, allow_blank=True, default='')
    country = serializers.CharField(required=False, allow_blank=True, default='')
    pinCode = serializers.CharField(required=False, allow_blank=True, default='')
    email = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class AttachmentSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, default='')
    type = serializers.CharField(required=False, allow_blank=True, default='')
    dataUrl = serializers.CharField(required=False, allow_blank=True, default='')


class BankDetailsSerializer(serializers.Serializer):
    accountHolderName = serializers.CharField(required=False, allow_blank=True, default='')
    bankName = serializers.CharField(required=False, allow_blank=True, default='')
    accountNumber = serializers.CharField(required=False, allow_blank=True, default='')
    ifscCode = serializers.CharField(required=False, allow_blank=True, default='')


class AuditLogSerializer(serializers.ModelSerializer):
    user = serializers.CharField(source='user.username', read_only=True, default=None)

    class Meta:
        model = AuditLog
        fields = ['id', 'user', 'action', 'model_name', 'object_id',
                  'object_reference', 'changes', 'ip_address', 'created_at']


class CompanySettingsSerializer(serializers.Serializer):
    """Company profile and the defaults printed on LRs and invoices"""
    name = serializers.CharField(required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    phoneNumbers = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
    email = serializers.CharField(required=False, allow_blank=True)
    website = serializers.CharField(required=False, allow_blank=True)
    gstin = serializers.CharField(required=False, allow_blank=True)
    themeColor = serializers.RegexField(r'^#[0-9A-Fa-f]{6}$', required=False)
    logoUrl = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    defaultBankDetails = BankDetailsSerializer(required=False)
    defaultTerms = serializers.CharField(required=False, allow_blank=True)
    defaultRiskType = serializers.ChoiceField(choices=["AT OWNER'S RISK", "AT CARRIER'S RISK"], required=False)
    defaultRemarks = serializers.CharField(required=False, allow_blank=True)
