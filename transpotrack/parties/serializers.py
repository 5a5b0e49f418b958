from rest_framework import serializers
from transpotrack.core.serializers import DocumentSerializer
from .models import Client, Supplier


class ClientSerializer(DocumentSerializer):
    id_prefix = 'cli'

    class Meta:
        model = Client
        fields = ['id', 'name', 'address', 'gstin', 'contact_person', 'contact_number']
        extra_kwargs = {'id': {'required': False}}

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Client name cannot be blank.")
        return value.strip()


class SupplierSerializer(DocumentSerializer):
    id_prefix = 'sup'

    class Meta:
        model = Supplier
        fields = ['id', 'name', 'contact_person', 'contact_number', 'address']
        extra_kwargs = {'id': {'required': False}}

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Supplier name cannot be blank.")
        return value.strip()
