import django_filters
from django.db.models import Q
from .models import Client, Supplier


class ClientFilter(django_filters.FilterSet):
    """Search clients by name, GSTIN or contact number"""
    search = django_filters.CharFilter(method='filter_search', label='Search')

    class Meta:
        model = Client
        fields = ['search']

    def filter_search(self, queryset, name, value):
        value = (value or '').strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(name__icontains=value) | Q(gstin__icontains=value) | Q(contact_number__icontains=value)
        )


class SupplierFilter(django_filters.FilterSet):
    """Search suppliers by name, contact person or contact number"""
    search = django_filters.CharFilter(method='filter_search', label='Search')

    class Meta:
        model = Supplier
        fields = ['search']

    def filter_search(self, queryset, name, value):
        value = (value or '').strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(name__icontains=value) | Q(contact_person__icontains=value) | Q(contact_number__icontains=value)
        )
