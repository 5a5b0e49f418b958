import django_filters
from django.db.models import Q
from transpotrack.parties.models import Supplier
from .models import TripNote, SupplierPayment


class TripNoteFilter(django_filters.FilterSet):
    """Filters for the trip register"""

    search = django_filters.CharFilter(method='filter_search', label='Search')
    status = django_filters.CharFilter(field_name='status', lookup_expr='exact')
    supplierId = django_filters.CharFilter(field_name='supplier_id', lookup_expr='exact')
    dateFrom = django_filters.DateFilter(field_name='date', lookup_expr='gte')
    dateTo = django_filters.DateFilter(field_name='date', lookup_expr='lte')
    ordering = django_filters.OrderingFilter(
        fields=(
            ('date', 'date'),
            ('note_id', 'noteId'),
            ('total_freight', 'totalFreight'),
            ('created_at', 'createdAt'),
        )
    )

    class Meta:
        model = TripNote
        fields = ['search', 'status', 'supplierId', 'dateFrom', 'dateTo']

    def filter_search(self, queryset, name, value):
        """Note number, vehicle, route or supplier name"""
        value = (value or '').strip()
        if not value:
            return queryset
        supplier_ids = Supplier.objects.filter(name__icontains=value).values_list('id', flat=True)
        return queryset.filter(
            Q(note_id__icontains=value) |
            Q(vehicle_number__icontains=value) |
            Q(from_location__icontains=value) |
            Q(to_location__icontains=value) |
            Q(supplier_id__in=list(supplier_ids))
        )


class SupplierPaymentFilter(django_filters.FilterSet):
    tripNoteId = django_filters.CharFilter(field_name='trip_note_id', lookup_expr='exact')
    type = django_filters.CharFilter(field_name='payment_type', lookup_expr='exact')

    class Meta:
        model = SupplierPayment
        fields = ['tripNoteId', 'type']
