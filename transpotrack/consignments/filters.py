import django_filters
from django.db.models import Q
from transpotrack.core.utils import financial_year_bounds
from transpotrack.parties.models import Client
from .models import LorryReceipt, LorryReceiptPayment

TRUE_VALUES = ('true', '1', 'yes')


class LorryReceiptFilter(django_filters.FilterSet):
    """Filters for the LR register"""

    search = django_filters.CharFilter(method='filter_search', label='Search')
    status = django_filters.CharFilter(field_name='status', lookup_expr='exact')
    freightType = django_filters.CharFilter(field_name='freight_type', lookup_expr='exact')
    financialYear = django_filters.CharFilter(method='filter_financial_year', label='Financial year')
    dateFrom = django_filters.DateFilter(field_name='date', lookup_expr='gte')
    dateTo = django_filters.DateFilter(field_name='date', lookup_expr='lte')
    unbilled = django_filters.CharFilter(method='filter_unbilled', label='Unbilled')
    unbilledFor = django_filters.CharFilter(method='filter_unbilled_for', label='Unbilled for client')
    ordering = django_filters.OrderingFilter(
        fields=(
            ('date', 'date'),
            ('lr_number', 'lrNumber'),
            ('total_amount', 'totalAmount'),
            ('created_at', 'createdAt'),
        )
    )

    class Meta:
        model = LorryReceipt
        fields = ['search', 'status', 'freightType', 'financialYear', 'dateFrom', 'dateTo',
                  'unbilled', 'unbilledFor']

    def filter_search(self, queryset, name, value):
        """LR number, truck number, route or either party's name"""
        value = (value or '').strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(lr_number__icontains=value) |
            Q(truck_number__icontains=value) |
            Q(from_location__icontains=value) |
            Q(to_location__icontains=value) |
            Q(consignor__name__icontains=value) |
            Q(consignee__name__icontains=value)
        )

    def filter_financial_year(self, queryset, name, value):
        if not value:
            return queryset
        try:
            start, end = financial_year_bounds(value)
        except ValueError:
            return queryset.none()
        return queryset.filter(date__gte=start, date__lte=end)

    def filter_unbilled(self, queryset, name, value):
        if str(value).lower() not in TRUE_VALUES:
            return queryset
        return queryset.filter(Q(invoice_id__isnull=True) | Q(invoice_id='')).exclude(status='Cancelled')

    def filter_unbilled_for(self, queryset, name, value):
        """Unbilled LRs where the client is consignor or consignee (matched by name)"""
        client = Client.objects.filter(pk=value).first()
        if client is None:
            return queryset.none()
        return queryset.filter(
            Q(invoice_id__isnull=True) | Q(invoice_id='')
        ).filter(
            Q(consignor__name=client.name) | Q(consignee__name=client.name)
        )


class LorryReceiptPaymentFilter(django_filters.FilterSet):
    lrId = django_filters.CharFilter(field_name='lr_id', lookup_expr='exact')

    class Meta:
        model = LorryReceiptPayment
        fields = ['lrId']
