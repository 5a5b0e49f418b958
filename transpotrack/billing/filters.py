import django_filters
from django.db.models import Q
from django.utils import timezone
from transpotrack.core.utils import financial_year_bounds
from transpotrack.parties.models import Client
from .models import Invoice, Payment

TRUE_VALUES = ('true', '1', 'yes')


class InvoiceFilter(django_filters.FilterSet):
    """Filters for the invoice register"""

    search = django_filters.CharFilter(method='filter_search', label='Search')
    status = django_filters.CharFilter(field_name='status', lookup_expr='exact')
    clientId = django_filters.CharFilter(field_name='client_id', lookup_expr='exact')
    type = django_filters.CharFilter(field_name='invoice_type', lookup_expr='exact')
    financialYear = django_filters.CharFilter(method='filter_financial_year', label='Financial year')
    overdue = django_filters.CharFilter(method='filter_overdue', label='Overdue')
    ordering = django_filters.OrderingFilter(
        fields=(
            ('date', 'date'),
            ('due_date', 'dueDate'),
            ('invoice_number', 'invoiceNumber'),
            ('total_amount', 'totalAmount'),
            ('created_at', 'createdAt'),
        )
    )

    class Meta:
        model = Invoice
        fields = ['search', 'status', 'clientId', 'type', 'financialYear', 'overdue']

    def filter_search(self, queryset, name, value):
        """Invoice number, or the billed client's name"""
        value = (value or '').strip()
        if not value:
            return queryset
        client_ids = Client.objects.filter(name__icontains=value).values_list('id', flat=True)
        return queryset.filter(
            Q(invoice_number__icontains=value) |
            Q(client_id__in=list(client_ids)) |
            Q(billing_address__name__icontains=value)
        )

    def filter_financial_year(self, queryset, name, value):
        if not value:
            return queryset
        try:
            start, end = financial_year_bounds(value)
        except ValueError:
            return queryset.none()
        return queryset.filter(date__gte=start, date__lte=end)

    def filter_overdue(self, queryset, name, value):
        """Past the due date and still not settled"""
        if str(value).lower() not in TRUE_VALUES:
            return queryset
        today = timezone.localdate()
        return queryset.filter(due_date__lt=today).exclude(status__in=['Paid', 'Cancelled'])


class PaymentFilter(django_filters.FilterSet):
    invoiceId = django_filters.CharFilter(field_name='invoice_id', lookup_expr='exact')

    class Meta:
        model = Payment
        fields = ['invoiceId']
