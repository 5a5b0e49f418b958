from django.db import models
from decimal import Decimal

PAYMENT_METHOD_CHOICES = [
    ('Cash', 'Cash'),
    ('Bank Transfer', 'Bank Transfer'),
    ('Cheque', 'Cheque'),
]


class TripNote(models.Model):
    """A truck trip subcontracted to a supplier"""
    STATUS_CHOICES = [
        ('Draft', 'Draft'),
        ('Confirmed', 'Confirmed'),
        ('In Transit', 'In Transit'),
        ('POD Awaited', 'POD Awaited'),
        ('Completed', 'Completed'),
        ('Closed', 'Closed'),
    ]

    id = models.CharField(max_length=64, primary_key=True)
    note_id = models.CharField(max_length=50, blank=True)
    date = models.DateField()
    supplier_id = models.CharField(max_length=64, db_index=True)
    vehicle_number = models.CharField(max_length=30)
    vehicle_type = models.CharField(max_length=100, blank=True)
    from_location = models.CharField(max_length=200)
    to_location = models.CharField(max_length=200)
    driver_name = models.CharField(max_length=200, blank=True, null=True)
    driver_contact = models.CharField(max_length=20, blank=True, null=True)
    total_freight = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    payment_details = models.TextField(blank=True)
    loading_contact_person = models.CharField(max_length=200, blank=True, null=True)
    loading_contact_number = models.CharField(max_length=20, blank=True, null=True)
    unloading_contact_person = models.CharField(max_length=200, blank=True, null=True)
    unloading_contact_number = models.CharField(max_length=20, blank=True, null=True)
    remarks = models.TextField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='Draft')
    linked_lr_ids = models.JSONField(default=list, blank=True)
    pod = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.note_id or self.id

    def get_paid_amount(self):
        """Sum of supplier payments made against this trip"""
        return sum((p.amount for p in SupplierPayment.objects.filter(trip_note_id=self.id)), Decimal('0.00'))

    def get_balance_due(self):
        return (self.total_freight or Decimal('0.00')) - self.get_paid_amount()

    class Meta:
        db_table = 'trip_notes'
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['date'], name='idx_trip_date'),
            models.Index(fields=['status'], name='idx_trip_status'),
        ]


class SupplierPayment(models.Model):
    """Advance or balance paid to a supplier for a trip"""
    TYPE_CHOICES = [
        ('Advance', 'Advance'),
        ('Balance', 'Balance'),
    ]

    id = models.CharField(max_length=64, primary_key=True)
    trip_note_id = models.CharField(max_length=64, db_index=True)
    date = models.DateField()
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    payment_type = models.CharField(max_length=20, choices=TYPE_CHOICES, default='Advance')
    method = models.CharField(max_length=20, choices=PAYMENT_METHOD_CHOICES, default='Cash')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.id} ({self.trip_note_id})"

    class Meta:
        db_table = 'supplier_payments'
        ordering = ['created_at']
