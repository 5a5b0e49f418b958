from django.db import models
from decimal import Decimal

PAYMENT_METHOD_CHOICES = [
    ('Cash', 'Cash'),
    ('Bank Transfer', 'Bank Transfer'),
    ('Cheque', 'Cheque'),
]


class Invoice(models.Model):
    """Client invoice, built from LRs or from manually keyed trips"""
    STATUS_CHOICES = [
        ('Unpaid', 'Unpaid'),
        ('Paid', 'Paid'),
        ('Partially Paid', 'Partially Paid'),
        ('Cancelled', 'Cancelled'),
    ]

    INVOICE_TYPE_CHOICES = [
        ('LR-based', 'LR-based'),
        ('Manual', 'Manual'),
    ]

    GST_FILED_BY_CHOICES = [
        ('Consignee', 'Consignee'),
        ('Consignor', 'Consignor'),
        ('Transporter', 'Transporter'),
    ]

    id = models.CharField(max_length=64, primary_key=True)
    invoice_number = models.CharField(max_length=50, blank=True)
    date = models.DateField()
    invoice_type = models.CharField(max_length=20, choices=INVOICE_TYPE_CHOICES, default='LR-based')
    # Client ids are not enforced: manual invoices may bill a party that is not on file
    client_id = models.CharField(max_length=64, db_index=True)
    billing_address = models.JSONField(null=True, blank=True)
    lr_ids = models.JSONField(default=list, blank=True)
    line_items = models.JSONField(default=list, blank=True)
    manual_entries = models.JSONField(default=list, blank=True)

    total_trip_amount = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    discount = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    gst_details = models.JSONField(null=True, blank=True)
    tds_details = models.JSONField(null=True, blank=True)
    round_off = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    total_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    advance_received = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    amount_paid = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    due_date = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='Unpaid')

    hsn_code = models.CharField(max_length=20, blank=True, null=True)
    remarks = models.TextField(blank=True, null=True)
    bank_details = models.JSONField(null=True, blank=True)
    gst_filed_by = models.CharField(max_length=20, choices=GST_FILED_BY_CHOICES, blank=True, null=True)
    last_reminder_sent = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.invoice_number or self.id

    def get_balance_due(self):
        """Amount still receivable on this invoice"""
        return (self.total_amount or Decimal('0.00')) - (self.amount_paid or Decimal('0.00'))

    class Meta:
        db_table = 'invoices'
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['date'], name='idx_invoice_date'),
            models.Index(fields=['status'], name='idx_invoice_status'),
        ]


class Payment(models.Model):
    """Money received against an invoice"""
    id = models.CharField(max_length=64, primary_key=True)
    invoice_id = models.CharField(max_length=64, db_index=True)
    date = models.DateField()
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    method = models.CharField(max_length=20, choices=PAYMENT_METHOD_CHOICES, default='Cash')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.id} ({self.invoice_id})"

    class Meta:
        db_table = 'payments'
        ordering = ['created_at']
