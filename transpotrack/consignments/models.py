from django.db import models
from decimal import Decimal

PAYMENT_METHOD_CHOICES = [
    ('Cash', 'Cash'),
    ('Bank Transfer', 'Bank Transfer'),
    ('Cheque', 'Cheque'),
]


class LorryReceipt(models.Model):
    """Consignment note for a single truck shipment"""
    STATUS_CHOICES = [
        ('Scheduled', 'Scheduled'),
        ('In Transit', 'In Transit'),
        ('Delivered', 'Delivered'),
        ('Completed', 'Completed'),
        ('Cancelled', 'Cancelled'),
    ]

    FREIGHT_TYPE_CHOICES = [
        ('Paid', 'Paid'),
        ('To Pay', 'To Pay'),
        ('To be billed', 'To be billed'),
    ]

    DELIVERY_TYPE_CHOICES = [
        ('Door', 'Door'),
        ('Warehouse', 'Warehouse'),
    ]

    WEIGHT_UNIT_CHOICES = [
        ('KGS', 'KGS'),
        ('MTS', 'MTS'),
    ]

    LOAD_TYPE_CHOICES = [
        ('Full Load', 'Full Load'),
        ('Part Load', 'Part Load'),
    ]

    GOODS_INVOICE_TYPE_CHOICES = [
        ('As per Invoice', 'As per Invoice'),
        ('Amount', 'Amount'),
    ]

    PARTY_CHOICES = [
        ('Consignor', 'Consignor'),
        ('Consignee', 'Consignee'),
    ]

    INSURANCE_CHOICES = [
        ('Not Insured', 'Not Insured'),
        ('Insured', 'Insured'),
    ]

    RISK_TYPE_CHOICES = [
        ("AT OWNER'S RISK", "AT OWNER'S RISK"),
        ("AT CARRIER'S RISK", "AT CARRIER'S RISK"),
    ]

    id = models.CharField(max_length=64, primary_key=True)
    lr_number = models.CharField(max_length=50, blank=True)
    date = models.DateField()

    # Parties: client ids are optional, the address snapshot is what gets printed
    consignor_id = models.CharField(max_length=64, blank=True, null=True)
    consignor = models.JSONField(default=dict)
    consignee_id = models.CharField(max_length=64, blank=True, null=True)
    consignee = models.JSONField(default=dict)
    loading_address_same_as_consignor = models.BooleanField(default=True)
    loading_addresses = models.JSONField(default=list, blank=True)
    delivery_address_same_as_consignee = models.BooleanField(default=True)
    delivery_addresses = models.JSONField(default=list, blank=True)
    delivery_type = models.CharField(max_length=20, choices=DELIVERY_TYPE_CHOICES, default='Door')

    # Vehicle and route
    truck_number = models.CharField(max_length=30)
    vehicle_type = models.CharField(max_length=100, blank=True)
    from_location = models.CharField(max_length=200)
    to_location = models.CharField(max_length=200)
    weight_guarantee = models.FloatField(default=0)
    weight_guarantee_unit = models.CharField(max_length=5, choices=WEIGHT_UNIT_CHOICES, default='MTS')
    driver = models.JSONField(null=True, blank=True)
    load_type = models.CharField(max_length=20, choices=LOAD_TYPE_CHOICES, default='Full Load')

    # Goods
    materials = models.JSONField(default=list, blank=True)
    goods_invoice_type = models.CharField(max_length=20, choices=GOODS_INVOICE_TYPE_CHOICES, default='As per Invoice')
    goods_invoices = models.JSONField(default=list, blank=True)
    eway_bills = models.JSONField(default=list, blank=True)
    show_invoice_in_column = models.CharField(max_length=20, choices=PARTY_CHOICES, default='Consignor')

    # Freight
    freight_type = models.CharField(max_length=20, choices=FREIGHT_TYPE_CHOICES, default='To be billed')
    basic_freight = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    other_charges = models.JSONField(default=list, blank=True)
    gst_details = models.JSONField(null=True, blank=True)
    advance_details = models.JSONField(null=True, blank=True)
    tds_details = models.JSONField(null=True, blank=True)
    total_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    freight_pay_by = models.CharField(max_length=20, choices=PARTY_CHOICES, default='Consignor')
    hide_freight = models.BooleanField(default=False)

    # Insurance and terms
    insurance = models.CharField(max_length=20, choices=INSURANCE_CHOICES, default='Not Insured')
    insurance_details = models.JSONField(null=True, blank=True)
    risk_type = models.CharField(max_length=30, choices=RISK_TYPE_CHOICES, blank=True)
    mode_of_transport = models.CharField(max_length=50, default='By Road')
    demurrage = models.JSONField(null=True, blank=True)
    remarks = models.TextField(blank=True)
    terms_and_conditions = models.TextField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='Scheduled')

    # Billing and collection
    invoice_id = models.CharField(max_length=64, blank=True, null=True, db_index=True)
    amount_paid = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))

    epod = models.JSONField(null=True, blank=True)
    attachments = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.lr_number or self.id

    def get_balance_due(self):
        """Freight still to be collected on this LR"""
        return (self.total_amount or Decimal('0.00')) - (self.amount_paid or Decimal('0.00'))

    class Meta:
        db_table = 'lorry_receipts'
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['date'], name='idx_lr_date'),
            models.Index(fields=['status'], name='idx_lr_status'),
        ]


class LorryReceiptPayment(models.Model):
    """Freight collected directly against an LR"""
    id = models.CharField(max_length=64, primary_key=True)
    lr_id = models.CharField(max_length=64, db_index=True)
    date = models.DateField()
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    method = models.CharField(max_length=20, choices=PAYMENT_METHOD_CHOICES, default='Cash')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.id} ({self.lr_id})"

    class Meta:
        db_table = 'lorry_receipt_payments'
        ordering = ['created_at']
