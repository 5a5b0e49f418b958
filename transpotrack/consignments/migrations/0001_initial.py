# Generated manually for lorry receipts and LR payments

from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='LorryReceipt',
            fields=[
                ('id', models.CharField(max_length=64, primary_key=True, serialize=False)),
                ('lr_number', models.CharField(blank=True, max_length=50)),
                ('date', models.DateField()),
                ('consignor_id', models.CharField(blank=True, max_length=64, null=True)),
                ('consignor', models.JSONField(default=dict)),
                ('consignee_id', models.CharField(blank=True, max_length=64, null=True)),
                ('consignee', models.JSONField(default=dict)),
                ('loading_address_same_as_consignor', models.BooleanField(default=True)),
                ('loading_addresses', models.JSONField(blank=True, default=list)),
                ('delivery_address_same_as_consignee', models.BooleanField(default=True)),
                ('delivery_addresses', models.JSONField(blank=True, default=list)),
                ('delivery_type', models.CharField(choices=[('Door', 'Door'), ('Warehouse', 'Warehouse')], default='Door', max_length=20)),
                ('truck_number', models.CharField(max_length=30)),
                ('vehicle_type', models.CharField(blank=True, max_length=100)),
                ('from_location', models.CharField(max_length=200)),
                ('to_location', models.CharField(max_length=200)),
                ('weight_guarantee', models.FloatField(default=0)),
                ('weight_guarantee_unit', models.CharField(choices=[('KGS', 'KGS'), ('MTS', 'MTS')], default='MTS', max_length=5)),
                ('driver', models.JSONField(blank=True, null=True)),
                ('load_type', models.CharField(choices=[('Full Load', 'Full Load'), ('Part Load', 'Part Load')], default='Full Load', max_length=20)),
                ('materials', models.JSONField(blank=True, default=list)),
                ('goods_invoice_type', models.CharField(choices=[('As per Invoice', 'As per Invoice'), ('Amount', 'Amount')], default='As per Invoice', max_length=20)),
                ('goods_invoices', models.JSONField(blank=True, default=list)),
                ('eway_bills', models.JSONField(blank=True, default=list)),
                ('show_invoice_in_column', models.CharField(choices=[('Consignor', 'Consignor'), ('Consignee', 'Consignee')], default='Consignor', max_length=20)),
                ('freight_type', models.CharField(choices=[('Paid', 'Paid'), ('To Pay', 'To Pay'), ('To be billed', 'To be billed')], default='To be billed', max_length=20)),
                ('basic_freight', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('other_charges', models.JSONField(blank=True, default=list)),
                ('gst_details', models.JSONField(blank=True, null=True)),
                ('advance_details', models.JSONField(blank=True, null=True)),
                ('tds_details', models.JSONField(blank=True, null=True)),
                ('total_amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('freight_pay_by', models.CharField(choices=[('Consignor', 'Consignor'), ('Consignee', 'Consignee')], default='Consignor', max_length=20)),
                ('hide_freight', models.BooleanField(default=False)),
                ('insurance', models.CharField(choices=[('Not Insured', 'Not Insured'), ('Insured', 'Insured')], default='Not Insured', max_length=20)),
                ('insurance_details', models.JSONField(blank=True, null=True)),
                ('risk_type', models.CharField(blank=True, choices=[("AT OWNER'S RISK", "AT OWNER'S RISK"), ("AT CARRIER'S RISK", "AT CARRIER'S RISK")], max_length=30)),
                ('mode_of_transport', models.CharField(default='By Road', max_length=50)),
                ('demurrage', models.JSONField(blank=True, null=True)),
                ('remarks', models.TextField(blank=True)),
                ('terms_and_conditions', models.TextField(blank=True, null=True)),
                ('status', models.CharField(choices=[('Scheduled', 'Scheduled'), ('In Transit', 'In Transit'), ('Delivered', 'Delivered'), ('Completed', 'Completed'), ('Cancelled', 'Cancelled')], default='Scheduled', max_length=20)),
                ('invoice_id', models.CharField(blank=True, db_index=True, max_length=64, null=True)),
                ('amount_paid', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('epod', models.JSONField(blank=True, null=True)),
                ('attachments', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'lorry_receipts',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['date'], name='idx_lr_date'),
                    models.Index(fields=['status'], name='idx_lr_status'),
                ],
            },
        ),
        migrations.CreateModel(
            name='LorryReceiptPayment',
            fields=[
                ('id', models.CharField(max_length=64, primary_key=True, serialize=False)),
                ('lr_id', models.CharField(db_index=True, max_length=64)),
                ('date', models.DateField()),
                ('amount', models.DecimalField(decimal_places=2, max_digits=14)),
                ('method', models.CharField(choices=[('Cash', 'Cash'), ('Bank Transfer', 'Bank Transfer'), ('Cheque', 'Cheque')], default='Cash', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'lorry_receipt_payments',
                'ordering': ['created_at'],
            },
        ),
    ]
