# Generated manually for invoices and invoice payments

from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Invoice',
            fields=[
                ('id', models.CharField(max_length=64, primary_key=True, serialize=False)),
                ('invoice_number', models.CharField(blank=True, max_length=50)),
                ('date', models.DateField()),
                ('invoice_type', models.CharField(choices=[('LR-based', 'LR-based'), ('Manual', 'Manual')], default='LR-based', max_length=20)),
                ('client_id', models.CharField(db_index=True, max_length=64)),
                ('billing_address', models.JSONField(blank=True, null=True)),
                ('lr_ids', models.JSONField(blank=True, default=list)),
                ('line_items', models.JSONField(blank=True, default=list)),
                ('manual_entries', models.JSONField(blank=True, default=list)),
                ('total_trip_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ('discount', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ('gst_details', models.JSONField(blank=True, null=True)),
                ('tds_details', models.JSONField(blank=True, null=True)),
                ('round_off', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ('total_amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('advance_received', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ('amount_paid', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('due_date', models.DateField(blank=True, null=True)),
                ('status', models.CharField(choices=[('Unpaid', 'Unpaid'), ('Paid', 'Paid'), ('Partially Paid', 'Partially Paid'), ('Cancelled', 'Cancelled')], default='Unpaid', max_length=20)),
                ('hsn_code', models.CharField(blank=True, max_length=20, null=True)),
                ('remarks', models.TextField(blank=True, null=True)),
                ('bank_details', models.JSONField(blank=True, null=True)),
                ('gst_filed_by', models.CharField(blank=True, choices=[('Consignee', 'Consignee'), ('Consignor', 'Consignor'), ('Transporter', 'Transporter')], max_length=20, null=True)),
                ('last_reminder_sent', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'invoices',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['date'], name='idx_invoice_date'),
                    models.Index(fields=['status'], name='idx_invoice_status'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Payment',
            fields=[
                ('id', models.CharField(max_length=64, primary_key=True, serialize=False)),
                ('invoice_id', models.CharField(db_index=True, max_length=64)),
                ('date', models.DateField()),
                ('amount', models.DecimalField(decimal_places=2, max_digits=14)),
                ('method', models.CharField(choices=[('Cash', 'Cash'), ('Bank Transfer', 'Bank Transfer'), ('Cheque', 'Cheque')], default='Cash', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'payments',
                'ordering': ['created_at'],
            },
        ),
    ]
