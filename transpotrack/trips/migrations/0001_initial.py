# Generated manually for trip notes and supplier payments

from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='TripNote',
            fields=[
                ('id', models.CharField(max_length=64, primary_key=True, serialize=False)),
                ('note_id', models.CharField(blank=True, max_length=50)),
                ('date', models.DateField()),
                ('supplier_id', models.CharField(db_index=True, max_length=64)),
                ('vehicle_number', models.CharField(max_length=30)),
                ('vehicle_type', models.CharField(blank=True, max_length=100)),
                ('from_location', models.CharField(max_length=200)),
                ('to_location', models.CharField(max_length=200)),
                ('driver_name', models.CharField(blank=True, max_length=200, null=True)),
                ('driver_contact', models.CharField(blank=True, max_length=20, null=True)),
                ('total_freight', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('payment_details', models.TextField(blank=True)),
                ('loading_contact_person', models.CharField(blank=True, max_length=200, null=True)),
                ('loading_contact_number', models.CharField(blank=True, max_length=20, null=True)),
                ('unloading_contact_person', models.CharField(blank=True, max_length=200, null=True)),
                ('unloading_contact_number', models.CharField(blank=True, max_length=20, null=True)),
                ('remarks', models.TextField(blank=True, null=True)),
                ('status', models.CharField(choices=[('Draft', 'Draft'), ('Confirmed', 'Confirmed'), ('In Transit', 'In Transit'), ('POD Awaited', 'POD Awaited'), ('Completed', 'Completed'), ('Closed', 'Closed')], default='Draft', max_length=20)),
                ('linked_lr_ids', models.JSONField(blank=True, default=list)),
                ('pod', models.JSONField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'trip_notes',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['date'], name='idx_trip_date'),
                    models.Index(fields=['status'], name='idx_trip_status'),
                ],
            },
        ),
        migrations.CreateModel(
            name='SupplierPayment',
            fields=[
                ('id', models.CharField(max_length=64, primary_key=True, serialize=False)),
                ('trip_note_id', models.CharField(db_index=True, max_length=64)),
                ('date', models.DateField()),
                ('amount', models.DecimalField(decimal_places=2, max_digits=14)),
                ('payment_type', models.CharField(choices=[('Advance', 'Advance'), ('Balance', 'Balance')], default='Advance', max_length=20)),
                ('method', models.CharField(choices=[('Cash', 'Cash'), ('Bank Transfer', 'Bank Transfer'), ('Cheque', 'Cheque')], default='Cash', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'supplier_payments',
                'ordering': ['created_at'],
            },
        ),
    ]
