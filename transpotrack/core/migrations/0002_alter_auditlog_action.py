from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('core', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='auditlog',
            name='action',
            field=models.CharField(choices=[('create', 'Create'), ('update', 'Update'), ('delete', 'Delete'), ('invoice_create', 'Invoice Created'), ('invoice_update', 'Invoice Updated'), ('invoice_cancel', 'Invoice Cancelled'), ('lr_link', 'LR Linked to Invoice'), ('lr_unlink', 'LR Unlinked from Invoice'), ('payment_add', 'Payment Added'), ('payment_update', 'Payment Updated'), ('payment_remove', 'Payment Removed'), ('settings_update', 'Settings Updated'), ('settings_reset', 'Settings Reset')], max_length=50),
        ),
    ]
