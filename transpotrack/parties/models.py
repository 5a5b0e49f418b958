from django.db import models


class Client(models.Model):
    """Billing party (consignor or consignee) of the brokerage"""
    id = models.CharField(max_length=64, primary_key=True)
    name = models.CharField(max_length=200)
    address = models.TextField(blank=True)
    gstin = models.CharField(max_length=20, blank=True)
    contact_person = models.CharField(max_length=200, blank=True, null=True)
    contact_number = models.CharField(max_length=20, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'clients'
        ordering = ['created_at']


class Supplier(models.Model):
    """Vehicle owner / transporter that trips are subcontracted to"""
    id = models.CharField(max_length=64, primary_key=True)
    name = models.CharField(max_length=200)
    contact_person = models.CharField(max_length=200, blank=True, null=True)
    contact_number = models.CharField(max_length=20, blank=True)
    address = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'suppliers'
        ordering = ['created_at']
