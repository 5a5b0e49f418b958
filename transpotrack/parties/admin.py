from django.contrib import admin
from .models import Client, Supplier


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'gstin', 'contact_person', 'contact_number', 'created_at']
    search_fields = ['id', 'name', 'gstin', 'contact_number']
    ordering = ['name']


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'contact_person', 'contact_number', 'created_at']
    search_fields = ['id', 'name', 'contact_person', 'contact_number']
    ordering = ['name']
