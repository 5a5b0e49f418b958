from django.urls import re_path
from .views import (
    client_list_create, client_detail,
    supplier_list_create, supplier_detail,
)

urlpatterns = [
    # Client endpoints
    re_path(r'^clients/?$', client_list_create, name='client-list-create'),
    re_path(r'^clients/(?P<pk>[^/]+)/?$', client_detail, name='client-detail'),

    # Supplier endpoints
    re_path(r'^suppliers/?$', supplier_list_create, name='supplier-list-create'),
    re_path(r'^suppliers/(?P<pk>[^/]+)/?$', supplier_detail, name='supplier-detail'),
]
