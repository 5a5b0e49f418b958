"""
URL configuration for the TranspoTrack back office.

Every app mounts its routes under /api/.
"""
from django.contrib import admin
from django.urls import path, include

admin.site.site_header = "TranspoTrack Admin Panel"
admin.site.site_title = "TranspoTrack Admin Portal"
admin.site.index_title = "Welcome to TranspoTrack Admin"

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('transpotrack.core.urls')),
    path('api/', include('transpotrack.parties.urls')),
    path('api/', include('transpotrack.consignments.urls')),
    path('api/', include('transpotrack.billing.urls')),
    path('api/', include('transpotrack.trips.urls')),
    path('api/', include('transpotrack.reports.urls')),
]
