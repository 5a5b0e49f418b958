import logging
from collections.abc import Mapping

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from .company import get_company_settings, reset_company_settings, save_company_settings
from .models import AuditLog
from .serializers import AuditLogSerializer, CompanySettingsSerializer
from .utils import create_audit_log

logger = logging.getLogger(__name__)


def item_deleted_response():
    return Response({'message': 'Item deleted successfully'}, status=status.HTTP_200_OK)


def prepare_update_data(request, pk):
    """Copy of the PUT body with the id from the URL taking precedence"""
    if not isinstance(request.data, Mapping):
        # left for the serializer to reject
        return request.data
    data = request.data.copy() if hasattr(request.data, 'copy') else dict(request.data)
    data['id'] = pk
    return data


# Company settings
@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([AllowAny])
def company_settings(request):
    """Retrieve, update or reset the company profile and document defaults"""
    if request.method == 'GET':
        return Response(get_company_settings())
    if request.method == 'DELETE':
        defaults = reset_company_settings()
        create_audit_log(
            request=request,
            action='settings_reset',
            model_name='Setting',
            object_id='company',
        )
        logger.info("Company settings reset to defaults")
        return Response(defaults)

    serializer = CompanySettingsSerializer(data=request.data, partial=True)
    if serializer.is_valid():
        merged = save_company_settings(serializer.validated_data)
        create_audit_log(
            request=request,
            action='settings_update',
            model_name='Setting',
            object_id='company',
            changes={'fields': sorted(serializer.validated_data.keys())},
        )
        logger.info("Company settings updated")
        return Response(merged)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


# AuditLog views (read-only)
@api_view(['GET'])
@permission_classes([AllowAny])
def audit_log_list(request):
    """List audit logs, newest first, optionally filtered"""
    queryset = AuditLog.objects.all()

    action_filter = request.query_params.get('action', None)
    if action_filter:
        queryset = queryset.filter(action=action_filter)

    model_filter = request.query_params.get('model', None)
    if model_filter:
        queryset = queryset.filter(model_name=model_filter)

    reference = request.query_params.get('reference', None)
    if reference:
        queryset = queryset.filter(object_reference=reference)

    date_from = request.query_params.get('date_from', None)
    date_to = request.query_params.get('date_to', None)
    if date_from:
        queryset = queryset.filter(created_at__date__gte=date_from)
    if date_to:
        queryset = queryset.filter(created_at__date__lte=date_to)

    queryset = queryset.order_by('-created_at')
    serializer = AuditLogSerializer(queryset, many=True)
    return Response(serializer.data)
