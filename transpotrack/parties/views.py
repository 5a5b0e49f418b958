import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from django.shortcuts import get_object_or_404

from transpotrack.core.views import item_deleted_response, prepare_update_data
from .filters import ClientFilter, SupplierFilter
from .models import Client, Supplier
from .serializers import ClientSerializer, SupplierSerializer

logger = logging.getLogger(__name__)


# Client views
@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def client_list_create(request):
    """List all clients or create a new client"""
    if request.method == 'GET':
        queryset = ClientFilter(request.query_params, queryset=Client.objects.all()).qs
        serializer = ClientSerializer(queryset, many=True)
        return Response(serializer.data)
    else:
        serializer = ClientSerializer(data=request.data)
        if serializer.is_valid():
            client = serializer.save()
            logger.info(f"Client created: {client.id} ({client.name})")
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([AllowAny])
def client_detail(request, pk):
    """Retrieve, update or delete a client"""
    client = get_object_or_404(Client, pk=pk)

    if request.method == 'GET':
        serializer = ClientSerializer(client)
        return Response(serializer.data)
    elif request.method == 'PUT':
        serializer = ClientSerializer(client, data=prepare_update_data(request, pk), partial=True)
        if serializer.is_valid():
            serializer.save()
            logger.info(f"Client updated: {pk}")
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        client.delete()
        logger.info(f"Client deleted: {pk}")
        return item_deleted_response()


# Supplier views
@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def supplier_list_create(request):
    """List all suppliers or create a new supplier"""
    if request.method == 'GET':
        queryset = SupplierFilter(request.query_params, queryset=Supplier.objects.all()).qs
        serializer = SupplierSerializer(queryset, many=True)
        return Response(serializer.data)
    else:
        serializer = SupplierSerializer(data=request.data)
        if serializer.is_valid():
            supplier = serializer.save()
            logger.info(f"Supplier created: {supplier.id} ({supplier.name})")
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([AllowAny])
def supplier_detail(request, pk):
    """Retrieve, update or delete a supplier"""
    supplier = get_object_or_404(Supplier, pk=pk)

    if request.method == 'GET':
        serializer = SupplierSerializer(supplier)
        return Response(serializer.data)
    elif request.method == 'PUT':
        serializer = SupplierSerializer(supplier, data=prepare_update_data(request, pk), partial=True)
        if serializer.is_valid():
            serializer.save()
            logger.info(f"Supplier updated: {pk}")
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        supplier.delete()
        logger.info(f"Supplier deleted: {pk}")
        return item_deleted_response()
