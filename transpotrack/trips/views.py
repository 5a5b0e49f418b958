import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from django.shortcuts import get_object_or_404

from transpotrack.core.views import item_deleted_response, prepare_update_data
from .filters import TripNoteFilter, SupplierPaymentFilter
from .models import TripNote, SupplierPayment
from .serializers import TripNoteSerializer, SupplierPaymentSerializer
from .services import create_trip_note, update_trip_note, delete_trip_note, record_supplier_payment

logger = logging.getLogger(__name__)


# TripNote views
@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def trip_note_list_create(request):
    """List all trip notes or create a new one"""
    if request.method == 'GET':
        queryset = TripNoteFilter(request.query_params, queryset=TripNote.objects.all()).qs
        serializer = TripNoteSerializer(queryset, many=True)
        return Response(serializer.data)
    else:
        serializer = TripNoteSerializer(data=request.data)
        if serializer.is_valid():
            create_trip_note(serializer, request=request)
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([AllowAny])
def trip_note_detail(request, pk):
    """Retrieve, update or delete a trip note"""
    note = get_object_or_404(TripNote, pk=pk)

    if request.method == 'GET':
        serializer = TripNoteSerializer(note)
        return Response(serializer.data)
    elif request.method == 'PUT':
        serializer = TripNoteSerializer(note, data=prepare_update_data(request, pk), partial=True)
        if serializer.is_valid():
            update_trip_note(serializer, request=request)
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        delete_trip_note(note, request=request)
        return item_deleted_response()


@api_view(['GET'])
@permission_classes([AllowAny])
def trip_note_balance(request, pk):
    """Freight, paid amount and balance of one trip"""
    note = get_object_or_404(TripNote, pk=pk)
    payments = SupplierPayment.objects.filter(trip_note_id=note.id)
    paid = note.get_paid_amount()
    return Response({
        'tripNoteId': note.id,
        'noteId': note.note_id,
        'totalFreight': note.total_freight,
        'paidAmount': paid,
        'balance': note.total_freight - paid,
        'payments': SupplierPaymentSerializer(payments, many=True).data,
    })


# SupplierPayment views
@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def supplier_payment_list_create(request):
    """List all supplier payments or record a new one"""
    if request.method == 'GET':
        queryset = SupplierPaymentFilter(request.query_params, queryset=SupplierPayment.objects.all()).qs
        serializer = SupplierPaymentSerializer(queryset, many=True)
        return Response(serializer.data)
    else:
        serializer = SupplierPaymentSerializer(data=request.data)
        if serializer.is_valid():
            record_supplier_payment(serializer, request=request)
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([AllowAny])
def supplier_payment_detail(request, pk):
    """Retrieve, update or delete a supplier payment"""
    payment = get_object_or_404(SupplierPayment, pk=pk)

    if request.method == 'GET':
        serializer = SupplierPaymentSerializer(payment)
        return Response(serializer.data)
    elif request.method == 'PUT':
        serializer = SupplierPaymentSerializer(payment, data=prepare_update_data(request, pk), partial=True)
        if serializer.is_valid():
            serializer.save()
            logger.info(f"Supplier payment updated: {pk}")
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        payment.delete()
        logger.info(f"Supplier payment deleted: {pk}")
        return item_deleted_response()
