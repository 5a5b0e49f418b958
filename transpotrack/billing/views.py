import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from django.shortcuts import get_object_or_404

from transpotrack.core.views import item_deleted_response, prepare_update_data
from .filters import InvoiceFilter, PaymentFilter
from .models import Invoice, Payment
from .serializers import InvoiceSerializer, PaymentSerializer, InvoiceCalculationSerializer
from .services import (
    create_invoice, update_invoice, cancel_invoice, delete_invoice, mark_reminder_sent,
    record_payment, update_payment, delete_payment,
    calculate_invoice_totals, lr_charges_for,
)

logger = logging.getLogger('transpotrack.billing')


# Invoice views
@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def invoice_list_create(request):
    """List all invoices or create a new invoice"""
    if request.method == 'GET':
        queryset = InvoiceFilter(request.query_params, queryset=Invoice.objects.all()).qs
        serializer = InvoiceSerializer(queryset, many=True)
        return Response(serializer.data)
    else:
        serializer = InvoiceSerializer(data=request.data)
        if serializer.is_valid():
            create_invoice(serializer, request=request)
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([AllowAny])
def invoice_detail(request, pk):
    """Retrieve, update or delete an invoice"""
    invoice = get_object_or_404(Invoice, pk=pk)

    if request.method == 'GET':
        serializer = InvoiceSerializer(invoice)
        return Response(serializer.data)
    elif request.method == 'PUT':
        serializer = InvoiceSerializer(invoice, data=prepare_update_data(request, pk), partial=True)
        if serializer.is_valid():
            update_invoice(serializer, request=request)
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        delete_invoice(invoice, request=request)
        return item_deleted_response()


@api_view(['POST'])
@permission_classes([AllowAny])
def invoice_cancel(request, pk):
    """Cancel an invoice and release its LRs for billing"""
    invoice = get_object_or_404(Invoice, pk=pk)
    if invoice.status == 'Cancelled':
        return Response({'message': 'Invoice is already cancelled'}, status=status.HTTP_400_BAD_REQUEST)
    cancel_invoice(invoice, request=request)
    return Response(InvoiceSerializer(invoice).data)


@api_view(['POST'])
@permission_classes([AllowAny])
def invoice_reminder(request, pk):
    """Record that a payment reminder went out for an invoice"""
    invoice = get_object_or_404(Invoice, pk=pk)
    mark_reminder_sent(invoice, request=request)
    return Response(InvoiceSerializer(invoice).data)


@api_view(['POST'])
@permission_classes([AllowAny])
def invoice_calculate(request):
    """Price an invoice without saving it"""
    serializer = InvoiceCalculationSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    data = serializer.validated_data
    totals = calculate_invoice_totals(
        invoice_type=data['type'],
        lr_charges=lr_charges_for(data['lrIds'], overrides=data['lrCharges']),
        manual_entries=data['manualEntries'],
        discount=data['discount'],
        gst_details=data['gstDetails'],
        tds_details=data['tdsDetails'],
        apply_round_off=data['applyRoundOff'],
        advance_received=data['advanceReceived'],
    )
    return Response(totals)


# Payment views
@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def payment_list_create(request):
    """List all invoice payments or record a new one"""
    if request.method == 'GET':
        queryset = PaymentFilter(request.query_params, queryset=Payment.objects.all()).qs
        serializer = PaymentSerializer(queryset, many=True)
        return Response(serializer.data)
    else:
        serializer = PaymentSerializer(data=request.data)
        if serializer.is_valid():
            record_payment(serializer, request=request)
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([AllowAny])
def payment_detail(request, pk):
    """Retrieve, update or delete an invoice payment"""
    payment = get_object_or_404(Payment, pk=pk)

    if request.method == 'GET':
        serializer = PaymentSerializer(payment)
        return Response(serializer.data)
    elif request.method == 'PUT':
        serializer = PaymentSerializer(payment, data=prepare_update_data(request, pk), partial=True)
        if serializer.is_valid():
            update_payment(serializer, request=request)
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        delete_payment(payment, request=request)
        return item_deleted_response()
