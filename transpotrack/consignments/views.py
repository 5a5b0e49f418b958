import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from django.shortcuts import get_object_or_404

from transpotrack.core.views import item_deleted_response, prepare_update_data
from .filters import LorryReceiptFilter, LorryReceiptPaymentFilter
from .models import LorryReceipt, LorryReceiptPayment
from .serializers import LorryReceiptSerializer, LorryReceiptPaymentSerializer
from .services import (
    create_lorry_receipt, update_lorry_receipt, delete_lorry_receipt,
    record_lr_payment, update_lr_payment, delete_lr_payment,
    get_lr_payment_status,
)

logger = logging.getLogger(__name__)


# LorryReceipt views
@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def lorry_receipt_list_create(request):
    """List all lorry receipts or create a new one"""
    if request.method == 'GET':
        queryset = LorryReceiptFilter(request.query_params, queryset=LorryReceipt.objects.all()).qs
        serializer = LorryReceiptSerializer(queryset, many=True)
        return Response(serializer.data)
    else:
        serializer = LorryReceiptSerializer(data=request.data)
        if serializer.is_valid():
            create_lorry_receipt(serializer, request=request)
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([AllowAny])
def lorry_receipt_detail(request, pk):
    """Retrieve, update or delete a lorry receipt"""
    lr = get_object_or_404(LorryReceipt, pk=pk)

    if request.method == 'GET':
        serializer = LorryReceiptSerializer(lr)
        return Response(serializer.data)
    elif request.method == 'PUT':
        serializer = LorryReceiptSerializer(lr, data=prepare_update_data(request, pk), partial=True)
        if serializer.is_valid():
            update_lorry_receipt(serializer, request=request)
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        delete_lorry_receipt(lr, request=request)
        return item_deleted_response()


@api_view(['GET'])
@permission_classes([AllowAny])
def lorry_receipt_balance(request, pk):
    """Freight collection summary of one LR"""
    lr = get_object_or_404(LorryReceipt, pk=pk)
    payments = LorryReceiptPayment.objects.filter(lr_id=lr.id)
    return Response({
        'lrId': lr.id,
        'lrNumber': lr.lr_number,
        'totalAmount': lr.total_amount,
        'amountPaid': lr.amount_paid,
        'balanceDue': lr.get_balance_due(),
        'paymentStatus': get_lr_payment_status(lr),
        'payments': LorryReceiptPaymentSerializer(payments, many=True).data,
    })


# LorryReceiptPayment views
@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def lorry_receipt_payment_list_create(request):
    """List all LR payments or record a new one"""
    if request.method == 'GET':
        queryset = LorryReceiptPaymentFilter(request.query_params, queryset=LorryReceiptPayment.objects.all()).qs
        serializer = LorryReceiptPaymentSerializer(queryset, many=True)
        return Response(serializer.data)
    else:
        serializer = LorryReceiptPaymentSerializer(data=request.data)
        if serializer.is_valid():
            record_lr_payment(serializer, request=request)
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([AllowAny])
def lorry_receipt_payment_detail(request, pk):
    """Retrieve, update or delete an LR payment"""
    payment = get_object_or_404(LorryReceiptPayment, pk=pk)

    if request.method == 'GET':
        serializer = LorryReceiptPaymentSerializer(payment)
        return Response(serializer.data)
    elif request.method == 'PUT':
        serializer = LorryReceiptPaymentSerializer(payment, data=prepare_update_data(request, pk), partial=True)
        if serializer.is_valid():
            update_lr_payment(serializer, request=request)
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        delete_lr_payment(payment, request=request)
        return item_deleted_response()
