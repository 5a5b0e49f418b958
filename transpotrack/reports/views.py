import logging

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from django.shortcuts import get_object_or_404

from transpotrack.billing.models import Invoice, Payment
from transpotrack.consignments.models import LorryReceipt
from transpotrack.parties.models import Client, Supplier
from transpotrack.trips.models import TripNote, SupplierPayment
from . import ledger

logger = logging.getLogger('transpotrack.reports')


def _financial_year(request):
    value = request.query_params.get('financialYear', None)
    if not value or value == 'All':
        return None
    return value


@api_view(['GET'])
@permission_classes([AllowAny])
def client_ledger_summary(request):
    """Balance of every client with activity, optionally for one financial year"""
    rows = ledger.client_summary(
        Client.objects.all(),
        Invoice.objects.all(),
        Payment.objects.all(),
        financial_year=_financial_year(request),
    )
    rows = ledger.search_and_sort(
        rows,
        search=request.query_params.get('search', None),
        ordering=request.query_params.get('ordering', None),
        allowed=ledger.CLIENT_SORT_KEYS,
    )
    return Response(rows)


@api_view(['GET'])
@permission_classes([AllowAny])
def client_ledger_detail(request, client_id):
    """Statement of one client with running balance"""
    client = get_object_or_404(Client, pk=client_id)
    statement = ledger.client_statement(
        client,
        Invoice.objects.filter(client_id=client.id),
        Payment.objects.filter(invoice_id__in=Invoice.objects.filter(client_id=client.id).values('id')),
        financial_year=_financial_year(request),
    )
    logger.debug(f"Client statement for {client.id}: {len(statement['entries'])} entries")
    return Response(statement)


@api_view(['GET'])
@permission_classes([AllowAny])
def supplier_ledger_summary(request):
    """Balance of every supplier with activity, optionally for one financial year"""
    rows = ledger.supplier_summary(
        Supplier.objects.all(),
        TripNote.objects.all(),
        SupplierPayment.objects.all(),
        financial_year=_financial_year(request),
    )
    rows = ledger.search_and_sort(
        rows,
        search=request.query_params.get('search', None),
        ordering=request.query_params.get('ordering', None),
        allowed=ledger.SUPPLIER_SORT_KEYS,
    )
    return Response(rows)


@api_view(['GET'])
@permission_classes([AllowAny])
def supplier_ledger_detail(request, supplier_id):
    """Statement of one supplier with running balance"""
    supplier = get_object_or_404(Supplier, pk=supplier_id)
    notes = TripNote.objects.filter(supplier_id=supplier.id)
    statement = ledger.supplier_statement(
        supplier,
        notes,
        SupplierPayment.objects.filter(trip_note_id__in=notes.values('id')),
        financial_year=_financial_year(request),
    )
    logger.debug(f"Supplier statement for {supplier.id}: {len(statement['entries'])} entries")
    return Response(statement)


@api_view(['GET'])
@permission_classes([AllowAny])
def financial_year_list(request):
    years = ledger.financial_years(
        Invoice.objects.only('id', 'date'),
        TripNote.objects.only('id', 'date'),
    )
    return Response(years)


@api_view(['GET'])
@permission_classes([AllowAny])
def dashboard(request):
    """Dashboard KPIs: counts, outstanding amounts, recent activity and monthly revenue"""
    summary = ledger.dashboard_summary(
        LorryReceipt.objects.all(),
        Invoice.objects.all(),
        TripNote.objects.all(),
        SupplierPayment.objects.all(),
    )
    return Response(summary)
