"""Shared helpers: audit logging, identifiers, money and financial years"""
import logging
import time
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from .exceptions import WorkflowError
from .models import AuditLog

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal('0.01')


def get_client_ip(request):
    """Extract client IP address from request"""
    if not request or not hasattr(request, 'META'):
        return None
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR')
    return ip or None


def create_audit_log(request=None, action=None, model_name=None, object_id=None,
                     changes=None, user=None, object_reference=None):
    """
    Create an audit log entry

    Args:
        request: Django request object (for user and IP) - optional if user is provided
        action: Action type (invoice_create, payment_add, lr_link, etc.)
        model_name: Name of the model being acted upon
        object_id: ID of the object (as string)
        changes: Dictionary of changes made
        user: Optional user override (defaults to request.user if request provided)
        object_reference: Reference identifier (e.g., invoice number, LR number)
    """
    try:
        audit_user = None
        if user:
            audit_user = user
        elif request and hasattr(request, 'user'):
            audit_user = request.user

        ip_address = get_client_ip(request) if request else None

        if not action or not model_name or not object_id:
            logger.warning(f"Audit log creation skipped: missing required fields (action={action}, model_name={model_name}, object_id={object_id})")
            return None

        return AuditLog.objects.create(
            user=audit_user if audit_user and audit_user.is_authenticated else None,
            action=action,
            model_name=model_name,
            object_id=str(object_id),
            object_reference=object_reference,
            changes=changes or {},
            ip_address=ip_address
        )
    except Exception as e:
        # Don't fail the main operation if audit logging fails
        logger.error(f"Failed to create audit log: {str(e)}")
        return None


def current_millis():
    return int(time.time() * 1000)


def generate_document_id(model, prefix):
    """
    Generate a `<prefix>-<timestamp>` identifier that is not taken yet.

    The millisecond timestamp is bumped until no document of `model` uses it.
    """
    stamp = current_millis()
    candidate = f"{prefix}-{stamp}"
    while model.objects.filter(pk=candidate).exists():
        stamp += 1
        candidate = f"{prefix}-{stamp}"
    return candidate


def generate_reference_number(prefix):
    """Human-facing number such as LR123456 (last six digits of the timestamp)"""
    return f"{prefix}{str(current_millis())[-6:]}"


def to_decimal(value):
    """Coerce numbers coming from JSON documents into Decimal"""
    if value is None or value == '':
        return Decimal('0')
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal('0')


def quantize(value):
    return to_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def parse_date(value):
    """Accept a date, datetime or ISO string and return a date"""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(str(value)[:10]).date()


def get_financial_year(value):
    """
    Indian financial year label for a date, e.g. 2024-05-01 -> '2024-2025'.

    The year starts in April, so January-March belong to the previous one.
    """
    day = parse_date(value)
    if day is None:
        return None
    if day.month >= 4:
        return f"{day.year}-{day.year + 1}"
    return f"{day.year - 1}-{day.year}"


def financial_year_bounds(label):
    """Inclusive (start, end) dates for a '2024-2025' style label"""
    start_year = int(str(label).split('-')[0])
    return date(start_year, 4, 1), date(start_year + 1, 3, 31)


BALANCE_TOLERANCE = Decimal('0.001')


def ensure_payment_amount(amount, balance_due):
    """
    Reject payments that are not positive or that exceed what is still due.

    A tolerance of 0.001 absorbs rounding left over from float totals.
    """
    amount = to_decimal(amount)
    if amount <= 0:
        raise WorkflowError({'amount': 'Amount must be greater than zero.'})
    if amount > to_decimal(balance_due) + BALANCE_TOLERANCE:
        raise WorkflowError({'amount': f'Amount {amount} exceeds the balance due of {quantize(balance_due)}.'})
    return amount
