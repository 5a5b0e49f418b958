import logging

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = 'Item not found'


class WorkflowError(ValidationError):
    """A business rule rejected the request (payment over balance, LR already billed, ...)"""
    default_detail = 'The operation is not allowed.'
    default_code = 'workflow'


def api_exception_handler(exc, context):
    """
    DRF exception handler for the whole API.

    Missing documents answer 404 {"message": "Item not found"}. Anything DRF
    does not know how to render is logged and answered with a 500 carrying
    the error text.
    """
    if isinstance(exc, (Http404, NotFound)):
        return Response({'message': NOT_FOUND_MESSAGE}, status=status.HTTP_404_NOT_FOUND)

    response = exception_handler(exc, context)
    if response is not None:
        return response

    request = context.get('request')
    path = getattr(request, 'path', '?')
    logger.error(f"Unhandled error on {path}: {str(exc)}", exc_info=exc)
    return Response({'message': str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
