"""
Exception handling for the Family Tree API.
"""
import logging
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


def exception_handler(exc, context):
    """
    DRF exception handler that turns unexpected errors into a generic 500.

    Expected API errors (validation, authentication, 404) keep DRF's
    handling. Anything else is logged with its traceback.
    """
    response = drf_exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get('view')
    logger.exception(f"Unhandled error in {view.__class__.__name__ if view else 'API'}: {exc}")
    return Response(
        {'error': 'An internal error occurred.'},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )
