"""DRF exception handler that keeps unexpected failures in the JSON shape."""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    logger.error(
        "Unhandled error in %s", type(view).__name__, exc_info=(type(exc), exc, exc.__traceback__)
    )
    return Response(
        {"message": "Internal server error", "error": str(exc)},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
