from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework import status
import logging

logger = logging.getLogger("huddle.core")


class DomainError(APIException):
    """
    Base class for business-rule failures raised by the service layer.

    Carries a human readable reason which is surfaced verbatim to the caller.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request could not be processed."
    default_code = "domain_error"


class NotFound(DomainError):
    """Referenced activity / participant / user does not exist (or is deleted)."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found."
    default_code = "not_found"

    @classmethod
    def for_resource(cls, resource, field, value):
        return cls(f"{resource} not found with {field}: '{value}'")


class BadRequest(DomainError):
    """A precondition was violated (not open, not creator, capacity, age, duplicate)."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request."
    default_code = "bad_request"


class Conflict(DomainError):
    """The target was already processed by someone else; re-fetch before retrying."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"


def custom_exception_handler(exc, context):
    """
    Wrap DRF + Django exceptions into a consistent response format.

    Success responses (2xx) are not touched.
    Only errors come through here.
    """
    response = drf_exception_handler(exc, context)

    # If DRF handled it, wrap it
    if response is not None:
        if isinstance(exc, DomainError):
            view = context.get("view")
            logger.info(
                f"{exc.__class__.__name__} in {view.__class__.__name__ if view else 'unknown'}: {exc.detail}"
            )
        return Response(
            {
                "success": False,
                "status_code": response.status_code,
                "errors": response.data,
            },
            status=response.status_code,
        )

    # Unhandled exceptions -> 500
    logger.exception("Unhandled API exception", exc_info=exc)

    return Response(
        {
            "success": False,
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "errors": {"detail": "Internal server error."},
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
