from rest_framework import status
from rest_framework.exceptions import APIException


class OrderError(APIException):
    """Base class for every domain failure raised by the order services."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Order operation failed."
    default_code = "order_error"


class NotFound(OrderError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Referenced record not found."
    default_code = "not_found"


class Mismatch(OrderError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Catalog entry does not match the request."
    default_code = "mismatch"


class InvalidState(OrderError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Operation not allowed in the current status."
    default_code = "invalid_state"


class InvalidAmount(OrderError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid amount."
    default_code = "invalid_amount"


class LimitReached(OrderError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Negotiation limit reached."
    default_code = "limit_reached"


class Unauthorized(OrderError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You do not have permission to perform this action."
    default_code = "unauthorized"
