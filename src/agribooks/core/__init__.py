"""Core errors, HTTP mapping and shared helpers."""
from agribooks.core.error_mapper import ErrorMapper
from agribooks.core.exceptions import (AgribooksError, AlertSinkFailure,
                                       ForbiddenError, InvalidArgument,
                                       NotFoundError, StorageUnavailable,
                                       UnauthorizedError)
from agribooks.core.utils import (end_of_day, format_money, to_local_naive,
                                  to_money)

__all__ = [
    "AgribooksError",
    "AlertSinkFailure",
    "ErrorMapper",
    "ForbiddenError",
    "InvalidArgument",
    "NotFoundError",
    "StorageUnavailable",
    "UnauthorizedError",
    "end_of_day",
    "format_money",
    "to_local_naive",
    "to_money",
]
