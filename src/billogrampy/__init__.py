"""BillogramPy - Python client library for the Billogram v2 invoicing API."""

from billogrampy._version import __version__
from billogrampy.client import BillogramClient
from billogrampy.exceptions import (
    BillogramAPIError,
    InvalidAuthenticationError,
    InvalidFieldCombinationError,
    InvalidFieldValueError,
    InvalidObjectStateError,
    NotAuthorizedError,
    ObjectNotFoundError,
    PermissionDeniedError,
    ReadOnlyFieldError,
    RequestDataError,
    RequestFormError,
    ServiceMalfunctioningError,
    UnknownFieldError,
)
from billogrampy.objects import BillogramObject, SimpleObject, SingletonObject
from billogrampy.query import Query
from billogrampy.resources import BillogramClass, SimpleClass

__all__ = [
    "__version__",
    "BillogramClient",
    "BillogramClass",
    "SimpleClass",
    "BillogramObject",
    "SimpleObject",
    "SingletonObject",
    "Query",
    "BillogramAPIError",
    "InvalidAuthenticationError",
    "InvalidFieldCombinationError",
    "InvalidFieldValueError",
    "InvalidObjectStateError",
    "NotAuthorizedError",
    "ObjectNotFoundError",
    "PermissionDeniedError",
    "ReadOnlyFieldError",
    "RequestDataError",
    "RequestFormError",
    "ServiceMalfunctioningError",
    "UnknownFieldError",
]
