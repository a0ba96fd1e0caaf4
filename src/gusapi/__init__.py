"""Central exports of the ``gusapi`` package."""

from .client import GusApiClient, SoapGusApiClient
from .constants import (
    MAX_IDENTIFIERS,
    BulkReportTypes,
    GetValueParameters,
    MessageCodes,
    ReportTypes,
)
from .environment import DEVELOPMENT, PRODUCTION, Environment, get_environment
from .exceptions import (
    GusApiError,
    InvalidReportTypeError,
    InvalidServerResponseError,
    InvalidSessionError,
    InvalidUserKeyError,
    NotFoundError,
    TransportError,
)
from .gus_api import GusApi
from .json_serializable import JsonSerializable, dumps, json_default
from .search_report import SearchReport
from .utils.logging_setup import setup_logger

__all__ = [
    "BulkReportTypes",
    "DEVELOPMENT",
    "Environment",
    "GetValueParameters",
    "GusApi",
    "GusApiClient",
    "GusApiError",
    "InvalidReportTypeError",
    "InvalidServerResponseError",
    "InvalidSessionError",
    "InvalidUserKeyError",
    "JsonSerializable",
    "MAX_IDENTIFIERS",
    "MessageCodes",
    "NotFoundError",
    "PRODUCTION",
    "ReportTypes",
    "SearchReport",
    "SoapGusApiClient",
    "TransportError",
    "dumps",
    "get_environment",
    "json_default",
    "setup_logger",
]
