"""reverseip: client for the Reverse IP/DNS lookup API."""

from .client import Client
from .context import Context
from .errors import (
    APIError,
    ArgumentError,
    CancelledError,
    DeadlineExceededError,
    ParseError,
    ReadError,
    ReverseIPError,
    StatusError,
    TransportError,
)
from .models import LookupResponse, LookupResult, Response
from .options import Option, apply_options, from_domain, output_format

__version__ = "0.1.0"

__all__ = [
    "APIError",
    "ArgumentError",
    "CancelledError",
    "Client",
    "Context",
    "DeadlineExceededError",
    "LookupResponse",
    "LookupResult",
    "Option",
    "ParseError",
    "ReadError",
    "Response",
    "ReverseIPError",
    "StatusError",
    "TransportError",
    "apply_options",
    "from_domain",
    "output_format",
]
