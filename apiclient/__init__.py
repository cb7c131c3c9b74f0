"""
apiclient: declarative, typed HTTP requests over a pluggable transport.

Requests are immutable descriptors (``Request``) resolved by a ``Client``
against a shared ``ClientConfig``. Results come back either from an awaited
``Client.send`` or from a cold ``RequestPublisher``; both run the same
pipeline and raise the same ``ClientError`` subclasses.
"""

from .config import BasicAuth, ClientConfig, Settings, get_settings
from .core import (
    Client,
    DataBody,
    EmptyBody,
    FileField,
    FormBody,
    FormField,
    JSONBody,
    JSONDecoder,
    JSONEncoder,
    MultipartFormBody,
    Request,
    RequestBody,
    RequestPublisher,
    Subscription,
    UnacceptableStatusCode,
    require_success,
)
from .errors import (
    ClientError,
    DecodingError,
    EncodingError,
    InvalidRequestError,
    RequestError,
    RequestErrorKind,
    ResponseError,
    TransportError,
    TransportFailure,
)
from .logging import configure_logging
from .main import create_client
from .models import EmptyResponse, HTTPMethod, RawResponse, WireRequest
from .transport import HttpxTransport, Transport

__version__ = "0.1.0"

__all__ = [
    "BasicAuth",
    "Client",
    "ClientConfig",
    "ClientError",
    "DataBody",
    "DecodingError",
    "EmptyBody",
    "EmptyResponse",
    "EncodingError",
    "FileField",
    "FormBody",
    "FormField",
    "HTTPMethod",
    "HttpxTransport",
    "InvalidRequestError",
    "JSONBody",
    "JSONDecoder",
    "JSONEncoder",
    "MultipartFormBody",
    "RawResponse",
    "Request",
    "RequestBody",
    "RequestError",
    "RequestErrorKind",
    "RequestPublisher",
    "ResponseError",
    "Settings",
    "Subscription",
    "Transport",
    "TransportError",
    "TransportFailure",
    "UnacceptableStatusCode",
    "WireRequest",
    "__version__",
    "configure_logging",
    "create_client",
    "get_settings",
    "require_success",
]
