"""Core building blocks."""

from .body import (
    DataBody,
    EmptyBody,
    FileField,
    FormBody,
    FormField,
    JSONBody,
    MultipartFormBody,
    RequestBody,
)
from .client import Client
from .codecs import Decoder, Encoder, JSONDecoder, JSONEncoder
from .headers import basic_auth_header, resolve_headers
from .publisher import RequestPublisher, Subscription
from .request import Request
from .validation import UnacceptableStatusCode, require_success

__all__ = [
    "Client",
    "DataBody",
    "Decoder",
    "EmptyBody",
    "Encoder",
    "FileField",
    "FormBody",
    "FormField",
    "JSONBody",
    "JSONDecoder",
    "JSONEncoder",
    "MultipartFormBody",
    "Request",
    "RequestBody",
    "RequestPublisher",
    "Subscription",
    "UnacceptableStatusCode",
    "basic_auth_header",
    "require_success",
    "resolve_headers",
]
