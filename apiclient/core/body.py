"""Request body strategies.

A body turns a logical payload into raw bytes plus the headers that payload
requires. Bodies are immutable and ``encode`` is deterministic, so the pipeline
may encode once for logging and once for sending.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol, Union, runtime_checkable
from uuid import uuid4

from apiclient.errors import EncodingError

from .codecs import Encoder, JSONEncoder

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=utf-8"

# Unreserved characters for form encoding; everything else is percent-escaped.
_FORM_SAFE = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789")

_CRLF = "\r\n"
# Boundary characters that need no quoting in the Content-Type header.
_BOUNDARY_CHARS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789'+_-.")
_BOUNDARY_MAX_LENGTH = 70


@runtime_checkable
class RequestBody(Protocol):
    """Capabilities the pipeline needs from a body.

    ``headers`` and ``is_empty`` are optional on custom bodies; the pipeline
    treats a missing ``headers`` as empty and a missing ``is_empty`` as False.
    """

    def encode(self) -> bytes: ...


def _frozen(headers: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(headers))


def _json_headers() -> Mapping[str, str]:
    return MappingProxyType({"Content-Type": JSON_CONTENT_TYPE})


@dataclass(frozen=True)
class EmptyBody:
    """No payload at all; the pipeline sends neither bytes nor body headers."""

    @property
    def headers(self) -> Mapping[str, str]:
        return MappingProxyType({})

    @property
    def is_empty(self) -> bool:
        return True

    def encode(self) -> bytes:
        return b""

    def __str__(self) -> str:
        return "EmptyBody()"


@dataclass(frozen=True)
class DataBody:
    """Pre-encoded bytes sent as-is."""

    data: bytes
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _frozen(self.headers))

    @property
    def is_empty(self) -> bool:
        return False

    def encode(self) -> bytes:
        return bytes(self.data)

    def __str__(self) -> str:
        try:
            text = bytes(self.data).decode("utf-8")
        except UnicodeDecodeError:
            text = "undecodable"
        return f"DataBody({text})"


@dataclass(frozen=True)
class JSONBody:
    """Any value the encoder can serialize, sent as JSON by default."""

    value: Any
    headers: Mapping[str, str] = field(default_factory=_json_headers)
    encoder: Encoder = field(default_factory=JSONEncoder)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _frozen(self.headers))

    @property
    def is_empty(self) -> bool:
        return False

    def encode(self) -> bytes:
        try:
            return self.encoder.encode(self.value)
        except EncodingError:
            raise
        except Exception as exc:
            raise EncodingError(exc) from exc

    def __str__(self) -> str:
        return f"JSONBody({self.value!r})"


def form_escape(text: str) -> str:
    """Percent-encode ``text`` leaving only ASCII letters and digits untouched.

    Raises UnicodeEncodeError for text that has no UTF-8 representation.
    """

    return "".join(
        chr(byte) if chr(byte) in _FORM_SAFE else f"%{byte:02X}"
        for byte in text.encode("utf-8")
    )


FormValues = Union[Sequence[tuple[str, Any]], Mapping[str, Any]]


@dataclass(frozen=True)
class FormBody:
    """URL-encoded form with fields kept in the order supplied."""

    values: FormValues

    def __post_init__(self) -> None:
        items = self.values.items() if isinstance(self.values, Mapping) else self.values
        object.__setattr__(self, "values", tuple((name, value) for name, value in items))

    @property
    def headers(self) -> Mapping[str, str]:
        return MappingProxyType({"Content-Type": FORM_CONTENT_TYPE})

    @property
    def is_empty(self) -> bool:
        return False

    def _encoded(self) -> str:
        return "&".join(
            f"{form_escape(str(name))}={form_escape('' if value is None else str(value))}"
            for name, value in self.values
        )

    def encode(self) -> bytes:
        try:
            return self._encoded().encode("ascii")
        except UnicodeEncodeError as exc:
            raise EncodingError(exc) from exc

    def __str__(self) -> str:
        try:
            return f"FormBody({self._encoded()})"
        except UnicodeEncodeError:
            return "FormBody(undecodable)"


@dataclass(frozen=True)
class FormField:
    """Plain text multipart part."""

    name: str
    value: str


@dataclass(frozen=True)
class FileField:
    """File upload multipart part."""

    name: str
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


MultipartPart = Union[FormField, FileField]


def _random_boundary() -> str:
    return str(uuid4()).upper()


@dataclass(frozen=True)
class MultipartFormBody:
    """``multipart/form-data`` payload.

    Pin ``boundary`` for reproducible output; otherwise a random one is drawn
    once per instance.
    """

    parts: Sequence[MultipartPart]
    boundary: str = field(default_factory=_random_boundary)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parts", tuple(self.parts))
        if not self.boundary:
            raise ValueError("multipart boundary must not be empty")
        if len(self.boundary) > _BOUNDARY_MAX_LENGTH:
            raise ValueError(f"multipart boundary is longer than {_BOUNDARY_MAX_LENGTH} characters")
        if not set(self.boundary) <= _BOUNDARY_CHARS:
            raise ValueError(f"invalid multipart boundary {self.boundary!r}")

    @property
    def headers(self) -> Mapping[str, str]:
        return MappingProxyType({"Content-Type": f"multipart/form-data; boundary={self.boundary}"})

    @property
    def is_empty(self) -> bool:
        return False

    def _quoted(self, value: str) -> str:
        if any(char in value for char in '"\r\n'):
            raise EncodingError(f"cannot quote {value!r} in a multipart header")
        return f'"{value}"'

    def _disposition(self, name: str) -> str:
        return f"Content-Disposition: form-data; name={self._quoted(name)}"

    def _encode_part(self, part: MultipartPart) -> list[bytes]:
        head = f"--{self.boundary}{_CRLF}{self._disposition(part.name)}"
        if isinstance(part, FileField):
            if any(char in part.content_type for char in _CRLF):
                raise EncodingError(f"invalid content type {part.content_type!r}")
            head += f"; filename={self._quoted(part.filename)}{_CRLF}Content-Type: {part.content_type}"
            content = part.content.encode("utf-8") if isinstance(part.content, str) else bytes(part.content)
        else:
            content = part.value.encode("utf-8")
        head += _CRLF + _CRLF

        if f"--{self.boundary}".encode("utf-8") in content:
            raise EncodingError(f"boundary {self.boundary!r} occurs inside part {part.name!r}")
        return [head.encode("utf-8"), content, _CRLF.encode("ascii")]

    def encode(self) -> bytes:
        chunks: list[bytes] = []
        try:
            for part in self.parts:
                chunks.extend(self._encode_part(part))
            chunks.append(f"--{self.boundary}--".encode("utf-8"))
        except UnicodeEncodeError as exc:
            raise EncodingError(exc) from exc
        return b"".join(chunks)

    def __str__(self) -> str:
        try:
            text = self.encode().decode("utf-8")
        except (EncodingError, UnicodeDecodeError):
            text = "undecodable"
        return f"MultipartFormBody({text})"


__all__ = [
    "DataBody",
    "EmptyBody",
    "FileField",
    "FormBody",
    "FormField",
    "JSONBody",
    "MultipartFormBody",
    "MultipartPart",
    "RequestBody",
    "form_escape",
]
