"""Networking layer: payload encoding, retrying dispatch, and the client."""

from .client import HttpClient
from .config import RequestConfig, TLSConfig
from .dispatch import dispatch, retry
from .errors import (
    ConnectionFailedError,
    DeserializationError,
    DispatchError,
    EncodingError,
    HttpClientError,
    ReadError,
    RequestTimeoutError,
    SerializationError,
    TLSError,
    TransportError,
    UnsupportedPayloadError,
)
from .payload import Stream, Structured, Text, classify, encode
from .response import ResponseCapture, decode_json
from .transport import RequestsTransport
from .types import Err, Ok, Result

__all__ = [
    "ConnectionFailedError",
    "DeserializationError",
    "DispatchError",
    "EncodingError",
    "Err",
    "HttpClient",
    "HttpClientError",
    "Ok",
    "ReadError",
    "RequestConfig",
    "RequestTimeoutError",
    "RequestsTransport",
    "ResponseCapture",
    "Result",
    "SerializationError",
    "Stream",
    "Structured",
    "TLSConfig",
    "TLSError",
    "Text",
    "TransportError",
    "UnsupportedPayloadError",
    "classify",
    "decode_json",
    "dispatch",
    "encode",
    "retry",
]
