"""Transport capability used by the dispatcher, plus a requests-based default.

The dispatcher only knows the :class:`Transport` and :class:`Exchange`
protocols. :class:`RequestsTransport` implements them over a
``requests.Session`` and maps requests exceptions to courier errors.
"""

from __future__ import annotations

from typing import IO, Mapping, Protocol

import requests

from .config import TLSConfig
from .errors import (
    ConnectionFailedError,
    ReadError,
    RequestTimeoutError,
    TLSError,
    TransportError,
)

# Errors caused by the request itself; retrying cannot fix them.
_MALFORMED_REQUEST_ERRORS = (
    requests.exceptions.InvalidURL,
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.InvalidHeader,
    requests.exceptions.URLRequired,
)


class Exchange(Protocol):
    """An open response whose body has not been read yet."""

    status_code: int
    headers: Mapping[str, str]

    def read(self) -> bytes:
        """Return the whole body. Raises ReadError on failure."""
        ...

    def close(self) -> None:
        ...


class Transport(Protocol):
    """Performs one request/response exchange."""

    def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: IO[bytes] | None,
        tls: TLSConfig | None,
        timeout: float | None,
    ) -> Exchange:
        """Send one request. Raises TransportError if no response arrives."""
        ...

    def close(self) -> None:
        ...


class RequestsExchange:
    """Exchange backed by a streamed ``requests.Response``."""

    def __init__(self, response: requests.Response) -> None:
        self._response = response
        self.status_code = response.status_code
        self.headers = response.headers

    def read(self) -> bytes:
        try:
            return self._response.content
        except requests.exceptions.RequestException as exc:
            raise ReadError(str(exc)) from exc

    def close(self) -> None:
        self._response.close()


class RequestsTransport:
    """Transport built on a ``requests.Session``."""

    def __init__(self, session: requests.Session | None = None) -> None:
        self._session = session or requests.Session()

    def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: IO[bytes] | None,
        tls: TLSConfig | None,
        timeout: float | None,
    ) -> RequestsExchange:
        tls = tls or TLSConfig()
        try:
            response = self._session.request(
                method,
                url,
                headers=dict(headers),
                data=body,
                timeout=timeout,
                verify=tls.verify,
                cert=tls.client_cert,
                stream=True,
            )
        except requests.exceptions.RequestException as exc:
            raise self._map_exception(exc) from exc
        return RequestsExchange(response)

    @staticmethod
    def _map_exception(
        e: requests.exceptions.RequestException,
    ) -> TransportError:
        """Map requests exceptions to courier transport errors."""
        if isinstance(e, requests.exceptions.Timeout):
            return RequestTimeoutError(str(e))

        if isinstance(e, requests.exceptions.SSLError):
            return TLSError(str(e))

        if isinstance(e, requests.exceptions.ConnectionError):
            return ConnectionFailedError(str(e))

        if isinstance(e, _MALFORMED_REQUEST_ERRORS):
            return TransportError(str(e), retryable=False)

        # Generic fallback for other request exceptions
        return TransportError(str(e))

    def close(self) -> None:
        self._session.close()
