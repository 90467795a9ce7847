"""Retrying dispatcher: one logical request over one or more transport tries.

Only transport failures are retried. A completed exchange is a success
whatever its status code, and a failure while reading the body of a completed
exchange is returned at once.
"""

from __future__ import annotations

import logging
from contextlib import closing
from time import sleep
from typing import IO, Any, Callable, Mapping, TypeVar

from requests.structures import CaseInsensitiveDict

from .config import TLSConfig
from .errors import DispatchError, HttpClientError, ReadError, TransportError
from .response import ResponseCapture
from .transport import Transport
from .types import Err, Ok, Result

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _build_meta(
    method: str,
    url: str,
    attempts: int,
    timeout: float | None,
    status_code: int | None = None,
    final_error: str | None = None,
) -> dict[str, Any]:
    """Construct the metadata dictionary attached to every result."""
    meta: dict[str, Any] = {
        "method": method,
        "url": url,
        "attempts": attempts,
        "timeout_s": timeout,
    }
    if status_code is not None:
        meta["status"] = status_code
        meta["status_code"] = status_code
    if final_error is not None:
        meta["final_error"] = final_error
    return meta


def _rewind_point(body: IO[bytes] | None) -> int | None:
    """Return the position to seek back to before a retry, if any."""
    if body is None:
        return None
    seekable = getattr(body, "seekable", None)
    if callable(seekable) and seekable():
        return body.tell()
    return None


def dispatch(
    method: str,
    url: str,
    headers: Mapping[str, str],
    body: IO[bytes] | None,
    transport: Transport,
    attempts: int,
    delay: float,
    *,
    tls: TLSConfig | None = None,
    timeout: float | None = None,
) -> Result[ResponseCapture, HttpClientError]:
    """Send one request, retrying transport failures.

    Args:
        method: HTTP method.
        url: Absolute URL to request.
        headers: Headers sent with every try.
        body: Request body stream, or None for no body.
        transport: Collaborator performing each exchange.
        attempts: Extra tries after the first failure; 0 means one try only.
            A body stream that cannot be rewound is never retried.
        delay: Seconds to sleep before each retry.
        tls: TLS settings handed to the transport.
        timeout: Per-try timeout handed to the transport.

    Returns:
        Ok with the captured response, or Err with a DispatchError (tries
        exhausted), a ReadError (body read failed), or an HttpClientError
        (unexpected transport failure).
    """
    max_attempts = 1 + max(0, attempts)
    start = _rewind_point(body)
    # A drained one-shot stream cannot be sent again.
    replayable = body is None or start is not None
    tries = 0
    last_error: TransportError | None = None

    while tries < max_attempts:
        tries += 1
        if tries > 1 and start is not None:
            body.seek(start)  # type: ignore[union-attr]
        logger.debug(
            "%s %s: attempt %d of %d", method, url, tries, max_attempts
        )
        try:
            exchange = transport.send(
                method,
                url,
                headers=headers,
                body=body,
                tls=tls,
                timeout=timeout,
            )
        except TransportError as exc:
            last_error = exc
            if tries >= max_attempts or not exc.retryable:
                break
            if not replayable:
                logger.warning(
                    "%s %s failed (%s: %s); body stream cannot be rewound, "
                    "not retrying",
                    method,
                    url,
                    type(exc).__name__,
                    exc,
                )
                break
            logger.warning(
                "%s %s failed (%s: %s); retrying in %.1fs, %d retries left",
                method,
                url,
                type(exc).__name__,
                exc,
                delay,
                max_attempts - tries,
            )
            sleep(delay)
            continue
        except Exception as exc:
            wrapped = HttpClientError(str(exc))
            wrapped.__cause__ = exc
            return Err(
                wrapped,
                meta=_build_meta(
                    method, url, tries, timeout, final_error=type(exc).__name__
                ),
            )

        with closing(exchange):
            status_code = exchange.status_code
            try:
                content = exchange.read()
            except ReadError as exc:
                return Err(
                    exc,
                    meta=_build_meta(
                        method,
                        url,
                        tries,
                        timeout,
                        status_code=status_code,
                        final_error=type(exc).__name__,
                    ),
                )
            capture = ResponseCapture(
                body=content,
                headers=CaseInsensitiveDict(exchange.headers),
                status_code=status_code,
            )
        logger.debug("%s %s: status %d", method, url, status_code)
        return Ok(
            capture,
            meta=_build_meta(
                method, url, tries, timeout, status_code=status_code
            ),
        )

    assert last_error is not None
    logger.warning(
        "%s %s failed after %d attempt(s): %s", method, url, tries, last_error
    )
    error = DispatchError(
        f"{method} {url} failed after {tries} attempt(s): {last_error}",
        last_error=last_error,
        attempts=tries,
    )
    error.__cause__ = last_error
    return Err(
        error,
        meta=_build_meta(
            method, url, tries, timeout, final_error=type(last_error).__name__
        ),
    )


def retry(
    attempts: int,
    delay: float,
    fn: Callable[[], T],
    *,
    retry_on: tuple[type[BaseException], ...] = (TransportError,),
) -> T:
    """Call ``fn``, retrying on ``retry_on`` errors with a fixed delay.

    ``attempts`` is the number of extra calls after the first failure, so
    ``fn`` runs at most ``attempts + 1`` times. A TransportError marked not
    retryable is raised at once. The last error is re-raised when calls run
    out.
    """
    max_attempts = 1 + max(0, attempts)
    tries = 0
    while True:
        tries += 1
        try:
            return fn()
        except retry_on as exc:
            if tries >= max_attempts or not getattr(exc, "retryable", True):
                raise
            logger.warning(
                "call failed (%s: %s); retrying in %.1fs, %d retries left",
                type(exc).__name__,
                exc,
                delay,
                max_attempts - tries,
            )
            sleep(delay)
