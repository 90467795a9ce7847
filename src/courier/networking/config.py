"""Configuration models for the HttpClient interface."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from requests.structures import CaseInsensitiveDict

DEFAULT_RETRIES = 10
DEFAULT_RETRY_DELAY_SECONDS = 10.0


@dataclass(frozen=True)
class TLSConfig:
    """TLS settings handed to the transport untouched.

    ``verify`` is either a bool or a path to a CA bundle; ``client_cert`` is a
    PEM path or a ``(cert, key)`` pair.
    """

    verify: Union[bool, str] = True
    client_cert: Union[str, tuple[str, str], None] = None


def _default_headers() -> CaseInsensitiveDict[str]:
    """Return an empty case-insensitive header mapping."""

    return CaseInsensitiveDict()


@dataclass
class RequestConfig:
    """Per-client request settings.

    Callers mutate this between calls to change headers, TLS, or the retry
    policy; changes take effect on the next dispatch. ``retries`` counts extra
    tries after the first failure, so ``retries=0`` means a single try.
    """

    tls: TLSConfig | None = None
    retries: int = DEFAULT_RETRIES
    retry_delay_seconds: float = DEFAULT_RETRY_DELAY_SECONDS
    headers: CaseInsensitiveDict[str] = field(default_factory=_default_headers)
    timeout_seconds: float | None = None

    def __post_init__(self) -> None:
        self.validate()
        # Copy so later edits to the caller's dict do not leak in.
        self.headers = CaseInsensitiveDict(self.headers)

    def validate(self) -> None:
        """Raise ValueError if the current settings cannot be dispatched."""
        if self.retries < 0:
            raise ValueError("retries must be >= 0")
        if self.retry_delay_seconds < 0:
            raise ValueError("retry_delay_seconds must be >= 0")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0 when provided")
