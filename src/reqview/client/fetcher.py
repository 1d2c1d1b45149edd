"""Single-shot HTTP request orchestrator.

:class:`Fetcher` wraps :class:`httpx.Client` and turns one request into a
:class:`~reqview.classifier.ClassificationResult`:

- **Validation** -- the URL must have a scheme and a host
  (:func:`validate_url`); the method must be one of GET, POST, PUT, DELETE
  or PATCH (:func:`validate_method`).
- **Timeout** -- every request is bounded by ``RequestConfig.timeout``
  (10 s by default). A request that times out is reported as
  ``REQUEST_FAILED``, also when it fires while the body is streaming.
- **No retries** -- a failed request is reported once; the user can resend.
- **Classification** -- status, content type and body are handed to
  :func:`~reqview.classifier.classify`.

Network failures never escape as exceptions: they come back as
:class:`~reqview.classifier.RenderFailure` values so the UI can show them
like any other result. Only an invalid method raises, as
:class:`~reqview.exceptions.InvalidUsageError`.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

import httpx

from reqview.classifier import (
    ClassificationResult,
    ErrorKind,
    RenderFailure,
    classify,
)
from reqview.exceptions import InvalidUsageError
from reqview.models import GlobalConfig, HTTPMethod
from reqview.render.styles import StyleScheme

logger = logging.getLogger(__name__)


def validate_url(url: str) -> bool:
    """Return ``True`` if *url* is absolute with a non-empty scheme and host.

    The scheme is not restricted here; ``ftp://host`` validates and fails
    later as an unsupported protocol.
    """
    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.netloc) and bool(parts.hostname)


def validate_method(method: str) -> HTTPMethod:
    """Match *method* case-insensitively against the supported methods.

    Raises:
        InvalidUsageError: If the method is not supported.
    """
    try:
        return HTTPMethod(method.strip().upper())
    except ValueError:
        allowed = ", ".join(m.value for m in HTTPMethod)
        raise InvalidUsageError(
            f"Unsupported method {method!r} (expected one of {allowed})"
        ) from None


@dataclass(frozen=True)
class Exchange:
    """One request and what came of it.

    ``status_code`` and ``reason`` are ``None`` when no response arrived.
    """

    method: str
    url: str
    result: ClassificationResult
    status_code: Optional[int] = None
    reason: str = ""
    content_type: str = ""
    elapsed: float = 0.0


class Fetcher:
    """Issues requests and classifies their responses.

    Must be used as a context manager so that the underlying connection
    pool is opened and closed around the requests it serves.

    Args:
        config: Effective configuration (request settings, render settings
            and styles).
        styles: Styling scheme handed to the renderers. Defaults to one
            built from ``config.styles`` honouring ``config.render.color``.
        transport: Optional httpx transport, mainly for tests.

    Example::

        with Fetcher(config) as fetcher:
            result = fetcher.fetch("GET", "https://api.github.com")
    """

    def __init__(
        self,
        config: Optional[GlobalConfig] = None,
        styles: Optional[StyleScheme] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config if config is not None else GlobalConfig()
        self._styles = (
            styles
            if styles is not None
            else StyleScheme.from_config(self._config.styles, self._config.render.color)
        )
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def styles(self) -> StyleScheme:
        return self._styles

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> Fetcher:
        request = self._config.request
        self._client = httpx.Client(
            timeout=request.timeout,
            verify=request.verify_ssl,
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def fetch(self, method: str, url: str) -> ClassificationResult:
        """Send one request and return the classified outcome."""
        return self.send(method, url).result

    def send(self, method: str, url: str) -> Exchange:
        """Send one request and return it together with response metadata.

        Args:
            method: HTTP method, case-insensitive.
            url: Absolute target URL.

        Raises:
            InvalidUsageError: If *method* is not supported.
        """
        assert self._client is not None, "Fetcher not initialised -- use as context manager"

        verb = validate_method(method).value
        url = url.strip()
        if not validate_url(url):
            logger.debug("Rejected URL %r", url)
            return Exchange(verb, url, RenderFailure(ErrorKind.INVALID_URL))

        started = time.monotonic()
        try:
            with self._client.stream(verb, url) as response:
                status = response.status_code
                reason = response.reason_phrase or ""
                content_type = response.headers.get("content-type", "")
                try:
                    body = response.read()
                except httpx.TimeoutException as exc:
                    logger.debug("Reading body of %s %s timed out: %s", verb, url, exc)
                    return Exchange(
                        verb,
                        url,
                        RenderFailure(ErrorKind.REQUEST_FAILED, str(exc) or type(exc).__name__),
                        status_code=status,
                        reason=reason,
                        content_type=content_type,
                        elapsed=time.monotonic() - started,
                    )
                except (httpx.TransportError, httpx.DecodingError, httpx.StreamError) as exc:
                    logger.debug("Reading body of %s %s failed: %s", verb, url, exc)
                    return Exchange(
                        verb,
                        url,
                        RenderFailure(ErrorKind.BODY_READ_FAILED, str(exc)),
                        status_code=status,
                        reason=reason,
                        content_type=content_type,
                        elapsed=time.monotonic() - started,
                    )
        except (httpx.TransportError, httpx.InvalidURL) as exc:
            logger.debug("%s %s failed: %s", verb, url, exc)
            detail = str(exc) or type(exc).__name__
            return Exchange(
                verb,
                url,
                RenderFailure(ErrorKind.REQUEST_FAILED, detail),
                elapsed=time.monotonic() - started,
            )

        elapsed = time.monotonic() - started
        logger.debug("%s %s -> %s in %.3fs", verb, url, status, elapsed)
        result = classify(status, content_type, body, self._config.render, self._styles)
        return Exchange(
            verb,
            url,
            result,
            status_code=status,
            reason=reason,
            content_type=content_type,
            elapsed=elapsed,
        )
