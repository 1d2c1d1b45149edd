"""Response classification: decide how a response body is shown.

:func:`classify` takes the three facts the HTTP layer knows about a
response -- status code, declared content type and raw body -- and returns
either :class:`Formatted` text ready for display or a :class:`RenderFailure`
describing why nothing could be rendered. It never raises for a bad body:
parse errors from the renderers are caught here and turned into values.

Routing rules:

1. Any status other than 200 is a ``NON_SUCCESS_STATUS`` failure; the body
   is not looked at.
2. A declared JSON media type (``application/json`` or any ``+json``
   suffix) goes to the JSON renderer.
3. Everything else follows the configured
   :class:`~reqview.models.NonJSONPolicy`: formatted as HTML/text and
   truncated, or rejected as ``NOT_JSON``.

The declared type always decides; a JSON-looking body served as
``text/plain`` is never sent to the JSON renderer.
"""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import Optional, Union

from reqview.exceptions import HTMLParseError, InvalidJSONError
from reqview.exit_codes import (
    EXIT_CONNECTION_ERROR,
    EXIT_FORMAT_ERROR,
    EXIT_NON_SUCCESS_STATUS,
)
from reqview.models import NonJSONPolicy, RenderConfig
from reqview.render.html_renderer import format_html
from reqview.render.json_renderer import format_json
from reqview.render.styles import StyleScheme
from reqview.render.text import truncate

SUCCESS_STATUS = 200


class ErrorKind(str, enum.Enum):
    """Why a response could not be rendered.

    Each member carries the fixed user-facing message shown in the error
    document and the process exit code used by ``reqview fetch``.
    """

    INVALID_URL = "invalid_url"
    REQUEST_FAILED = "request_failed"
    NON_SUCCESS_STATUS = "non_success_status"
    NOT_JSON = "not_json"
    INVALID_JSON = "invalid_json"
    BODY_READ_FAILED = "body_read_failed"
    HTML_PARSE_FAILED = "html_parse_failed"

    @property
    def message(self) -> str:
        return _MESSAGES[self]

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES[self]


_MESSAGES = {
    ErrorKind.INVALID_URL: "invalid URL, please try again",
    ErrorKind.REQUEST_FAILED: "failed to make the request",
    ErrorKind.NON_SUCCESS_STATUS: "received non-200 response code",
    ErrorKind.NOT_JSON: "response is not JSON",
    ErrorKind.INVALID_JSON: "invalid JSON format",
    ErrorKind.BODY_READ_FAILED: "failed to read the response body",
    ErrorKind.HTML_PARSE_FAILED: "error formatting text",
}

_EXIT_CODES = {
    ErrorKind.INVALID_URL: EXIT_CONNECTION_ERROR,
    ErrorKind.REQUEST_FAILED: EXIT_CONNECTION_ERROR,
    ErrorKind.NON_SUCCESS_STATUS: EXIT_NON_SUCCESS_STATUS,
    ErrorKind.NOT_JSON: EXIT_FORMAT_ERROR,
    ErrorKind.INVALID_JSON: EXIT_FORMAT_ERROR,
    ErrorKind.BODY_READ_FAILED: EXIT_CONNECTION_ERROR,
    ErrorKind.HTML_PARSE_FAILED: EXIT_FORMAT_ERROR,
}


class ContentKind(str, enum.Enum):
    """Which renderer produced a :class:`Formatted` result."""

    JSON = "json"
    TEXT = "text"


@dataclass(frozen=True)
class Formatted:
    """Successfully rendered body.

    Attributes:
        text: The rendered output, possibly carrying style markup.
        content: Which renderer produced it.
        markup: Whether ``text`` contains Rich markup.
        truncated: Whether ``text`` was cut to the configured maximum.
    """

    text: str
    content: ContentKind
    markup: bool = False
    truncated: bool = False

    ok = True


@dataclass(frozen=True)
class RenderFailure:
    """A response that could not be rendered, with the reason."""

    kind: ErrorKind
    detail: str = ""

    ok = False

    @property
    def document(self) -> str:
        """The error document shown to the user in place of a body."""
        return format_error(self.kind.message, self.detail)


ClassificationResult = Union[Formatted, RenderFailure]


def format_error(message: str, details: str = "") -> str:
    """Build the one-line error document.

    Example::

        >>> format_error("error", "details")
        '{ "error": "error", "details": "details" }'
        >>> format_error("invalid URL, please try again")
        '{ "error": "invalid URL, please try again" }'
    """
    parts = [f'"error": {_quote(message)}']
    if details:
        parts.append(f'"details": {_quote(details)}')
    return "{ " + ", ".join(parts) + " }"


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def media_type(content_type: Optional[str]) -> str:
    """Return the lower-cased ``type/subtype`` of a Content-Type header value."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def charset(content_type: Optional[str]) -> Optional[str]:
    """Return the ``charset`` parameter of a Content-Type value, if present."""
    if not content_type:
        return None
    for param in content_type.split(";")[1:]:
        name, _, value = param.partition("=")
        if name.strip().lower() == "charset":
            value = value.strip().strip('"').strip("'")
            return value or None
    return None


def is_json_type(content_type: Optional[str]) -> bool:
    """Whether the declared type is a JSON media type."""
    mtype = media_type(content_type)
    return mtype == "application/json" or mtype.endswith("+json")


def classify(
    status_code: int,
    content_type: Optional[str],
    body: Union[bytes, str],
    settings: Optional[RenderConfig] = None,
    styles: Optional[StyleScheme] = None,
) -> ClassificationResult:
    """Route a response to a renderer and return the outcome as a value.

    Args:
        status_code: HTTP status of the response.
        content_type: The ``Content-Type`` header value, or ``None``.
        body: The raw body.
        settings: Truncation and non-JSON policy; defaults to
            :class:`~reqview.models.RenderConfig` defaults.
        styles: Styling scheme; defaults to :meth:`StyleScheme.plain`.

    Returns:
        :class:`Formatted` on success, :class:`RenderFailure` otherwise.
    """
    settings = settings if settings is not None else RenderConfig()
    styles = styles if styles is not None else StyleScheme.plain()

    if status_code != SUCCESS_STATUS:
        return RenderFailure(ErrorKind.NON_SUCCESS_STATUS, str(status_code))

    if is_json_type(content_type):
        try:
            text = format_json(body, styles)
        except InvalidJSONError as exc:
            return RenderFailure(ErrorKind.INVALID_JSON, str(exc))
        return Formatted(text, ContentKind.JSON, markup=styles.markup)

    if settings.non_json == NonJSONPolicy.REJECT:
        return RenderFailure(ErrorKind.NOT_JSON, content_type or "")

    try:
        text = format_html(body, styles, encoding=charset(content_type))
    except HTMLParseError as exc:
        return RenderFailure(ErrorKind.HTML_PARSE_FAILED, str(exc))
    shown = truncate(text, settings.max_length, settings.ellipsis)
    return Formatted(
        shown,
        ContentKind.TEXT,
        markup=styles.markup,
        truncated=shown != text,
    )
