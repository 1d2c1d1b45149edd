"""Exception hierarchy for reqview.

All exceptions inherit from :class:`ReqviewError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`reqview.exit_codes`.
The top-level error handler in :func:`reqview.app.main` catches
``ReqviewError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Render failures (:class:`InvalidJSONError`, :class:`HTMLParseError`) never
reach that handler: :func:`reqview.classifier.classify` turns them into
:class:`~reqview.classifier.RenderFailure` values so the user sees an
error document instead of a crash.

Subclass hierarchy::

    ReqviewError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- ConfigError         (exit 1)
    +-- RenderError         (exit 7)
        +-- InvalidJSONError
        +-- HTMLParseError
"""

from reqview.exit_codes import (
    EXIT_FORMAT_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
)


class ReqviewError(Exception):
    """Base exception for all reqview errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`reqview.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ReqviewError):
    """Raised for invalid CLI arguments such as an unsupported HTTP method."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(ReqviewError):
    """Raised for configuration problems (invalid JSON, failed validation, unknown keys)."""

    exit_code = EXIT_GENERIC_FAILURE


class RenderError(ReqviewError):
    """Base class for failures while parsing a response body for display."""

    exit_code = EXIT_FORMAT_ERROR


class InvalidJSONError(RenderError):
    """Raised when a body declared as JSON is not well-formed JSON."""


class HTMLParseError(RenderError):
    """Raised when the HTML parser rejects a body."""
