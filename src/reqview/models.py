"""Pydantic configuration models for reqview.

These models describe everything a user can persist in
``~/.config/reqview/config.json``:

* :class:`RequestConfig` -- timeout, TLS verification and the defaults used
  when the user supplies no method or URL.
* :class:`RenderConfig` -- truncation limits and the routing policy for
  bodies that are not declared as JSON.
* :class:`StyleConfig` -- the Rich style attached to each styling category
  and the colours of the display panel.
* :class:`GlobalConfig` -- the root document bundling the three.

All models use Pydantic v2. Unknown keys are rejected so that typos in the
config file surface as a :class:`~reqview.exceptions.ConfigError` rather
than being silently ignored.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field


class HTTPMethod(str, enum.Enum):
    """HTTP methods the client is willing to send."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


class NonJSONPolicy(str, enum.Enum):
    """What to do with a 200 response whose declared type is not JSON.

    ``TEXT`` formats the body with the HTML/text renderer. ``REJECT`` turns
    it into a ``NOT_JSON`` error document.
    """

    TEXT = "text"
    REJECT = "reject"


class RequestConfig(BaseModel):
    """Settings applied to every outgoing request."""

    model_config = ConfigDict(extra="forbid")

    timeout: float = Field(default=10.0, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")
    default_method: HTTPMethod = Field(
        default=HTTPMethod.GET, description="Method used when none is given"
    )
    default_url: str = Field(
        default="https://api.github.com", description="URL used when none is given"
    )


class RenderConfig(BaseModel):
    """Settings for the response classifier and the text renderer."""

    model_config = ConfigDict(extra="forbid")

    max_length: int = Field(
        default=2000,
        gt=0,
        description=(
            "Maximum characters of formatted text shown inline, style markup included"
        ),
    )
    ellipsis: str = Field(default="...", description="Marker appended to truncated text")
    non_json: NonJSONPolicy = Field(
        default=NonJSONPolicy.TEXT,
        description="Policy for non-JSON bodies: text or reject",
    )
    color: bool = Field(default=True, description="Apply category styles to output")


class StyleConfig(BaseModel):
    """Rich style strings per styling category, plus the panel look.

    An empty string leaves a category unstyled.
    """

    model_config = ConfigDict(extra="forbid")

    key: str = "bold cyan"
    string: str = "green"
    number: str = "magenta"
    boolean: str = "yellow"
    null: str = "dim red"
    tag: str = "blue"
    text: str = ""
    panel_foreground: str = "color(205)"
    panel_background: str = "color(236)"
    panel_border: str = "color(63)"


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/reqview/config.json``.

    Loaded and saved by :func:`~reqview.config.load_global_config` and
    :func:`~reqview.config.save_global_config`. Fields here have the lowest
    precedence and can be overridden by environment variables or CLI flags.
    See :func:`~reqview.config.resolve_config` for the full chain.
    """

    model_config = ConfigDict(extra="forbid")

    request: RequestConfig = Field(default_factory=RequestConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    styles: StyleConfig = Field(default_factory=StyleConfig)
