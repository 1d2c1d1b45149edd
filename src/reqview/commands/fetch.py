"""Fetch command -- send one request and display the rendered response.

``reqview fetch [URL] [-X METHOD]`` resolves the effective configuration,
sends a single request through :class:`~reqview.client.Fetcher` and shows
the outcome. The status line goes to stderr; the body, or the error
document that replaces it, goes to stdout.

The process exits 0 when the body was rendered and with the exit code of
the :class:`~reqview.classifier.ErrorKind` otherwise, so scripts can tell a
404 from a timeout without reading the output.
"""

from __future__ import annotations

from typing import Optional

import typer

from reqview.classifier import ClassificationResult, RenderFailure
from reqview.client import Exchange, Fetcher
from reqview.models import GlobalConfig
from reqview.output import debug, get_output, info, progress


def resolve_from_context(ctx: typer.Context) -> GlobalConfig:
    """Resolve the effective configuration using the root callback's options."""
    from reqview.config import resolve_config

    obj = ctx.obj or {}
    return resolve_config(
        cli_timeout=obj.get("timeout"),
        no_color=obj.get("no_color", False) or get_output().no_color,
    )


def perform(fetcher: Fetcher, config: GlobalConfig, method: str, url: str) -> ClassificationResult:
    """Send one request, report its status and display the result.

    Shared by ``reqview fetch`` and the interactive shell.

    Raises:
        InvalidUsageError: If *method* is not supported.
    """
    progress(f"{method.upper()} {url} ...")
    exchange = fetcher.send(method, url)
    _report(exchange)
    get_output().show_result(exchange.result, config.styles)
    return exchange.result


def _report(exchange: Exchange) -> None:
    if exchange.status_code is not None:
        info(f"HTTP {exchange.status_code} {exchange.reason}".rstrip())
        debug(f"Content-Type: {exchange.content_type or '(none)'}")
    debug(f"{exchange.method} {exchange.url} took {exchange.elapsed:.3f}s")


def fetch_command(
    ctx: typer.Context,
    url: Optional[str] = typer.Argument(
        None, help="Target URL. Defaults to the configured default URL."
    ),
    method: Optional[str] = typer.Option(
        None, "--method", "-X", help="HTTP method: GET, POST, PUT, DELETE or PATCH."
    ),
) -> None:
    """Send a single request and pretty-print the response body.

    Example::

        reqview fetch https://api.github.com
        reqview fetch -X DELETE https://example.com/items/1
    """
    config = resolve_from_context(ctx)
    target = url or config.request.default_url
    verb = method or config.request.default_method.value

    with Fetcher(config) as fetcher:
        result = perform(fetcher, config, verb, target)

    if isinstance(result, RenderFailure):
        raise typer.Exit(code=result.kind.exit_code)
