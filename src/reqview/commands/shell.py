"""Shell command -- an interactive request loop.

``reqview shell`` alternates between two input fields: the HTTP method
(with completion over the supported methods) and the target URL (with
per-session history). Each submitted pair sends one request and shows the
result; failures are displayed and the loop carries on. ``quit``, ``exit``,
Ctrl-C or Ctrl-D leave the loop.
"""

from __future__ import annotations

from typing import Any, Optional

import typer
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory

from reqview.classifier import ClassificationResult
from reqview.client import Fetcher, validate_method
from reqview.commands.fetch import perform, resolve_from_context
from reqview.exceptions import InvalidUsageError
from reqview.models import GlobalConfig, HTTPMethod
from reqview.output import error, info

EXIT_WORDS = frozenset({"quit", "exit", ":q"})


class InteractiveShell:
    """Method/URL prompt loop around a :class:`~reqview.client.Fetcher`.

    Args:
        fetcher: An entered fetcher; the shell does not open or close it.
        config: Effective configuration (defaults and styles).
        method_session: Prompt used for the method field.
        url_session: Prompt used for the URL field.

    Both sessions only need a ``prompt(message, default=...)`` method, so
    tests can substitute scripted input.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        config: GlobalConfig,
        method_session: Optional[Any] = None,
        url_session: Optional[Any] = None,
    ) -> None:
        self._fetcher = fetcher
        self._config = config
        self._method_session = method_session or PromptSession(
            completer=WordCompleter([m.value for m in HTTPMethod], ignore_case=True),
            complete_while_typing=True,
        )
        self._url_session = url_session or PromptSession(history=InMemoryHistory())
        self.method = config.request.default_method.value
        self.url = config.request.default_url
        self.results: list[ClassificationResult] = []

    def run(self) -> None:
        """Prompt until the user leaves; one request per method/URL pair."""
        while True:
            try:
                method = self._method_session.prompt("method> ", default=self.method).strip()
                if method.lower() in EXIT_WORDS:
                    break
                url = self._url_session.prompt("url> ", default=self.url).strip()
                if url.lower() in EXIT_WORDS:
                    break
            except (EOFError, KeyboardInterrupt):
                break

            if not url:
                continue

            try:
                self.method = validate_method(method or self.method).value
            except InvalidUsageError as exc:
                error(str(exc))
                continue

            self.url = url
            self.results.append(perform(self._fetcher, self._config, self.method, url))


def shell_command(ctx: typer.Context) -> None:
    """Start an interactive session: pick a method, enter a URL, repeat.

    Example::

        reqview shell
    """
    config = resolve_from_context(ctx)
    info("reqview shell -- type 'quit' or press Ctrl-D to leave.")
    with Fetcher(config) as fetcher:
        InteractiveShell(fetcher, config).run()
