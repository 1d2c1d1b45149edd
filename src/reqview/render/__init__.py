"""Response renderers.

* :mod:`~reqview.render.json_renderer` -- re-indents JSON with styled leaves.
* :mod:`~reqview.render.html_renderer` -- lays out HTML (and plain text) as
  an indented element tree.
* :mod:`~reqview.render.text` -- truncation and the display panel.
* :mod:`~reqview.render.styles` -- the :class:`StyleScheme` passed into
  every render call.

Example::

    from reqview.render import StyleScheme, format_json

    print(format_json(b'{"ok": true}', StyleScheme.plain()))
"""

from reqview.render.html_renderer import (
    HtmlDocument,
    HtmlElement,
    HtmlText,
    format_html,
    parse_html,
    render_html,
)
from reqview.render.json_renderer import format_json, parse_json, render_json
from reqview.render.styles import StyleScheme
from reqview.render.text import display_panel, strip_markup, truncate

__all__ = [
    "HtmlDocument",
    "HtmlElement",
    "HtmlText",
    "StyleScheme",
    "display_panel",
    "format_html",
    "format_json",
    "parse_html",
    "parse_json",
    "render_html",
    "render_json",
    "strip_markup",
    "truncate",
]
