"""Text rendering helpers: truncation and the display wrapper.

Formatted output is bounded with :func:`truncate` before it is shown inline
and wrapped in a rounded :class:`~rich.panel.Panel` by :func:`display_panel`.
Success and failure output share the same panel so the interaction looks
the same whatever the outcome.
"""

from __future__ import annotations

from rich import box
from rich.panel import Panel
from rich.style import Style
from rich.text import Text

from reqview.models import StyleConfig

DEFAULT_MAX_LENGTH = 2000
ELLIPSIS = "..."


def truncate(text: str, length: int = DEFAULT_MAX_LENGTH, ellipsis: str = ELLIPSIS) -> str:
    """Cut *text* to *length* characters and append *ellipsis* when it was longer.

    Truncation is purely positional: it may split a line, a token or a
    style marker. The count includes Rich markup, so styled text shows
    fewer visible characters than plain text cut at the same *length*.

    Example::

        >>> truncate("this is a long string", 10)
        'this is a ...'
    """
    if len(text) <= length:
        return text
    return text[:length] + ellipsis


def to_text(rendered: str, markup: bool) -> Text:
    """Turn rendered output into a Rich :class:`~rich.text.Text`.

    Args:
        rendered: Output of a renderer or an error document.
        markup: Whether *rendered* carries Rich markup.
    """
    if markup:
        return Text.from_markup(rendered)
    return Text(rendered)


def strip_markup(rendered: str, markup: bool) -> str:
    """Return *rendered* with style markers removed."""
    return to_text(rendered, markup).plain if markup else rendered


def display_panel(rendered: str, markup: bool, styles: StyleConfig) -> Panel:
    """Wrap rendered output in the bordered display container."""
    return Panel(
        to_text(rendered, markup),
        box=box.ROUNDED,
        style=Style.parse(f"{styles.panel_foreground} on {styles.panel_background}"),
        border_style=Style.parse(styles.panel_border),
        padding=1,
        expand=False,
    )
