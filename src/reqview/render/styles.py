"""Styling schemes: which Rich style each token category gets.

A :class:`StyleScheme` is passed explicitly into every render call, so the
renderers never read process-wide style state. Style markers are emitted as
Rich console markup around leaf tokens only; structural punctuation is never
wrapped.

Two schemes matter in practice:

* :meth:`StyleScheme.from_config` -- built from the user's
  :class:`~reqview.models.StyleConfig`, produces markup.
* :meth:`StyleScheme.plain` -- emits tokens untouched. Used when colour is
  disabled, for file output, and in tests that compare exact text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from rich.markup import escape

from reqview.models import StyleConfig

CATEGORIES = ("key", "string", "number", "boolean", "null", "tag", "text")


@dataclass(frozen=True)
class StyleScheme:
    """Mapping from styling category to a Rich style directive.

    Attributes:
        styles: Category name to Rich style string. Missing or empty
            entries leave the category unstyled.
        markup: When ``True`` the rendered text is Rich markup and every
            token is escaped, styled or not. When ``False`` tokens are
            returned verbatim and ``styles`` is ignored.
    """

    styles: Mapping[str, str] = field(default_factory=dict)
    markup: bool = True

    @classmethod
    def plain(cls) -> StyleScheme:
        return cls(styles={}, markup=False)

    @classmethod
    def from_config(cls, config: StyleConfig, color: bool = True) -> StyleScheme:
        """Build a scheme from persisted style settings.

        Args:
            config: The user's style configuration.
            color: ``False`` yields the plain scheme regardless of *config*.
        """
        if not color:
            return cls.plain()
        data = config.model_dump()
        return cls(styles={name: data[name] for name in CATEGORIES})

    def paint(self, category: str, token: str) -> str:
        """Return *token* wrapped in the style for *category*."""
        if not self.markup:
            return token
        escaped = escape(token)
        style = self.styles.get(category, "")
        if not style:
            return escaped
        return f"[{style}]{escaped}[/{style}]"
