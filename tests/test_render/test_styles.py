"""Tests for StyleScheme construction and token painting."""

from __future__ import annotations

from reqview.models import StyleConfig
from reqview.render.styles import CATEGORIES, StyleScheme


class TestPaint:
    def test_plain_returns_token_verbatim(self):
        assert StyleScheme.plain().paint("key", '"[k]"') == '"[k]"'

    def test_styled_token_wrapped(self):
        scheme = StyleScheme(styles={"number": "magenta"})
        assert scheme.paint("number", "42") == "[magenta]42[/magenta]"

    def test_unstyled_category_escaped_only(self):
        scheme = StyleScheme(styles={"number": "magenta"})
        assert scheme.paint("text", "[x]") == "\\[x]"


class TestFromConfig:
    def test_all_categories_present(self):
        scheme = StyleScheme.from_config(StyleConfig())
        assert set(scheme.styles) == set(CATEGORIES)
        assert scheme.styles["key"] == "bold cyan"
        assert scheme.markup is True

    def test_custom_style(self):
        scheme = StyleScheme.from_config(StyleConfig(string="bold green"))
        assert scheme.paint("string", '"s"') == '[bold green]"s"[/bold green]'

    def test_color_disabled_yields_plain(self):
        scheme = StyleScheme.from_config(StyleConfig(), color=False)
        assert scheme == StyleScheme.plain()
        assert scheme.paint("key", '"k"') == '"k"'
