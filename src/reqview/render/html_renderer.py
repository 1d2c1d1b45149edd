"""HTML renderer: parse a document into an element tree and lay it out again.

Parsing goes through BeautifulSoup's ``html.parser`` backend and the result
is converted into a small tree of :class:`HtmlDocument`, :class:`HtmlElement`
and :class:`HtmlText` nodes. Comments, doctypes and other markup
declarations are dropped during conversion.

Layout rules, applied in a single pre-order pass:

* the document and ``<head>`` are transparent -- their children are laid
  out at the same level and no tag is emitted for them;
* an element whose only child is text is written on one line,
  ``<p>text</p>``;
* any other element opens on its own line, lays out its children one level
  deeper and closes on its own line;
* a text node with siblings is written on its own line, or skipped when it
  is only whitespace.

Attributes are parsed but never written back.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Optional, Union

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning, NavigableString, Tag
from bs4 import ParserRejectedMarkup
from bs4.element import PreformattedString

from reqview.exceptions import HTMLParseError
from reqview.render.styles import StyleScheme

INDENT = "  "
TRANSPARENT_TAGS = frozenset({"head"})


@dataclass(frozen=True)
class HtmlText:
    """A literal run of characters."""

    text: str


@dataclass(frozen=True)
class HtmlElement:
    """An element with its tag name, attributes and ordered children."""

    tag: str
    attrs: Mapping[str, Any] = field(default_factory=dict)
    children: tuple[HtmlNode, ...] = ()


@dataclass(frozen=True)
class HtmlDocument:
    """The root of a parsed document."""

    children: tuple[HtmlNode, ...] = ()


HtmlNode = Union[HtmlDocument, HtmlElement, HtmlText]


def parse_html(body: Union[str, bytes], encoding: Optional[str] = None) -> HtmlDocument:
    """Parse *body* into an :class:`HtmlDocument`.

    Plain text parses to a document holding a single :class:`HtmlText`.

    Args:
        body: The raw document. Bytes are decoded by BeautifulSoup, using
            *encoding* as the first guess when given.
        encoding: Charset declared by the response, if any.

    Raises:
        HTMLParseError: If the parser rejects the markup.
    """
    try:
        with warnings.catch_warnings():
            # Short bodies that look like a URL or file name are still bodies.
            warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
            if isinstance(body, bytes):
                soup = BeautifulSoup(body, "html.parser", from_encoding=encoding)
            else:
                soup = BeautifulSoup(body, "html.parser")
    except ParserRejectedMarkup as exc:
        raise HTMLParseError(str(exc)) from exc
    except RecursionError as exc:
        raise HTMLParseError(f"document nests too deeply: {exc}") from exc
    return HtmlDocument(children=_convert_tree(soup))


def render_html(root: HtmlNode, styles: Optional[StyleScheme] = None) -> str:
    """Lay out *root* as indented text, one structural line per line.

    Args:
        root: Usually the document returned by :func:`parse_html`; any node
            can be rendered on its own.
        styles: Styling scheme; defaults to :meth:`StyleScheme.plain`.

    Returns:
        The rendered text. Every emitted line ends with a newline; an empty
        document renders as the empty string.
    """
    scheme = styles if styles is not None else StyleScheme.plain()
    return _build(root, 0, scheme)


def format_html(
    body: Union[str, bytes],
    styles: Optional[StyleScheme] = None,
    encoding: Optional[str] = None,
) -> str:
    """Parse and render *body* in one step."""
    return render_html(parse_html(body, encoding=encoding), styles)


# --- tree conversion ---


def _convert_tree(soup: Tag) -> tuple[HtmlNode, ...]:
    # (tag, remaining children, converted children) frames; an element is
    # built once all of its children are converted
    top: list[HtmlNode] = []
    stack: list[tuple[Tag, Iterator[Any], list[HtmlNode]]] = [(soup, iter(soup.children), top)]
    while stack:
        tag, remaining, converted = stack[-1]
        child = next(remaining, None)
        if child is None:
            stack.pop()
            if stack:
                stack[-1][2].append(
                    HtmlElement(tag=tag.name, attrs=dict(tag.attrs), children=tuple(converted))
                )
        elif isinstance(child, Tag):
            stack.append((child, iter(child.children), []))
        # Comment, Doctype, CData, Declaration and ProcessingInstruction
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            converted.append(HtmlText(str(child)))
    return tuple(top)


# --- layout ---


class _Line(str):
    """A closing-tag line queued until an element's children are laid out."""


def _build(root: HtmlNode, level: int, styles: StyleScheme) -> str:
    out: list[str] = []
    stack: list[tuple[Union[HtmlNode, _Line], int]] = [(root, level)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, _Line):
            out.append(node)
        elif isinstance(node, HtmlDocument):
            _push_children(stack, node.children, depth)
        elif isinstance(node, HtmlElement):
            _build_element(node, depth, styles, out, stack)
        elif isinstance(node, HtmlText):
            text = node.text.strip()
            if text:
                out.append(f"{INDENT * depth}{styles.paint('text', text)}\n")
        else:
            raise TypeError(f"cannot render {type(node).__name__} as HTML")
    return "".join(out)


def _push_children(stack: list, children: tuple[HtmlNode, ...], level: int) -> None:
    stack.extend((child, level) for child in reversed(children))


def _build_element(
    element: HtmlElement,
    level: int,
    styles: StyleScheme,
    out: list[str],
    stack: list,
) -> None:
    if element.tag in TRANSPARENT_TAGS:
        _push_children(stack, element.children, level)
        return

    indent = INDENT * level
    open_tag = f"<{styles.paint('tag', element.tag)}>"
    close_tag = f"</{styles.paint('tag', element.tag)}>"

    children = element.children
    if len(children) == 1 and isinstance(children[0], HtmlText):
        text = styles.paint("text", children[0].text.strip())
        out.append(f"{indent}{open_tag}{text}{close_tag}\n")
        return

    out.append(f"{indent}{open_tag}\n")
    stack.append((_Line(f"{indent}{close_tag}\n"), level))
    _push_children(stack, children, level + 1)
