"""JSON renderer: parse a body into a value tree and re-serialise it.

The output uses two spaces of indentation per nesting level, one member or
element per line, and attaches a styling category to every leaf token
(``key``, ``string``, ``number``, ``boolean``, ``null``). Braces, brackets,
commas and colons are never styled.

Example (plain scheme)::

    >>> print(render_json({"message": "Hello, JSON!"}, styles=StyleScheme.plain()))
    {
      "message": "Hello, JSON!"
    }
"""

from __future__ import annotations

import json
import math
from typing import Any, Optional, Union

from reqview.exceptions import InvalidJSONError
from reqview.render.styles import StyleScheme

INDENT = "  "

JSONValue = Union[dict, list, str, int, float, bool, None]


def _reject_constant(name: str) -> Any:  # noqa: ANN401
    raise ValueError(f"non-standard JSON constant {name!r}")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"number {text} is out of range")
    return value


def parse_json(body: Union[str, bytes]) -> JSONValue:
    """Parse *body* into a JSON value tree.

    ``NaN``, ``Infinity`` and ``-Infinity`` are rejected: they are not JSON
    even though Python's decoder accepts them by default. So are numbers
    that overflow a double, which would otherwise parse as infinity.

    Raises:
        InvalidJSONError: With the decoder's message when *body* is not
            well-formed JSON or nests deeper than the decoder can follow.
    """
    try:
        return json.loads(
            body,
            parse_constant=_reject_constant,
            parse_float=_parse_finite_float,
        )
    except (ValueError, RecursionError) as exc:  # ValueError includes JSONDecodeError
        raise InvalidJSONError(str(exc)) from exc


def render_json(
    value: JSONValue,
    level: int = 0,
    styles: Optional[StyleScheme] = None,
) -> str:
    """Render *value* at nesting depth *level*.

    Args:
        value: A value produced by :func:`parse_json` (or any equivalent
            tree of dicts, lists and scalars).
        level: Indentation depth of the opening token's line; ``0`` for the
            root.
        styles: Styling scheme; defaults to :meth:`StyleScheme.plain`.

    Returns:
        The rendered text without a trailing newline.

    Raises:
        TypeError: If the tree contains something that is not a JSON value.
        ValueError: If the tree contains a NaN or infinite float.
    """
    scheme = styles if styles is not None else StyleScheme.plain()
    return _build(value, level, scheme)


def format_json(body: Union[str, bytes], styles: Optional[StyleScheme] = None) -> str:
    """Parse and render *body*; nothing is rendered unless the parse succeeds."""
    return render_json(parse_json(body), 0, styles)


class _Punct(str):
    """Structural text queued between values during layout."""


def _build(value: JSONValue, level: int, styles: StyleScheme) -> str:
    # explicit stack so depth is limited only by the decoder
    out: list[str] = []
    stack: list[tuple[Any, int]] = [(value, level)]
    while stack:
        item, depth = stack.pop()
        if isinstance(item, _Punct):
            out.append(item)
        elif isinstance(item, dict):
            stack.extend(reversed(_object_parts(item, depth, styles)))
        elif isinstance(item, list):
            stack.extend(reversed(_array_parts(item, depth)))
        else:
            out.append(_scalar(item, styles))
    return "".join(out)


def _object_parts(value: dict, level: int, styles: StyleScheme) -> list[tuple[Any, int]]:
    if not value:
        return [(_Punct("{}"), level)]
    inner = INDENT * (level + 1)
    parts: list[tuple[Any, int]] = [(_Punct("{\n"), level)]
    for index, (key, item) in enumerate(value.items()):
        if index:
            parts.append((_Punct(",\n"), level))
        parts.append((_Punct(f"{inner}{styles.paint('key', _quote(str(key)))}: "), level))
        parts.append((item, level + 1))
    parts.append((_Punct("\n" + INDENT * level + "}"), level))
    return parts


def _array_parts(value: list, level: int) -> list[tuple[Any, int]]:
    if not value:
        return [(_Punct("[]"), level)]
    inner = INDENT * (level + 1)
    parts: list[tuple[Any, int]] = [(_Punct("[\n"), level)]
    for index, item in enumerate(value):
        if index:
            parts.append((_Punct(",\n"), level))
        parts.append((_Punct(inner), level))
        parts.append((item, level + 1))
    parts.append((_Punct("\n" + INDENT * level + "]"), level))
    return parts


def _scalar(value: Any, styles: StyleScheme) -> str:  # noqa: ANN401
    # bool before int: bool is an int subclass
    if isinstance(value, str):
        return styles.paint("string", _quote(value))
    if isinstance(value, bool):
        return styles.paint("boolean", "true" if value else "false")
    if isinstance(value, (int, float)):
        return styles.paint("number", _format_number(value))
    if value is None:
        return styles.paint("null", "null")
    raise TypeError(f"cannot render {type(value).__name__} as JSON")


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _format_number(number: Union[int, float]) -> str:
    if isinstance(number, int):
        return str(number)
    if not math.isfinite(number):
        raise ValueError(f"cannot render {number!r} as a JSON number")
    return repr(number)
