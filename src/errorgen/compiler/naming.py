"""Declaration id → generated function name.

The id is split into words at underscores and at case boundaries (a
lowercase letter or digit followed by an uppercase letter; inside an
uppercase run, before the last uppercase letter when a lowercase letter
follows), words are lowercased and joined with ``_``. Leading underscores
are kept. Names that spell a keyword are emitted as raw identifiers
(``r#type``), except the few keywords that cannot be raw, which get a
trailing underscore (``self_``).

    FooBar     -> foo_bar
    HTTPError  -> http_error
    Error404   -> error404
    Type       -> r#type

The mapping is not injective (``FooBar`` and ``Foo_Bar`` both become
``foo_bar``); the generator rejects such pairs with ``NameCollision``.
"""

from __future__ import annotations

import re

from errorgen.tokens.keywords import KEYWORDS, NON_RAW_KEYWORDS

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z0-9])|[A-Z]*[a-z0-9]+|[A-Z]+")


def split_words(ident: str) -> list[str]:
    return [word for chunk in ident.split("_") for word in _WORD_RE.findall(chunk)]


def snake_case(ident: str) -> str:
    prefix = ident[: len(ident) - len(ident.lstrip("_"))]
    return prefix + "_".join(word.lower() for word in split_words(ident))


def function_name(ident: str) -> str:
    """Generated constructor name for a declaration id."""
    name = snake_case(ident)
    if name in KEYWORDS:
        return f"r#{name}"
    if name in NON_RAW_KEYWORDS:
        return f"{name}_"
    return name
