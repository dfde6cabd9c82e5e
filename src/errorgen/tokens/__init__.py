"""Token tree model for errorgen."""

from errorgen.tokens.builder import StreamBuilder
from errorgen.tokens.nodes import (
    Delimiter,
    Group,
    Ident,
    Literal,
    LiteralKind,
    Punct,
    Spacing,
    Token,
    TokenStream,
)
from errorgen.tokens.render import render

__all__ = [
    "Delimiter",
    "Group",
    "Ident",
    "Literal",
    "LiteralKind",
    "Punct",
    "Spacing",
    "StreamBuilder",
    "Token",
    "TokenStream",
    "render",
]
