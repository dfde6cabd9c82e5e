"""Fluent builder API for constructing token streams."""

from __future__ import annotations

from typing import Self

from errorgen.models.errors import SourceSpan
from errorgen.tokens.nodes import (
    Delimiter,
    Group,
    Ident,
    Literal,
    Punct,
    Spacing,
    Token,
    TokenStream,
)


class StreamBuilder:
    """Fluent builder for ergonomic token stream construction.

    Every token appended carries the builder's span, so generated code points
    back at the declaration it came from.
    """

    def __init__(self, span: SourceSpan | None = None) -> None:
        self._span = span
        self._tokens: list[Token] = []

    def child(self) -> StreamBuilder:
        """A fresh builder sharing this builder's span."""
        return StreamBuilder(self._span)

    def ident(self, *names: str) -> Self:
        for name in names:
            self._tokens.append(Ident(text=name, span=self._span))
        return self

    def punct(self, op: str) -> Self:
        """Append an operator; multi-character operators become joint puncts."""
        for i, char in enumerate(op):
            spacing = Spacing.JOINT if i < len(op) - 1 else Spacing.ALONE
            self._tokens.append(Punct(char=char, spacing=spacing, span=self._span))
        return self

    def path(self, *segments: str) -> Self:
        """Append ``a::b::c``."""
        for i, segment in enumerate(segments):
            if i:
                self.punct("::")
            self.ident(segment)
        return self

    def string(self, value: str) -> Self:
        self._tokens.append(Literal.string(value, span=self._span))
        return self

    def token(self, token: Token) -> Self:
        self._tokens.append(token)
        return self

    def extend(self, stream: TokenStream) -> Self:
        self._tokens.extend(stream)
        return self

    def group(self, delimiter: Delimiter, inner: StreamBuilder | TokenStream | None = None) -> Self:
        stream = TokenStream()
        if isinstance(inner, StreamBuilder):
            stream = inner.build()
        elif inner is not None:
            stream = inner
        span = self._span
        inner_span = stream.span
        if inner_span is not None:
            span = inner_span if span is None else span.join(inner_span)
        self._tokens.append(Group(delimiter=delimiter, stream=stream, span=span))
        return self

    def parens(self, inner: StreamBuilder | TokenStream | None = None) -> Self:
        return self.group(Delimiter.PARENTHESIS, inner)

    def braces(self, inner: StreamBuilder | TokenStream | None = None) -> Self:
        return self.group(Delimiter.BRACE, inner)

    def build(self) -> TokenStream:
        return TokenStream.of(self._tokens)


def separated(items: list[TokenStream], sep: str = ",", span: SourceSpan | None = None) -> TokenStream:
    """Join streams with a separator punct (no trailing separator)."""
    builder = StreamBuilder(span)
    for i, item in enumerate(items):
        if i:
            builder.punct(sep)
        builder.extend(item)
    return builder.build()
