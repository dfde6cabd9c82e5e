"""Grammar parser: token stream → ordered error definitions.

    batch      := definition (COMMA definition)* COMMA? | ε
    definition := IDENT COLON IDENT COLON STRING
"""

from __future__ import annotations

from errorgen.models.definition import ErrorDefinition
from errorgen.models.errors import DiagnosticError, DiagnosticKind, SourceSpan
from errorgen.parser.placeholders import extract_placeholders
from errorgen.tokens.nodes import (
    Group,
    Ident,
    Literal,
    Punct,
    Token,
    TokenStream,
)


def _describe(token: Token) -> str:
    match token:
        case Ident(text=text):
            return f"identifier `{text}`"
        case Punct(char=char):
            return f"`{char}`"
        case Literal():
            return f"literal `{token}`"
        case Group(delimiter=delimiter):
            return f"group `{delimiter.open}...{delimiter.close}`"
        case _:
            return type(token).__name__


class _Cursor:
    """Forward-only position in a token stream."""

    def __init__(self, tokens: TokenStream) -> None:
        self._tokens = tokens
        self._index = 0
        self._last: Token | None = None

    @property
    def at_end(self) -> bool:
        return self._index >= len(self._tokens)

    def peek(self, offset: int = 0) -> Token | None:
        index = self._index + offset
        return self._tokens[index] if index < len(self._tokens) else None

    def advance(self) -> Token:
        token = self._tokens[self._index]
        self._index += 1
        self._last = token
        return token

    @property
    def last_span(self) -> SourceSpan | None:
        if self._last is None:
            return self._tokens.span
        return self._last.span


class DefinitionParser:
    """Parses a declaration batch; fails fast on the first malformed definition."""

    def parse(self, tokens: TokenStream) -> list[ErrorDefinition]:
        """Parse ``tokens`` into definitions in input order.

        Raises ``DiagnosticError`` on any grammar violation or bad template.
        """
        cursor = _Cursor(tokens)
        definitions: list[ErrorDefinition] = []
        while not cursor.at_end:
            definitions.append(self._parse_definition(cursor))
            if cursor.at_end:
                break
            self._expect_punct(cursor, ",", "`,` between definitions")
        return definitions

    def _parse_definition(self, cursor: _Cursor) -> ErrorDefinition:
        id_token = self._expect_ident(cursor, "error identifier")
        if not id_token.text.strip("_"):
            raise DiagnosticError.of(
                DiagnosticKind.MALFORMED_DEFINITION,
                f"Error identifier `{id_token.text}` must contain a letter or digit",
                id_token.span,
            )
        self._expect_colon(cursor)
        severity = self._expect_ident(cursor, "severity identifier")
        self._expect_colon(cursor)
        message = self._expect_string(cursor)

        try:
            template = message.value
        except ValueError as exc:
            raise DiagnosticError.of(
                DiagnosticKind.MALFORMED_DEFINITION,
                f"Invalid message literal: {exc}",
                message.span,
            ) from exc
        placeholders = extract_placeholders(template, message.span)

        span = id_token.span
        if span is not None and message.span is not None:
            span = span.join(message.span)
        return ErrorDefinition(
            id=id_token.text,
            severity=severity.text,
            message_template=template,
            placeholders=tuple(placeholders),
            span=span,
        )

    # -- expectations --------------------------------------------------------

    def _unexpected(self, cursor: _Cursor, expected: str) -> DiagnosticError:
        token = cursor.peek()
        if token is None:
            return DiagnosticError.of(
                DiagnosticKind.MALFORMED_DEFINITION,
                f"Expected {expected}, found end of input",
                cursor.last_span,
            )
        return DiagnosticError.of(
            DiagnosticKind.MALFORMED_DEFINITION,
            f"Expected {expected}, found {_describe(token)}",
            token.span,
        )

    def _expect_ident(self, cursor: _Cursor, expected: str) -> Ident:
        token = cursor.peek()
        if not isinstance(token, Ident):
            raise self._unexpected(cursor, expected)
        cursor.advance()
        return token

    def _expect_punct(self, cursor: _Cursor, char: str, expected: str) -> Punct:
        token = cursor.peek()
        if not isinstance(token, Punct) or token.char != char:
            raise self._unexpected(cursor, expected)
        following = cursor.peek(1)
        if token.is_joint and isinstance(following, Punct):
            span = token.span
            if span is not None and following.span is not None:
                span = span.join(following.span)
            raise DiagnosticError.of(
                DiagnosticKind.MALFORMED_DEFINITION,
                f"Expected {expected}, found operator `{token.char}{following.char}`",
                span,
            )
        cursor.advance()
        return token

    def _expect_colon(self, cursor: _Cursor) -> Punct:
        return self._expect_punct(cursor, ":", "`:`")

    def _expect_string(self, cursor: _Cursor) -> Literal:
        token = cursor.peek()
        if not isinstance(token, Literal) or not token.is_string:
            raise self._unexpected(cursor, "message string literal")
        if token.suffix:
            raise DiagnosticError.of(
                DiagnosticKind.MALFORMED_DEFINITION,
                f"Message literal must not have a suffix, found `{token.suffix}`",
                token.span,
            )
        cursor.advance()
        return token
