"""Tokenizer turning declaration source text into a token tree with spans."""

from __future__ import annotations

import bisect
import re
from dataclasses import dataclass, field

from errorgen.models.errors import DiagnosticError, DiagnosticKind, SourceSpan
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

# ---------------------------------------------------------------------------
# Lexical grammar
# ---------------------------------------------------------------------------

_PUNCT_CHARS = frozenset("~!@#$%^&*-+=|\\:;,.<>/?'")
_OPENERS = {d.open: d for d in Delimiter}
_CLOSERS = {d.close: d for d in Delimiter}

_WHITESPACE_RE = re.compile(r"\s+")
_LINE_COMMENT_RE = re.compile(r"//[^\n]*")
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_RAW_IDENT_RE = re.compile(r"r#[A-Za-z_][A-Za-z0-9_]*")
_RAW_STRING_RE = re.compile(r'r(?P<hashes>#*)"')
_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_STRING_RE = re.compile(r'"(?:[^"\\]|\\.)*"', re.DOTALL)
_CHAR_RE = re.compile(r"'(?:[^'\\\n]|\\(?:u\{[0-9a-fA-F]{1,6}\}|x[0-9a-fA-F]{2}|.))'")
_NUMBER_RE = re.compile(
    r"0x[0-9a-fA-F_]+|0o[0-7_]+|0b[01_]+"
    r"|(?P<dec>[0-9][0-9_]*)(?P<frac>\.[0-9][0-9_]*)?(?P<exp>[eE][+-]?[0-9_]+)?"
)
_SUFFIX_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass
class _Frame:
    """An open delimiter and the tokens collected inside it so far."""

    delimiter: Delimiter | None
    start: int
    tokens: list[Token] = field(default_factory=list)


class Lexer:
    """Single-use tokenizer over one source string."""

    def __init__(self, source: str, filename: str = "<input>") -> None:
        self._source = source
        self._filename = filename
        self._pos = 0
        self._line_starts = [0] + [m.end() for m in re.finditer(r"\n", source)]

    # -- positions -----------------------------------------------------------

    def _position(self, offset: int) -> tuple[int, int]:
        index = bisect.bisect_right(self._line_starts, offset) - 1
        return index + 1, offset - self._line_starts[index] + 1

    def _span(self, start: int, end: int) -> SourceSpan:
        line, column = self._position(start)
        end_line, end_column = self._position(end)
        return SourceSpan(
            file=self._filename,
            line=line,
            column=column,
            end_line=end_line,
            end_column=end_column,
        )

    def _error(self, message: str, start: int, end: int) -> DiagnosticError:
        return DiagnosticError.of(DiagnosticKind.INVALID_TOKEN, message, self._span(start, end))

    # -- scanning ------------------------------------------------------------

    def tokenize(self) -> TokenStream:
        stack = [_Frame(delimiter=None, start=0)]
        source = self._source
        while self._pos < len(source):
            start = self._pos
            char = source[start]

            skipped = (
                _WHITESPACE_RE.match(source, start)
                or _LINE_COMMENT_RE.match(source, start)
                or _BLOCK_COMMENT_RE.match(source, start)
            )
            if skipped:
                self._pos = skipped.end()
                continue

            if char in _OPENERS:
                stack.append(_Frame(delimiter=_OPENERS[char], start=start))
                self._pos += 1
                continue

            if char in _CLOSERS:
                frame = stack.pop()
                if frame.delimiter is not _CLOSERS[char]:
                    raise self._error(f"Unexpected closing delimiter '{char}'", start, start + 1)
                self._pos += 1
                group = Group(
                    delimiter=frame.delimiter,
                    stream=TokenStream.of(frame.tokens),
                    span=self._span(frame.start, self._pos),
                )
                stack[-1].tokens.append(group)
                continue

            stack[-1].tokens.append(self._scan_token(start))

        if len(stack) > 1:
            start = stack[-1].start
            raise self._error(f"Unclosed delimiter '{source[start]}'", start, start + 1)
        return TokenStream.of(stack[0].tokens)

    def _scan_token(self, start: int) -> Token:
        source = self._source
        char = source[start]

        if match := _RAW_IDENT_RE.match(source, start):
            self._pos = match.end()
            return Ident(text=match.group(), span=self._span(start, self._pos))

        if match := _RAW_STRING_RE.match(source, start):
            terminator = '"' + match.group("hashes")
            end = source.find(terminator, match.end())
            if end == -1:
                raise self._error("Unterminated raw string literal", start, match.end())
            self._pos = end + len(terminator)
            return self._literal(LiteralKind.RAW_STRING, start)

        if match := _IDENT_RE.match(source, start):
            self._pos = match.end()
            return Ident(text=match.group(), span=self._span(start, self._pos))

        if char == '"':
            match = _STRING_RE.match(source, start)
            if match is None:
                raise self._error("Unterminated string literal", start, start + 1)
            self._pos = match.end()
            return self._literal(LiteralKind.STRING, start)

        if char == "'" and (match := _CHAR_RE.match(source, start)):
            self._pos = match.end()
            return self._literal(LiteralKind.CHAR, start)

        if match := _NUMBER_RE.match(source, start):
            self._pos = match.end()
            is_float = bool(match.group("frac") or match.group("exp"))
            return self._literal(LiteralKind.FLOAT if is_float else LiteralKind.INTEGER, start)

        if char in _PUNCT_CHARS:
            self._pos = start + 1
            following = source[self._pos : self._pos + 1]
            spacing = Spacing.JOINT if following and following in _PUNCT_CHARS else Spacing.ALONE
            return Punct(char=char, spacing=spacing, span=self._span(start, self._pos))

        raise self._error(f"Unexpected character {char!r}", start, start + 1)

    def _literal(self, kind: LiteralKind, start: int) -> Literal:
        raw = self._source[start : self._pos]
        suffix = None
        if match := _SUFFIX_RE.match(self._source, self._pos):
            suffix = match.group()
            self._pos = match.end()
        return Literal(kind=kind, raw=raw, suffix=suffix, span=self._span(start, self._pos))


def tokenize(source: str, filename: str = "<input>") -> TokenStream:
    """Tokenize ``source``; raises ``DiagnosticError`` (InvalidToken)."""
    return Lexer(source, filename).tokenize()
