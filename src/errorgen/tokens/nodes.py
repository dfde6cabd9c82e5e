"""Immutable token tree nodes. All generated code is built from these — never string concatenation."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import StrEnum
from typing import overload

from errorgen.models.errors import SourceSpan


class Delimiter(StrEnum):
    PARENTHESIS = "()"
    BRACE = "{}"
    BRACKET = "[]"

    @property
    def open(self) -> str:
        return self.value[0]

    @property
    def close(self) -> str:
        return self.value[1]


class Spacing(StrEnum):
    ALONE = "alone"
    JOINT = "joint"  # immediately followed by another punctuation character


class LiteralKind(StrEnum):
    STRING = "string"
    RAW_STRING = "raw_string"
    INTEGER = "integer"
    FLOAT = "float"
    CHAR = "char"


_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "\\": "\\", "0": "\0", '"': '"', "'": "'"}
_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]{1,6}\}|x[0-9a-fA-F]{2}|\n\s*|.)")


def _unescape(body: str) -> str:
    """Decode backslash escapes; raises ``ValueError`` on an invalid one."""

    def _sub(match: re.Match[str]) -> str:
        seq = match.group(1)
        if seq in _ESCAPES:
            return _ESCAPES[seq]
        if seq.startswith("\n"):
            return ""  # line continuation
        if seq.startswith("u{"):
            code = int(seq[2:-1], 16)
            if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
                raise ValueError(f"Invalid unicode escape '\\{seq}'")
            return chr(code)
        if len(seq) == 3 and seq.startswith("x"):
            code = int(seq[1:], 16)
            if code > 0x7F:
                raise ValueError(f"Out of range hex escape '\\{seq}' (max \\x7f)")
            return chr(code)
        raise ValueError(f"Unknown escape sequence '\\{seq}'")

    return _ESCAPE_RE.sub(_sub, body)


@dataclass(frozen=True)
class Ident:
    """An identifier or keyword, e.g. ``Foo``, ``fn``, ``r#type``."""

    text: str
    span: SourceSpan | None = None


@dataclass(frozen=True)
class Punct:
    """A single punctuation character."""

    char: str
    spacing: Spacing = Spacing.ALONE
    span: SourceSpan | None = None

    def __post_init__(self) -> None:
        if len(self.char) != 1:
            raise ValueError(f"Punct holds exactly one character, got {self.char!r}")

    @property
    def is_joint(self) -> bool:
        return self.spacing is Spacing.JOINT


@dataclass(frozen=True)
class Literal:
    """A literal as written in source: quotes, escapes and prefix included."""

    kind: LiteralKind
    raw: str
    suffix: str | None = None
    span: SourceSpan | None = None

    @classmethod
    def string(cls, value: str, span: SourceSpan | None = None) -> Literal:
        escaped = (
            value.replace("\\", "\\\\")
            .replace('"', '\\"')
            .replace("\n", "\\n")
            .replace("\r", "\\r")
            .replace("\t", "\\t")
        )
        return cls(kind=LiteralKind.STRING, raw=f'"{escaped}"', span=span)

    @classmethod
    def integer(cls, value: int, span: SourceSpan | None = None) -> Literal:
        return cls(kind=LiteralKind.INTEGER, raw=str(value), span=span)

    @property
    def is_string(self) -> bool:
        return self.kind in (LiteralKind.STRING, LiteralKind.RAW_STRING)

    @property
    def body(self) -> str:
        """The text between the quotes, undecoded."""
        if self.kind is LiteralKind.RAW_STRING:
            hashes = len(self.raw) - len(self.raw[1:].lstrip("#")) - 1
            return self.raw[2 + hashes : len(self.raw) - 1 - hashes]
        if self.kind in (LiteralKind.STRING, LiteralKind.CHAR):
            return self.raw[1:-1]
        return self.raw

    @property
    def value(self) -> str:
        """Decoded text of a string or char literal; raw text for numbers."""
        if self.kind in (LiteralKind.STRING, LiteralKind.CHAR):
            return _unescape(self.body)
        return self.body

    def __str__(self) -> str:
        return self.raw + (self.suffix or "")


@dataclass(frozen=True)
class Group:
    """A delimited group owning a nested token stream."""

    delimiter: Delimiter
    stream: TokenStream = field(default_factory=lambda: TokenStream())
    span: SourceSpan | None = None

    def __post_init__(self) -> None:
        if self.span is None:
            return
        for token in self.stream:
            if token.span is not None and not self.span.encloses(token.span):
                raise ValueError(
                    f"Group span {self.span} does not enclose child span {token.span}"
                )


# The union of all token types.
Token = Group | Ident | Punct | Literal


@dataclass(frozen=True)
class TokenStream:
    """Ordered, immutable sequence of tokens."""

    tokens: tuple[Token, ...] = ()

    @classmethod
    def of(cls, tokens: Iterable[Token]) -> TokenStream:
        return cls(tokens=tuple(tokens))

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __bool__(self) -> bool:
        return bool(self.tokens)

    @overload
    def __getitem__(self, index: int) -> Token: ...

    @overload
    def __getitem__(self, index: slice) -> TokenStream: ...

    def __getitem__(self, index: int | slice) -> Token | TokenStream:
        if isinstance(index, slice):
            return TokenStream(tokens=self.tokens[index])
        return self.tokens[index]

    def __add__(self, other: TokenStream) -> TokenStream:
        return TokenStream(tokens=self.tokens + other.tokens)

    @property
    def span(self) -> SourceSpan | None:
        """Joined span of all spanned tokens, or None."""
        result: SourceSpan | None = None
        for token in self.tokens:
            if token.span is None:
                continue
            result = token.span if result is None else result.join(token.span)
        return result
