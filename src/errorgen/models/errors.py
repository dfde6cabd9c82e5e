"""Structured diagnostics with source position tracking."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class SourceSpan(BaseModel):
    """Points to an exact location in the expansion input.

    Lines and columns are 1-based; the end position is exclusive.
    """

    model_config = ConfigDict(frozen=True)

    file: str = "<input>"
    line: int
    column: int
    end_line: int | None = None
    end_column: int | None = None

    @property
    def start(self) -> tuple[int, int]:
        return (self.line, self.column)

    @property
    def end(self) -> tuple[int, int]:
        if self.end_line is None or self.end_column is None:
            return (self.line, self.column)
        return (self.end_line, self.end_column)

    def join(self, other: SourceSpan) -> SourceSpan:
        """Return the smallest span covering both spans."""
        start = min(self.start, other.start)
        end = max(self.end, other.end)
        return SourceSpan(
            file=self.file,
            line=start[0],
            column=start[1],
            end_line=end[0],
            end_column=end[1],
        )

    def encloses(self, other: SourceSpan) -> bool:
        return self.start <= other.start and other.end <= self.end

    def narrow(self, start: int, end: int) -> SourceSpan:
        """Sub-span of a single-line span, by character offsets from the start column."""
        if self.end[0] != self.line:
            raise ValueError("Only single-line spans can be narrowed")
        return SourceSpan(
            file=self.file,
            line=self.line,
            column=self.column + start,
            end_line=self.line,
            end_column=self.column + end,
        )

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


class DiagnosticKind(StrEnum):
    MALFORMED_DEFINITION = "MalformedDefinition"
    UNBALANCED_PLACEHOLDER = "UnbalancedPlaceholder"
    INVALID_PLACEHOLDER = "InvalidPlaceholder"
    NAME_COLLISION = "NameCollision"
    DUPLICATE_DEFINITION = "DuplicateDefinition"
    INVALID_TOKEN = "InvalidToken"


class Diagnostic(BaseModel):
    """A reported failure with its best-available source location."""

    model_config = ConfigDict(frozen=True)

    kind: DiagnosticKind
    message: str
    span: SourceSpan | None = None

    def render(self) -> str:
        location = f"{self.span}: " if self.span is not None else ""
        return f"{location}error[{self.kind.value}]: {self.message}"


class DiagnosticError(Exception):
    """Raised by every expansion stage; carries exactly one diagnostic."""

    def __init__(self, diagnostic: Diagnostic) -> None:
        self.diagnostic = diagnostic
        super().__init__(diagnostic.render())

    @classmethod
    def of(
        cls, kind: DiagnosticKind, message: str, span: SourceSpan | None = None
    ) -> DiagnosticError:
        return cls(Diagnostic(kind=kind, message=message, span=span))
