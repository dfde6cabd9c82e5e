"""Named placeholder extraction from message templates."""

from __future__ import annotations

import re

from errorgen.models.errors import DiagnosticError, DiagnosticKind, SourceSpan
from errorgen.tokens.keywords import is_reserved

_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _locate(span: SourceSpan | None, template: str, start: int, end: int) -> SourceSpan | None:
    """Narrow a literal's span to ``template[start:end]`` when columns map 1:1.

    That holds only for a single-line ``"..."`` literal whose body has no
    escapes, i.e. whose width is the template length plus two quotes.
    """
    if span is None or span.end_line != span.line or span.end_column is None:
        return span
    if span.end_column - span.column != len(template) + 2:
        return span
    return span.narrow(start + 1, end + 1)


def extract_placeholders(template: str, span: SourceSpan | None = None) -> list[str]:
    """Return the unique placeholder names of ``template`` in first-occurrence order.

    ``{name}`` is a placeholder, ``{{`` and ``}}`` are literal braces. The
    first ``}`` after an open ``{`` closes it.

    Raises ``DiagnosticError`` (UnbalancedPlaceholder / InvalidPlaceholder).
    """
    names: list[str] = []
    i = 0
    while i < len(template):
        char = template[i]
        if char in "{}" and template[i + 1 : i + 2] == char:
            i += 2
            continue
        if char == "}":
            raise DiagnosticError.of(
                DiagnosticKind.UNBALANCED_PLACEHOLDER,
                f"Unmatched '}}' at offset {i} in message template",
                _locate(span, template, i, i + 1),
            )
        if char == "{":
            end = template.find("}", i + 1)
            if end == -1:
                raise DiagnosticError.of(
                    DiagnosticKind.UNBALANCED_PLACEHOLDER,
                    f"Unclosed '{{' at offset {i} in message template",
                    _locate(span, template, i, i + 1),
                )
            name = template[i + 1 : end]
            if not _NAME_RE.match(name) or name == "_":
                raise DiagnosticError.of(
                    DiagnosticKind.INVALID_PLACEHOLDER,
                    f"Invalid placeholder name '{name}': expected an identifier",
                    _locate(span, template, i, end + 1),
                )
            if is_reserved(name):
                raise DiagnosticError.of(
                    DiagnosticKind.INVALID_PLACEHOLDER,
                    f"Invalid placeholder name '{name}': reserved word cannot name a parameter",
                    _locate(span, template, i, end + 1),
                )
            if name not in names:
                names.append(name)
            i = end + 1
            continue
        i += 1
    return names
