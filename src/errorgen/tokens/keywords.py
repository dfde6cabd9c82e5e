"""Reserved words of the target language."""

from __future__ import annotations

KEYWORDS = frozenset(
    {
        "as", "async", "await", "break", "const", "continue", "dyn", "else",
        "enum", "extern", "false", "fn", "for", "if", "impl", "in", "let",
        "loop", "match", "mod", "move", "mut", "pub", "ref", "return",
        "static", "struct", "trait", "true", "type", "unsafe", "use", "where",
        "while", "abstract", "become", "box", "do", "final", "gen", "macro",
        "override", "priv", "try", "typeof", "unsized", "virtual", "yield",
    }
)

# Keywords that cannot be written as raw identifiers (``r#self`` is invalid).
NON_RAW_KEYWORDS = frozenset({"self", "Self", "super", "crate"})


def is_reserved(name: str) -> bool:
    return name in KEYWORDS or name in NON_RAW_KEYWORDS
