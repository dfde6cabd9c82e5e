"""Token stream → single-line source text."""

from __future__ import annotations

from errorgen.tokens.nodes import Delimiter, Group, Ident, Literal, Punct, TokenStream

# An atom is a token with runs of joint punctuation merged into one operator.
_Atom = Group | Ident | Literal | str

_NO_SPACE_BEFORE = frozenset({",", ";", ":", "::"})
_NO_SPACE_AFTER = frozenset({"::", "&", "#"})


def _atoms(stream: TokenStream) -> list[_Atom]:
    atoms: list[_Atom] = []
    op = ""
    for token in stream:
        if isinstance(token, Punct):
            op += token.char
            if not token.is_joint:
                atoms.append(op)
                op = ""
            continue
        if op:
            atoms.append(op)
            op = ""
        atoms.append(token)
    if op:
        atoms.append(op)
    return atoms


def _needs_space(prev: _Atom, cur: _Atom) -> bool:
    if isinstance(cur, str) and cur in _NO_SPACE_BEFORE:
        return False
    if isinstance(prev, str) and prev in _NO_SPACE_AFTER:
        return False
    if cur == "!" and isinstance(prev, Ident):
        return False
    if prev == "!" and isinstance(cur, Group):
        return False
    if (
        isinstance(prev, Ident)
        and isinstance(cur, Group)
        and cur.delimiter is not Delimiter.BRACE
    ):
        return False
    return True


def _render_atom(atom: _Atom) -> str:
    match atom:
        case str(op):
            return op
        case Ident(text=text):
            return text
        case Literal():
            return str(atom)
        case Group(delimiter=Delimiter.BRACE, stream=stream):
            inner = render(stream)
            return f"{{ {inner} }}" if inner else "{}"
        case Group(delimiter=delimiter, stream=stream):
            return f"{delimiter.open}{render(stream)}{delimiter.close}"
        case _:
            raise ValueError(f"Unknown token type: {type(atom).__name__}")


def render(stream: TokenStream) -> str:
    """Render a token stream as one line of source text."""
    parts: list[str] = []
    prev: _Atom | None = None
    for atom in _atoms(stream):
        if prev is not None and _needs_space(prev, atom):
            parts.append(" ")
        parts.append(_render_atom(atom))
        prev = atom
    return "".join(parts)
