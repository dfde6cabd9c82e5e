"""Diagnostic → host-visible compile failure."""

from __future__ import annotations

from errorgen.models.errors import Diagnostic
from errorgen.tokens.builder import StreamBuilder
from errorgen.tokens.nodes import TokenStream


def report(diagnostic: Diagnostic) -> TokenStream:
    """Emit ``compile_error!("error[Kind]: message");`` spanned at the diagnostic.

    The host renders this invocation as a compile error pointing at the
    offending tokens.
    """
    message = f"error[{diagnostic.kind.value}]: {diagnostic.message}"
    builder = StreamBuilder(diagnostic.span)
    builder.ident("compile_error").punct("!")
    builder.parens(builder.child().string(message))
    builder.punct(";")
    return builder.build()
