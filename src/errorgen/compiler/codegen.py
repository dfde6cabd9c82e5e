"""Phase 3: error definitions → token stream of the enum and constructor functions."""

from __future__ import annotations

from errorgen.compiler.naming import function_name
from errorgen.models.definition import ErrorDefinition
from errorgen.models.errors import DiagnosticError, DiagnosticKind, SourceSpan
from errorgen.models.options import ExpansionOptions, Visibility
from errorgen.tokens.builder import StreamBuilder, separated
from errorgen.tokens.nodes import TokenStream


class CodeGenerator:
    """Generates declarations from a parsed batch using the configured options."""

    def __init__(self, options: ExpansionOptions | None = None) -> None:
        self._options = options or ExpansionOptions()

    @property
    def options(self) -> ExpansionOptions:
        return self._options

    def generate(
        self, definitions: list[ErrorDefinition], enum_name: str | None = None
    ) -> TokenStream:
        """Emit ``enum`` followed by one constructor per definition, in input order.

        Raises ``DiagnosticError`` (NameCollision) when two ids map to the
        same function name.
        """
        enum_name = enum_name or self._options.enum_name
        names = self.function_names(definitions)
        stream = self._enum(definitions, enum_name)
        for definition, name in zip(definitions, names, strict=True):
            stream = stream + self._constructor(definition, name, enum_name)
        return stream

    def function_names(self, definitions: list[ErrorDefinition]) -> list[str]:
        """Constructor names in definition order; rejects collisions."""
        owners: dict[str, ErrorDefinition] = {}
        names: list[str] = []
        for definition in definitions:
            name = function_name(definition.id)
            owner = owners.get(name)
            if owner is not None:
                raise DiagnosticError.of(
                    DiagnosticKind.NAME_COLLISION,
                    f"Function name '{name}' generated for '{definition.id}' "
                    f"collides with the one generated for '{owner.id}'",
                    definition.span,
                )
            owners[name] = definition
            names.append(name)
        return names

    # -- emitters ------------------------------------------------------------

    def _visibility(self, builder: StreamBuilder) -> StreamBuilder:
        match self._options.visibility:
            case Visibility.PUBLIC:
                builder.ident("pub")
            case Visibility.CRATE:
                builder.ident("pub").parens(builder.child().ident("crate"))
            case Visibility.PRIVATE:
                pass
        return builder

    def _enum(self, definitions: list[ErrorDefinition], enum_name: str) -> TokenStream:
        span: SourceSpan | None = None
        for definition in definitions:
            if definition.span is not None:
                span = definition.span if span is None else span.join(definition.span)

        variants = [StreamBuilder(d.span).ident(d.id).build() for d in definitions]
        builder = self._visibility(StreamBuilder(span))
        builder.ident("enum", enum_name)
        builder.braces(separated(variants, span=span))
        return builder.build()

    def _constructor(
        self, definition: ErrorDefinition, name: str, enum_name: str
    ) -> TokenStream:
        opts = self._options
        builder = self._visibility(StreamBuilder(definition.span))

        params = [
            builder.child().ident(p).punct(":").punct("&").ident("str").build()
            for p in definition.placeholders
        ]
        builder.ident("fn", name).parens(separated(params, span=definition.span))
        builder.punct("->").ident(opts.error_type)

        format_args = builder.child().string(definition.message_template)
        for p in definition.placeholders:
            format_args.punct(",").ident(p).punct("=").ident(p)

        fields = [
            builder.child().ident("code").punct(":").path(enum_name, definition.id).build(),
            builder.child()
            .ident("severity")
            .punct(":")
            .path(opts.severity_type, definition.severity)
            .build(),
            builder.child()
            .ident("message")
            .punct(":")
            .ident("format")
            .punct("!")
            .parens(format_args)
            .build(),
        ]
        body = builder.child().ident(opts.error_type).braces(
            separated(fields, span=definition.span)
        )
        builder.braces(body)
        return builder.build()
