"""Orchestrates one expansion: Tokens → Definitions → Validation → Generated tokens."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from errorgen.compiler.codegen import CodeGenerator
from errorgen.compiler.report import report
from errorgen.models.definition import ErrorDefinition
from errorgen.models.errors import Diagnostic, DiagnosticError
from errorgen.models.options import ExpansionOptions
from errorgen.parser.definitions import DefinitionParser
from errorgen.parser.lexer import tokenize
from errorgen.parser.validator import DefinitionValidator
from errorgen.tokens.nodes import TokenStream
from errorgen.tokens.render import render

logger = logging.getLogger("errorgen.compiler")


@dataclass(frozen=True)
class ExpansionResult:
    """The result of one expansion.

    ``tokens`` is the generated stream when ``ok``; otherwise it is the
    ``compile_error!`` stream for ``diagnostic`` and ``definitions`` is empty.
    """

    tokens: TokenStream
    definitions: list[ErrorDefinition] = field(default_factory=list)
    diagnostic: Diagnostic | None = None

    @property
    def ok(self) -> bool:
        return self.diagnostic is None

    @property
    def rendered(self) -> str:
        return render(self.tokens)

    def raise_for_diagnostic(self) -> None:
        if self.diagnostic is not None:
            raise DiagnosticError(self.diagnostic)


class ExpansionPipeline:
    """Orchestrates: Parse → Validate → Generate, stopping at the first diagnostic.

    Holds only immutable options, so one instance may serve concurrent
    expansions.
    """

    def __init__(self, options: ExpansionOptions | None = None) -> None:
        self._options = options or ExpansionOptions()
        self._parser = DefinitionParser()
        self._validator = DefinitionValidator(self._options.duplicate_ids)
        self._codegen = CodeGenerator(self._options)

    @property
    def options(self) -> ExpansionOptions:
        return self._options

    def expand(self, tokens: TokenStream) -> ExpansionResult:
        """Expand a declaration batch into generated declarations."""
        logger.debug("expand called (%d top-level tokens)", len(tokens))
        try:
            # Phase 1: Parsing (placeholder extraction included)
            definitions = self._parser.parse(tokens)

            # Phase 2: Batch validation
            definitions = self._validator.validate(definitions)

            # Phase 3: Code generation
            generated = self._codegen.generate(definitions)
        except DiagnosticError as exc:
            return self._failed(exc.diagnostic)

        logger.debug(
            "expanded %d definitions into enum %s", len(definitions), self._options.enum_name
        )
        return ExpansionResult(tokens=generated, definitions=definitions)

    def expand_source(self, source: str, filename: str = "<input>") -> ExpansionResult:
        """Tokenize ``source`` and expand it."""
        try:
            tokens = tokenize(source, filename)
        except DiagnosticError as exc:
            return self._failed(exc.diagnostic)
        return self.expand(tokens)

    @staticmethod
    def _failed(diagnostic: Diagnostic) -> ExpansionResult:
        logger.warning("expansion failed: %s", diagnostic.render())
        return ExpansionResult(tokens=report(diagnostic), diagnostic=diagnostic)
