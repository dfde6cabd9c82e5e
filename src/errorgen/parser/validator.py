"""Batch-level validation: duplicate declaration ids."""

from __future__ import annotations

from errorgen.models.definition import ErrorDefinition
from errorgen.models.errors import DiagnosticError, DiagnosticKind
from errorgen.models.options import DuplicateIdPolicy


class DefinitionValidator:
    """Applies the duplicate-id policy to a parsed batch."""

    def __init__(self, policy: DuplicateIdPolicy = DuplicateIdPolicy.REJECT) -> None:
        self._policy = policy

    def validate(self, definitions: list[ErrorDefinition]) -> list[ErrorDefinition]:
        """Return the batch with duplicates resolved, in input order.

        Under ``reject`` any repeated id fails; under ``merge`` identical
        redeclarations are dropped and conflicting ones fail.
        """
        seen: dict[str, ErrorDefinition] = {}
        result: list[ErrorDefinition] = []
        for definition in definitions:
            first = seen.get(definition.id)
            if first is None:
                seen[definition.id] = definition
                result.append(definition)
                continue
            if self._policy is DuplicateIdPolicy.MERGE and first.same_declaration(definition):
                continue
            where = f" (first declared at {first.span})" if first.span is not None else ""
            detail = (
                "" if self._policy is DuplicateIdPolicy.REJECT
                else " with a different severity or message"
            )
            raise DiagnosticError.of(
                DiagnosticKind.DUPLICATE_DEFINITION,
                f"Error '{definition.id}' is declared more than once{detail}{where}",
                definition.span,
            )
        return result
