"""Parsed error declarations."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from errorgen.models.errors import SourceSpan


class ErrorDefinition(BaseModel):
    """One ``<id> : <severity> : "<template>"`` declaration.

    ``placeholders`` holds the unique substitution names of
    ``message_template`` in first-occurrence order.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    severity: str
    message_template: str
    placeholders: tuple[str, ...] = ()
    span: SourceSpan | None = None

    def format_message(self, **values: object) -> str:
        """Substitute placeholders the way the generated constructor does at run time.

        Raises ``KeyError`` when a placeholder has no value.
        """
        out: list[str] = []
        template = self.message_template
        i = 0
        while i < len(template):
            char = template[i]
            if char in "{}" and template[i + 1 : i + 2] == char:
                out.append(char)
                i += 2
                continue
            if char == "{":
                end = template.index("}", i)
                out.append(str(values[template[i + 1 : end]]))
                i = end + 1
                continue
            out.append(char)
            i += 1
        return "".join(out)

    def same_declaration(self, other: ErrorDefinition) -> bool:
        """True when both declare the same id, severity and template."""
        return (
            self.id == other.id
            and self.severity == other.severity
            and self.message_template == other.message_template
        )
