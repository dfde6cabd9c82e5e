"""Tests for the declaration parser and batch validator."""

from __future__ import annotations

import pytest

from errorgen.models.definition import ErrorDefinition
from errorgen.models.errors import DiagnosticError, DiagnosticKind
from errorgen.models.options import DuplicateIdPolicy
from errorgen.parser.definitions import DefinitionParser
from errorgen.parser.validator import DefinitionValidator
from errorgen.tokens.builder import StreamBuilder
from errorgen.tokens.nodes import TokenStream
from tests.conftest import SAMPLE_DECLARATIONS, lex


def _diagnostic(parser: DefinitionParser, source: str):
    with pytest.raises(DiagnosticError) as exc_info:
        parser.parse(lex(source))
    return exc_info.value.diagnostic


class TestDefinitionParser:
    def test_single_definition(self, parser: DefinitionParser) -> None:
        (definition,) = parser.parse(lex('Foo : E : "bad {x}"'))
        assert definition.id == "Foo"
        assert definition.severity == "E"
        assert definition.message_template == "bad {x}"
        assert definition.placeholders == ("x",)

    def test_empty_input(self, parser: DefinitionParser) -> None:
        assert parser.parse(TokenStream()) == []

    def test_trailing_comma_and_repeated_placeholder(self, parser: DefinitionParser) -> None:
        definitions = parser.parse(lex('Foo : E : "msg", Bar : W : "msg {y} {y}",'))
        assert [d.id for d in definitions] == ["Foo", "Bar"]
        assert definitions[0].placeholders == ()
        assert definitions[1].placeholders == ("y",)

    def test_order_preserved(self, parser: DefinitionParser) -> None:
        definitions = parser.parse(lex(SAMPLE_DECLARATIONS))
        assert [d.id for d in definitions] == ["DiskFull", "ReadOnly", "HTTPTimeout", "Unknown"]
        assert definitions[0].placeholders == ("device", "used", "total")
        assert definitions[2].placeholders == ("url", "seconds")

    def test_any_severity_identifier_accepted(self, parser: DefinitionParser) -> None:
        (definition,) = parser.parse(lex('Foo : Catastrophic : "x"'))
        assert definition.severity == "Catastrophic"

    def test_keyword_identifiers_accepted(self, parser: DefinitionParser) -> None:
        (definition,) = parser.parse(lex('Type : fn : "x"'))
        assert (definition.id, definition.severity) == ("Type", "fn")

    def test_raw_string_template(self, parser: DefinitionParser) -> None:
        (definition,) = parser.parse(lex('Foo : E : r"path \\ {p}"'))
        assert definition.message_template == "path \\ {p}"
        assert definition.placeholders == ("p",)

    def test_escaped_string_template_decoded(self, parser: DefinitionParser) -> None:
        (definition,) = parser.parse(lex('Foo : E : "say \\"{w}\\""'))
        assert definition.message_template == 'say "{w}"'

    def test_definition_span_covers_declaration(self, parser: DefinitionParser) -> None:
        (definition,) = parser.parse(lex('  Foo : E : "x"'))
        assert definition.span.start == (1, 3)
        assert definition.span.end == (1, 16)

    def test_hand_built_stream(self, parser: DefinitionParser) -> None:
        stream = (
            StreamBuilder()
            .ident("Foo")
            .punct(":")
            .ident("E")
            .punct(":")
            .string("made by hand {v}")
            .build()
        )
        (definition,) = parser.parse(stream)
        assert definition.placeholders == ("v",)
        assert definition.span is None


class TestParserErrors:
    def test_missing_second_colon(self, parser: DefinitionParser) -> None:
        diagnostic = _diagnostic(parser, 'Foo : E "msg"')
        assert diagnostic.kind is DiagnosticKind.MALFORMED_DEFINITION
        assert diagnostic.span.start == (1, 9)

    def test_double_colon_rejected(self, parser: DefinitionParser) -> None:
        diagnostic = _diagnostic(parser, 'Foo :: E : "msg"')
        assert diagnostic.kind is DiagnosticKind.MALFORMED_DEFINITION
        assert "::" in diagnostic.message
        assert diagnostic.span.start == (1, 5)
        assert diagnostic.span.end == (1, 7)

    def test_premature_end_points_at_last_token(self, parser: DefinitionParser) -> None:
        diagnostic = _diagnostic(parser, "Foo : E :")
        assert diagnostic.kind is DiagnosticKind.MALFORMED_DEFINITION
        assert "end of input" in diagnostic.message
        assert diagnostic.span.start == (1, 9)

    def test_message_must_be_string(self, parser: DefinitionParser) -> None:
        diagnostic = _diagnostic(parser, "Foo : E : 42")
        assert diagnostic.kind is DiagnosticKind.MALFORMED_DEFINITION

    def test_string_suffix_rejected(self, parser: DefinitionParser) -> None:
        diagnostic = _diagnostic(parser, 'Foo : E : "msg"x')
        assert "suffix" in diagnostic.message

    def test_id_must_be_identifier(self, parser: DefinitionParser) -> None:
        diagnostic = _diagnostic(parser, '"Foo" : E : "msg"')
        assert diagnostic.span.start == (1, 1)

    def test_group_in_place_of_severity(self, parser: DefinitionParser) -> None:
        diagnostic = _diagnostic(parser, 'Foo : (E) : "msg"')
        assert "group" in diagnostic.message

    def test_missing_comma_between_definitions(self, parser: DefinitionParser) -> None:
        diagnostic = _diagnostic(parser, 'Foo : E : "a" Bar : E : "b"')
        assert "`,`" in diagnostic.message
        assert diagnostic.span.start == (1, 15)

    def test_double_comma(self, parser: DefinitionParser) -> None:
        diagnostic = _diagnostic(parser, 'Foo : E : "a", , Bar : E : "b"')
        assert diagnostic.kind is DiagnosticKind.MALFORMED_DEFINITION

    def test_template_error_propagates(self, parser: DefinitionParser) -> None:
        diagnostic = _diagnostic(parser, 'Foo : E : "unterminated {x"')
        assert diagnostic.kind is DiagnosticKind.UNBALANCED_PLACEHOLDER
        assert diagnostic.span.start == (1, 25)

    def test_first_error_wins(self, parser: DefinitionParser) -> None:
        diagnostic = _diagnostic(parser, 'Foo : E : "{bad name}", Bar E "x"')
        assert diagnostic.kind is DiagnosticKind.INVALID_PLACEHOLDER

    @pytest.mark.parametrize(
        "source",
        [
            'Foo : E : "bad \\q"',
            'Foo : E : "\\x"',
            'Foo : E : "\\x80"',
            'Foo : E : "\\u{110000}"',
            'Foo : E : "\\u{d800}"',
        ],
    )
    def test_undecodable_escape_is_diagnostic(
        self, parser: DefinitionParser, source: str
    ) -> None:
        diagnostic = _diagnostic(parser, source)
        assert diagnostic.kind is DiagnosticKind.MALFORMED_DEFINITION
        assert diagnostic.message.startswith("Invalid message literal")
        assert diagnostic.span.start == (1, 11)

    @pytest.mark.parametrize("ident", ["_", "__"])
    def test_underscore_only_id_rejected(self, parser: DefinitionParser, ident: str) -> None:
        diagnostic = _diagnostic(parser, f'{ident} : E : "x"')
        assert diagnostic.kind is DiagnosticKind.MALFORMED_DEFINITION
        assert diagnostic.span.start == (1, 1)

    def test_leading_underscore_id_accepted(self, parser: DefinitionParser) -> None:
        (definition,) = parser.parse(lex('_Internal : E : "x"'))
        assert definition.id == "_Internal"


def _definition(id_: str, severity: str = "E", template: str = "x") -> ErrorDefinition:
    return ErrorDefinition(id=id_, severity=severity, message_template=template)


class TestDefinitionValidator:
    def test_unique_ids_pass(self) -> None:
        batch = [_definition("A"), _definition("B")]
        assert DefinitionValidator().validate(batch) == batch

    def test_duplicates_rejected_by_default(self) -> None:
        with pytest.raises(DiagnosticError) as exc_info:
            DefinitionValidator().validate([_definition("A"), _definition("A")])
        assert exc_info.value.diagnostic.kind is DiagnosticKind.DUPLICATE_DEFINITION

    def test_identical_duplicates_merged(self) -> None:
        validator = DefinitionValidator(DuplicateIdPolicy.MERGE)
        result = validator.validate([_definition("A"), _definition("B"), _definition("A")])
        assert [d.id for d in result] == ["A", "B"]

    def test_conflicting_duplicates_rejected_under_merge(self) -> None:
        validator = DefinitionValidator(DuplicateIdPolicy.MERGE)
        with pytest.raises(DiagnosticError) as exc_info:
            validator.validate([_definition("A"), _definition("A", severity="W")])
        assert "different" in exc_info.value.diagnostic.message
