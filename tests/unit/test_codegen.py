"""Tests for enum and constructor generation."""

from __future__ import annotations

import pytest

from errorgen.compiler.codegen import CodeGenerator
from errorgen.models.definition import ErrorDefinition
from errorgen.models.errors import DiagnosticError, DiagnosticKind, SourceSpan
from errorgen.models.options import ExpansionOptions, Visibility
from errorgen.tokens.nodes import Group, Ident
from errorgen.tokens.render import render


def _definition(id_: str, template: str = "msg", *placeholders: str) -> ErrorDefinition:
    return ErrorDefinition(
        id=id_, severity="E", message_template=template, placeholders=placeholders
    )


def _items(stream) -> list[list]:
    """Split a generated stream into top-level items, each ending with a brace group."""
    items: list[list] = []
    current: list = []
    for token in stream:
        current.append(token)
        if isinstance(token, Group) and token.delimiter.open == "{":
            items.append(current)
            current = []
    assert current == []
    return items


class TestCodeGenerator:
    def test_scenario_single_placeholder(self, codegen: CodeGenerator) -> None:
        stream = codegen.generate([_definition("Foo", "bad {x}", "x")])
        assert render(stream) == (
            "pub enum ErrorCode { Foo } "
            "pub fn foo(x: &str) -> Error { Error { code: ErrorCode::Foo, "
            'severity: Severity::E, message: format!("bad {x}", x = x) } }'
        )

    def test_empty_batch(self, codegen: CodeGenerator) -> None:
        stream = codegen.generate([])
        assert render(stream) == "pub enum ErrorCode {}"

    def test_zero_parameter_function(self, codegen: CodeGenerator) -> None:
        stream = codegen.generate([_definition("Unknown", "unknown failure")])
        assert "pub fn unknown() -> Error" in render(stream)
        assert 'format!("unknown failure")' in render(stream)

    def test_variant_and_function_counts(self, codegen: CodeGenerator) -> None:
        batch = [
            _definition("First", "{a} {b}", "a", "b"),
            _definition("Second"),
            _definition("ThirdOne", "{c}", "c"),
        ]
        enum, *functions = _items(codegen.generate(batch))
        variants = [t.text for t in enum[-1].stream if isinstance(t, Ident)]
        assert variants == ["First", "Second", "ThirdOne"]
        assert len(functions) == 3
        names = [item[2].text for item in functions]
        assert names == ["first", "second", "third_one"]
        param_counts = [
            sum(1 for t in item[3].stream if isinstance(t, Ident) and t.text == "str")
            for item in functions
        ]
        assert param_counts == [2, 0, 1]

    def test_multiple_placeholders_bound_by_name(self, codegen: CodeGenerator) -> None:
        definition = _definition("Timeout", "{url} after {s}s ({url})", "url", "s")
        rendered = render(codegen.generate([definition]))
        assert "fn timeout(url: &str, s: &str)" in rendered
        assert 'format!("{url} after {s}s ({url})", url = url, s = s)' in rendered

    def test_template_escaped_on_output(self, codegen: CodeGenerator) -> None:
        rendered = render(codegen.generate([_definition("Quote", 'say "hi"\n')]))
        assert 'format!("say \\"hi\\"\\n")' in rendered

    def test_name_collision(self, codegen: CodeGenerator) -> None:
        span = SourceSpan(line=2, column=1, end_line=2, end_column=20)
        batch = [
            _definition("FooBar"),
            ErrorDefinition(id="Foo_Bar", severity="E", message_template="m", span=span),
        ]
        with pytest.raises(DiagnosticError) as exc_info:
            codegen.generate(batch)
        diagnostic = exc_info.value.diagnostic
        assert diagnostic.kind is DiagnosticKind.NAME_COLLISION
        assert diagnostic.span == span
        assert "foo_bar" in diagnostic.message

    def test_custom_enum_name_argument(self, codegen: CodeGenerator) -> None:
        rendered = render(codegen.generate([_definition("Foo")], enum_name="StorageError"))
        assert rendered.startswith("pub enum StorageError { Foo }")
        assert "code: StorageError::Foo" in rendered

    @pytest.mark.parametrize(
        ("visibility", "prefix"),
        [
            (Visibility.PUBLIC, "pub enum"),
            (Visibility.CRATE, "pub(crate) enum"),
            (Visibility.PRIVATE, "enum"),
        ],
    )
    def test_visibility(self, visibility: Visibility, prefix: str) -> None:
        codegen = CodeGenerator(ExpansionOptions(visibility=visibility))
        rendered = render(codegen.generate([_definition("Foo")]))
        assert rendered.startswith(f"{prefix} ErrorCode")
        assert f"{prefix.replace('enum', 'fn')} foo()" in rendered

    def test_custom_type_names(self) -> None:
        codegen = CodeGenerator(ExpansionOptions(error_type="Failure", severity_type="Level"))
        rendered = render(codegen.generate([_definition("Foo")]))
        assert "-> Failure { Failure { code" in rendered
        assert "severity: Level::E" in rendered

    def test_keyword_id_uses_raw_function_name(self, codegen: CodeGenerator) -> None:
        rendered = render(codegen.generate([_definition("Type")]))
        assert "pub fn r#type()" in rendered
        assert "ErrorCode { Type }" in rendered

    def test_generated_tokens_carry_definition_span(self, codegen: CodeGenerator) -> None:
        span = SourceSpan(line=3, column=1, end_line=3, end_column=18)
        definition = ErrorDefinition(id="Foo", severity="E", message_template="m", span=span)
        enum, function = _items(codegen.generate([definition]))
        assert all(token.span == span for token in function)
        assert enum[0].span == span

    def test_deterministic(self, codegen: CodeGenerator) -> None:
        batch = [_definition("A", "{x}", "x"), _definition("B")]
        assert codegen.generate(batch) == codegen.generate(batch)
