"""Shared test fixtures for errorgen."""

from __future__ import annotations

import pytest

from errorgen.compiler.codegen import CodeGenerator
from errorgen.compiler.pipeline import ExpansionPipeline
from errorgen.parser.definitions import DefinitionParser
from errorgen.parser.lexer import tokenize
from errorgen.tokens.nodes import TokenStream


@pytest.fixture
def parser() -> DefinitionParser:
    return DefinitionParser()


@pytest.fixture
def codegen() -> CodeGenerator:
    return CodeGenerator()


@pytest.fixture
def pipeline() -> ExpansionPipeline:
    return ExpansionPipeline()


def lex(source: str) -> TokenStream:
    """Tokenize a source snippet for tests."""
    return tokenize(source, filename="test.rs")


SAMPLE_DECLARATIONS = """\
// Declarations for the storage subsystem.
DiskFull : E : "disk {device} is full ({used} of {total} used)",
ReadOnly : W : "mount point {path} is read-only",
HTTPTimeout : E : "request to {url} timed out after {seconds}s; retry {url} later",
Unknown : E : "unknown failure",
"""
