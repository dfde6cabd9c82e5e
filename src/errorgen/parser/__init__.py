"""Declaration parsing with span fidelity for errorgen."""

from errorgen.parser.definitions import DefinitionParser
from errorgen.parser.lexer import Lexer, tokenize
from errorgen.parser.placeholders import extract_placeholders
from errorgen.parser.validator import DefinitionValidator

__all__ = [
    "DefinitionParser",
    "DefinitionValidator",
    "Lexer",
    "extract_placeholders",
    "tokenize",
]
