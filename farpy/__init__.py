"""
Farpy Front End

Turns Farpy source text into tokens and then into an abstract syntax tree.

Architecture:
    farpy/
    ├── lexer/           # Tokenization, source spans and diagnostics
    ├── parser/          # Pratt parser and AST nodes
    └── cli.py           # Command-line driver (token / AST dumps)
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType, SourceSpan, LexerError
from .parser import Parser, ParseError, parse_string, parse_file

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "Token",
    "TokenType",
    "SourceSpan",

    # Errors
    "LexerError",
    "ParseError",

    # Convenience
    "parse_string",
    "parse_file",

    # Version info
    "__version__",
    "__license__",
]
