"""
Farpy Lexer Package

Implements the lexical analyzer (tokenizer) for the Farpy language.

Key Features:
- Integer, string and identifier literals
- Two-character operator lookahead (==, !=, <=, >=, &&, ||, **, +=, ...)
- Configurable declaration keywords
- Zero-based line/column spans with the full line captured for diagnostics
"""

from .tokens import Token, TokenType, SourceSpan, KEYWORDS, OPERATORS, describe_token_type
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import Diagnostic, FarpyError, LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceSpan",
    "KEYWORDS",
    "OPERATORS",
    "describe_token_type",
    "tokenize_string",
    "tokenize_file",
    "Diagnostic",
    "FarpyError",
    "LexerError",
]
