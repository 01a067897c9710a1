"""
Token definitions for the Farpy lexer.

This module defines all token types supported by Farpy, including:
- Literals (integers, strings) and identifiers
- Operators, including the two-character compounds
- Keywords, with the declaration keywords kept in their own table
- Punctuation and delimiters
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Dict


class TokenType(Enum):
    """
    Enumeration of all token types in Farpy.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Literals
    # ========================================================================
    IDENTIFIER = auto()             # name, _tmp, x1
    NUMBER = auto()                 # 42
    STRING = auto()                 # "hello"

    # ========================================================================
    # Operators
    # ========================================================================

    # Arithmetic
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    STAR = auto()                   # *
    SLASH = auto()                  # /
    PERCENT = auto()                # %
    POWER = auto()                  # **

    # Assignment
    ASSIGN = auto()                 # =
    PLUS_ASSIGN = auto()            # +=
    MINUS_ASSIGN = auto()           # -=
    STAR_ASSIGN = auto()            # *=
    SLASH_ASSIGN = auto()           # /=
    PERCENT_ASSIGN = auto()         # %=

    # Comparison
    EQUAL_EQUAL = auto()            # ==
    BANG_EQUAL = auto()             # !=
    LESS = auto()                   # <
    LESS_EQUAL = auto()             # <=
    GREATER = auto()                # >
    GREATER_EQUAL = auto()          # >=

    # Logical
    AND = auto()                    # &&
    OR = auto()                     # ||
    BANG = auto()                   # !

    # Bitwise
    AMPERSAND = auto()              # &
    PIPE = auto()                   # |
    CARET = auto()                  # ^
    TILDE = auto()                  # ~

    # ========================================================================
    # Punctuation and Delimiters
    # ========================================================================
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }
    LEFT_BRACKET = auto()           # [
    RIGHT_BRACKET = auto()          # ]
    COMMA = auto()                  # ,
    SEMICOLON = auto()              # ;
    COLON = auto()                  # :
    DOT = auto()                    # .
    QUESTION = auto()               # ?

    # ========================================================================
    # Keywords
    # ========================================================================
    IF = auto()                     # if
    ELSE = auto()                   # else
    WHILE = auto()                  # while
    FOR = auto()                    # for
    FOREACH = auto()                # foreach
    DO = auto()                     # do
    BREAK = auto()                  # break
    CONTINUE = auto()               # continue
    RETURN = auto()                 # return
    TRUE = auto()                   # true
    FALSE = auto()                  # false

    # Declaration keywords (spelling is configurable, see DECLARATION_KEYWORDS)
    NEW = auto()                    # new
    MUT = auto()                    # mut

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of file


@dataclass(frozen=True)
class SourceSpan:
    """
    Where a token or node lives in the source text.

    Columns are zero-based offsets into the line; ``line_content`` keeps the
    whole line so a diagnostic can be rendered without the original buffer.
    """
    line: int
    start_column: int
    end_column: int
    filename: str = "<unknown>"
    line_content: str = ""

    def __post_init__(self):
        if self.line < 1:
            raise ValueError(f"line must be >= 1, got {self.line}")
        if self.start_column < 0 or self.start_column > self.end_column:
            raise ValueError(
                f"invalid column range {self.start_column}..{self.end_column}"
            )

    @property
    def width(self) -> int:
        return self.end_column - self.start_column

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.start_column}"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the Farpy language.

    Contains the token type, lexeme (raw text), semantic value,
    and source span for error reporting.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # Parsed/semantic value (e.g., int for NUMBER)
    span: SourceSpan

    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type in {
            TokenType.NUMBER, TokenType.STRING,
            TokenType.TRUE, TokenType.FALSE,
        }

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword."""
        return self.type in KEYWORD_TYPES

    @property
    def is_operator(self) -> bool:
        """Check if this token is an operator or punctuation symbol."""
        return self.type in OPERATOR_TYPES

    @property
    def is_identifier(self) -> bool:
        return self.type == TokenType.IDENTIFIER


# Lookup tables used by the lexer for keyword/operator recognition

CORE_KEYWORDS: Dict[str, TokenType] = {
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "while": TokenType.WHILE,
    "for": TokenType.FOR,
    "foreach": TokenType.FOREACH,
    "do": TokenType.DO,
    "break": TokenType.BREAK,
    "continue": TokenType.CONTINUE,
    "return": TokenType.RETURN,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
}

# Keywords that introduce a variable declaration. Pass a different table to
# the Lexer to respell them (e.g. {"let": TokenType.NEW}).
DECLARATION_KEYWORDS: Dict[str, TokenType] = {
    "new": TokenType.NEW,
    "mut": TokenType.MUT,
}

KEYWORDS: Dict[str, TokenType] = {**CORE_KEYWORDS, **DECLARATION_KEYWORDS}

OPERATORS: Dict[str, TokenType] = {
    # Arithmetic
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
    "**": TokenType.POWER,

    # Assignment
    "=": TokenType.ASSIGN,
    "+=": TokenType.PLUS_ASSIGN,
    "-=": TokenType.MINUS_ASSIGN,
    "*=": TokenType.STAR_ASSIGN,
    "/=": TokenType.SLASH_ASSIGN,
    "%=": TokenType.PERCENT_ASSIGN,

    # Comparison
    "==": TokenType.EQUAL_EQUAL,
    "!=": TokenType.BANG_EQUAL,
    "<": TokenType.LESS,
    "<=": TokenType.LESS_EQUAL,
    ">": TokenType.GREATER,
    ">=": TokenType.GREATER_EQUAL,

    # Logical
    "&&": TokenType.AND,
    "||": TokenType.OR,
    "!": TokenType.BANG,

    # Bitwise
    "&": TokenType.AMPERSAND,
    "|": TokenType.PIPE,
    "^": TokenType.CARET,
    "~": TokenType.TILDE,

    # Punctuation
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    ":": TokenType.COLON,
    ".": TokenType.DOT,
    "?": TokenType.QUESTION,
}

KEYWORD_TYPES = frozenset(KEYWORDS.values())
OPERATOR_TYPES = frozenset(OPERATORS.values())

# Reverse table for messages: TokenType.COLON -> ':'
TOKEN_SYMBOLS: Dict[TokenType, str] = {
    **{token_type: lexeme for lexeme, token_type in KEYWORDS.items()},
    **{token_type: lexeme for lexeme, token_type in OPERATORS.items()},
}


def describe_token_type(token_type: TokenType) -> str:
    """Human-readable name of a token type, e.g. "':'" or "identifier"."""
    if token_type in TOKEN_SYMBOLS:
        return f"'{TOKEN_SYMBOLS[token_type]}'"
    if token_type == TokenType.EOF:
        return "end of input"
    return token_type.name.lower()
