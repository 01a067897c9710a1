"""
Error handling for the Farpy parser.

Syntax errors reuse the lexer's Diagnostic model so both phases render
the same caret-annotated report.
"""

from typing import Optional, List

from ..lexer.tokens import Token, TokenType, SourceSpan, describe_token_type
from ..lexer.errors import FarpyError


class ParseError(FarpyError):
    """
    Exception raised when the parser encounters a fatal syntax error.

    Contains detailed diagnostic information for error reporting.
    """

    phase = "parser"

    def __init__(
        self,
        message: str,
        span: SourceSpan,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(
            message,
            span,
            code=code,
            help_text=help_text,
            suggestions=suggestions,
        )
        self.token = token


class SyntaxSuggestions:
    """Hints attached to syntax errors."""

    MISSING_TOKEN_HINTS = {
        TokenType.COLON: ["Add a colon ':' between the variable name and its type"],
        TokenType.ASSIGN: ["Add an assignment operator '=' before the initial value"],
        TokenType.IDENTIFIER: ["Use a name made of letters, digits and '_'"],
    }

    @staticmethod
    def suggest_missing_token(expected: TokenType) -> List[str]:
        """Suggest what token might be missing."""
        return list(SyntaxSuggestions.MISSING_TOKEN_HINTS.get(expected, []))


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Invalid token at start of expression",
    "P002": "Expected token not found",
    "P003": "Invalid token in infix position",
    "P004": "Unexpected end of input",
    "P005": "Expression nested too deeply",
}


def describe_found(token: Token) -> str:
    if token.type == TokenType.EOF:
        return "end of input"
    return f"'{token.lexeme}'"


def create_invalid_expression_start_error(token: Token) -> ParseError:
    """Create an error for a token that cannot begin an expression."""
    return ParseError(
        message=f"Invalid token at start of expression: {describe_found(token)}",
        span=token.span,
        token=token,
        code="P001",
        help_text="An expression starts with a number, a string, an identifier or a declaration.",
    )


def create_unexpected_token_error(expected: TokenType, found: Token, context: str = "") -> ParseError:
    """Create an error for a required token that is missing."""
    expected_str = describe_token_type(expected)
    where = f" {context}" if context else ""

    return ParseError(
        message=f"Expected {expected_str}{where}, found {describe_found(found)}",
        span=found.span,
        token=found,
        code="P002",
        suggestions=SyntaxSuggestions.suggest_missing_token(expected),
    )


def create_invalid_infix_error(token: Token) -> ParseError:
    """Create an error for an operator with a precedence but no infix rule."""
    return ParseError(
        message=f"Invalid token in infix position: {describe_found(token)}",
        span=token.span,
        token=token,
        code="P003",
    )


def create_unexpected_eof_error(expected: str, span: SourceSpan) -> ParseError:
    """Create an error for unexpected end of input."""
    return ParseError(
        message=f"Unexpected end of input, expected {expected}",
        span=span,
        code="P004",
        help_text=f"The parser reached the end of the input while expecting {expected}.",
    )


def create_nesting_too_deep_error(token: Token) -> ParseError:
    """Create an error for input nested past the interpreter's recursion limit."""
    return ParseError(
        message="Expression nested too deeply",
        span=token.span,
        token=token,
        code="P005",
        help_text="Split the chain of assignments or powers into separate statements.",
    )
