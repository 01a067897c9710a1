"""
Farpy Pratt Parser Implementation

Top-down operator precedence (Pratt) parser. Each token kind may have a
prefix rule (what it means at the start of an expression) and, through
the precedence table, an infix rule (what it means after a left operand).
"""

import logging
from enum import IntEnum
from typing import Callable, Dict, List

from ..lexer.tokens import Token, TokenType, SourceSpan
from .ast_nodes import ASTNode, NumberLiteral, StringLiteral, Identifier, BinaryOp, VarDeclaration
from .errors import (
    ParseError, create_invalid_expression_start_error, create_unexpected_token_error,
    create_invalid_infix_error, create_unexpected_eof_error, create_nesting_too_deep_error
)

logger = logging.getLogger(__name__)


class Precedence(IntEnum):
    """Operator binding powers; higher binds tighter."""
    NONE = 0
    ASSIGNMENT = 1      # =, +=, -=, *=, /=, %=
    OR = 2              # ||
    AND = 3             # &&
    EQUALITY = 7        # ==, !=
    COMPARISON = 8      # <, <=, >, >=
    BITWISE = 9         # &, |, ^
    TERM = 10           # +, -
    FACTOR = 20         # *, /, %
    POWER = 30          # **


PRECEDENCES: Dict[TokenType, Precedence] = {
    TokenType.ASSIGN: Precedence.ASSIGNMENT,
    TokenType.PLUS_ASSIGN: Precedence.ASSIGNMENT,
    TokenType.MINUS_ASSIGN: Precedence.ASSIGNMENT,
    TokenType.STAR_ASSIGN: Precedence.ASSIGNMENT,
    TokenType.SLASH_ASSIGN: Precedence.ASSIGNMENT,
    TokenType.PERCENT_ASSIGN: Precedence.ASSIGNMENT,

    TokenType.OR: Precedence.OR,
    TokenType.AND: Precedence.AND,

    TokenType.EQUAL_EQUAL: Precedence.EQUALITY,
    TokenType.BANG_EQUAL: Precedence.EQUALITY,

    TokenType.LESS: Precedence.COMPARISON,
    TokenType.LESS_EQUAL: Precedence.COMPARISON,
    TokenType.GREATER: Precedence.COMPARISON,
    TokenType.GREATER_EQUAL: Precedence.COMPARISON,

    TokenType.AMPERSAND: Precedence.BITWISE,
    TokenType.PIPE: Precedence.BITWISE,
    TokenType.CARET: Precedence.BITWISE,

    TokenType.PLUS: Precedence.TERM,
    TokenType.MINUS: Precedence.TERM,

    TokenType.STAR: Precedence.FACTOR,
    TokenType.SLASH: Precedence.FACTOR,
    TokenType.PERCENT: Precedence.FACTOR,

    TokenType.POWER: Precedence.POWER,
}

RIGHT_ASSOCIATIVE = frozenset({
    TokenType.ASSIGN,
    TokenType.PLUS_ASSIGN,
    TokenType.MINUS_ASSIGN,
    TokenType.STAR_ASSIGN,
    TokenType.SLASH_ASSIGN,
    TokenType.PERCENT_ASSIGN,
    TokenType.POWER,
})


class Parser:
    """
    Farpy Pratt parser.

    Consumes a token list read-only through an advancing cursor and builds
    a list of top-level expressions/declarations.
    """

    def __init__(self, tokens: List[Token]):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the lexer, with or without a trailing EOF
        """
        self.tokens = tokens
        self.current = 0
        self.errors: List[ParseError] = []
        self._eof = self._make_eof_token()

        self._init_parsing_tables()

    def _init_parsing_tables(self):
        """Initialize the prefix (nud) and infix (led) dispatch tables."""

        self.prefix_parsers: Dict[TokenType, Callable[[Token], ASTNode]] = {
            TokenType.NUMBER: self._parse_number_literal,
            TokenType.STRING: self._parse_string_literal,
            TokenType.IDENTIFIER: self._parse_identifier,
            TokenType.NEW: self._parse_var_declaration,
        }

        self.infix_parsers: Dict[TokenType, Callable[[ASTNode, Token], ASTNode]] = {
            token_type: self._parse_binary for token_type in PRECEDENCES
        }

    def parse(self) -> List[ASTNode]:
        """
        Parse the token stream into a list of top-level nodes.

        The first syntax error stops parsing; it is stored in ``self.errors``
        and the nodes parsed before it are returned. Nesting deep enough to
        exhaust the interpreter stack is reported the same way (P005).
        """
        self.current = 0
        self.errors = []
        statements: List[ASTNode] = []

        while not self._is_at_end():
            try:
                statements.append(self.parse_expression(Precedence.NONE))
            except ParseError as e:
                self.errors.append(e)
                logger.debug("parse stopped after %d statement(s): %s", len(statements), e.message)
                break
            except RecursionError:
                error = create_nesting_too_deep_error(self._peek())
                self.errors.append(error)
                logger.debug("parse stopped after %d statement(s): %s", len(statements), error.message)
                break

        logger.debug("parsed %d top-level statement(s)", len(statements))
        return statements

    def has_errors(self) -> bool:
        """Check if parsing stopped on a syntax error."""
        return len(self.errors) > 0

    def parse_expression(self, min_binding_power: int = Precedence.NONE) -> ASTNode:
        """Parse an expression whose operators all bind tighter than ``min_binding_power``."""
        if self._is_at_end():
            raise create_unexpected_eof_error("an expression", self._peek().span)

        token = self._advance()
        prefix_parser = self.prefix_parsers.get(token.type)
        if prefix_parser is None:
            raise create_invalid_expression_start_error(token)

        left = prefix_parser(token)

        while not self._is_at_end() and self._get_precedence(self._peek().type) > min_binding_power:
            operator_token = self._advance()
            infix_parser = self.infix_parsers.get(operator_token.type)
            # Guard only: every PRECEDENCES key gets an infix rule, so this
            # fires only if a caller edits infix_parsers.
            if infix_parser is None:
                raise create_invalid_infix_error(operator_token)
            left = infix_parser(left, operator_token)

        return left

    def _get_precedence(self, token_type: TokenType) -> int:
        return PRECEDENCES.get(token_type, Precedence.NONE)

    # Prefix parsers

    def _parse_number_literal(self, token: Token) -> NumberLiteral:
        return NumberLiteral(span=token.span, value=float(token.lexeme))

    def _parse_string_literal(self, token: Token) -> StringLiteral:
        return StringLiteral(span=token.span, value=token.value)

    def _parse_identifier(self, token: Token) -> Identifier:
        return Identifier(span=token.span, name=token.lexeme)

    def _parse_var_declaration(self, keyword_token: Token) -> VarDeclaration:
        """Parse ``new [mut] name: type = initializer``; the keyword is already consumed."""
        mutable = self._match(TokenType.MUT)

        name_token = self._consume(TokenType.IDENTIFIER, "for variable name")
        self._consume(TokenType.COLON, "after variable name")
        type_token = self._consume(TokenType.IDENTIFIER, "for type after ':'")
        self._consume(TokenType.ASSIGN, "after type")

        initializer = self.parse_expression(Precedence.NONE)

        return VarDeclaration(
            span=keyword_token.span,
            name=name_token.lexeme,
            mutable=mutable,
            initializer=initializer,
            type_name=type_token.lexeme,
        )

    # Infix parsers

    def _parse_binary(self, left: ASTNode, operator_token: Token) -> BinaryOp:
        precedence = self._get_precedence(operator_token.type)
        if operator_token.type in RIGHT_ASSOCIATIVE:
            right = self.parse_expression(precedence - 1)
        else:
            right = self.parse_expression(precedence)

        return BinaryOp(
            span=operator_token.span,
            operator=operator_token.lexeme,
            left=left,
            right=right,
        )

    # Utility methods

    def _match(self, token_type: TokenType) -> bool:
        """Check if current token matches type and consume if so."""
        if self._check(token_type):
            self._advance()
            return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        if self._is_at_end():
            return False
        return self._peek().type == token_type

    def _advance(self) -> Token:
        token = self._peek()
        if not self._is_at_end():
            self.current += 1
        return token

    def _is_at_end(self) -> bool:
        return self.current >= len(self.tokens) or self.tokens[self.current].type == TokenType.EOF

    def _peek(self) -> Token:
        if self.current < len(self.tokens):
            return self.tokens[self.current]
        return self._eof

    def _consume(self, token_type: TokenType, context: str) -> Token:
        """Consume token of expected type or raise error."""
        if self._check(token_type):
            return self._advance()
        raise create_unexpected_token_error(token_type, self._peek(), context)

    def _make_eof_token(self) -> Token:
        """Synthetic end-of-input token placed just after the last real token."""
        if self.tokens and self.tokens[-1].type == TokenType.EOF:
            return self.tokens[-1]
        if self.tokens:
            last = self.tokens[-1].span
            span = SourceSpan(last.line, last.end_column, last.end_column, last.filename, last.line_content)
        else:
            span = SourceSpan(1, 0, 0)
        return Token(TokenType.EOF, "", None, span)


def parse_string(source: str, filename: str = "<string>") -> List[ASTNode]:
    """
    Convenience function to lex and parse a source string.

    Raises:
        LexerError: If lexing fails
        ParseError: If parsing fails
    """
    from ..lexer import tokenize_string

    tokens = tokenize_string(source, filename)
    parser = Parser(tokens)
    statements = parser.parse()

    if parser.errors:
        raise parser.errors[0]

    return statements


def parse_file(filepath: str) -> List[ASTNode]:
    """
    Convenience function to lex and parse a source file.

    Raises:
        LexerError: If lexing fails
        ParseError: If parsing fails
        OSError: If the file cannot be read
    """
    from ..lexer import tokenize_file

    tokens = tokenize_file(filepath)
    parser = Parser(tokens)
    statements = parser.parse()

    if parser.errors:
        raise parser.errors[0]

    return statements
