"""
Farpy Lexer - turns source text into a flat list of tokens.

Single pass, no backtracking: every character is looked at with peek()
and consumed exactly once. Line/column are tracked as we go so each token
gets a SourceSpan that a diagnostic can point at.
"""

import logging
import os
from typing import Dict, List, Optional

from .tokens import Token, TokenType, SourceSpan, KEYWORDS, OPERATORS
from .errors import create_unknown_character_error, create_unterminated_string_error

logger = logging.getLogger(__name__)


class Lexer:
    """
    Farpy lexical analyzer.

    Converts source code text into a list of tokens. The first lexical error
    is raised as a LexerError; there is no recovery.
    """

    def __init__(
        self,
        source: str,
        filename: str = "<unknown>",
        keywords: Optional[Dict[str, TokenType]] = None,
    ):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file, used only in diagnostics
            keywords: Keyword table; defaults to KEYWORDS
        """
        self.source = source
        self.filename = filename
        self.keywords = KEYWORDS if keywords is None else keywords
        self.lines = [line.rstrip("\r") for line in source.split("\n")]
        self.pos = 0
        self.line = 1
        self.column = 0
        self.tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens in source order (no trailing EOF token)

        Raises:
            LexerError: On an unknown character or an unterminated string
        """
        self.pos = 0
        self.line = 1
        self.column = 0
        self.tokens = []

        while not self._is_at_end():
            current_char = self._peek()

            if current_char.isspace():
                self._advance()
            elif _is_digit(current_char):
                self._tokenize_number()
            elif current_char == '"':
                self._tokenize_string()
            elif _is_identifier_start(current_char):
                self._tokenize_identifier_or_keyword()
            else:
                self._tokenize_operator()

        logger.debug("%s: produced %d tokens", self.filename, len(self.tokens))
        return self.tokens

    def _tokenize_number(self):
        """Integer literal: a maximal run of decimal digits."""
        start_column = self.column
        start_pos = self.pos

        while not self._is_at_end() and _is_digit(self._peek()):
            self._advance()

        lexeme = self.source[start_pos:self.pos]
        try:
            value = int(lexeme)
        except ValueError:
            # int() refuses digit runs past sys.get_int_max_str_digits()
            value = float(lexeme)
        self._add_token(TokenType.NUMBER, lexeme, value, start_column)

    def _tokenize_string(self):
        """String literal, taken verbatim up to the closing quote."""
        start_line = self.line
        start_column = self.column
        start_pos = self.pos

        self._advance()  # Skip opening quote

        while not self._is_at_end() and self._peek() != '"':
            self._advance()

        if self._is_at_end():
            line_content = self._line_content(start_line)
            raise create_unterminated_string_error(
                self._make_span(start_line, start_column, max(start_column + 1, len(line_content)))
            )

        self._advance()  # Skip closing quote

        lexeme = self.source[start_pos:self.pos]
        if self.line == start_line:
            end_column = self.column
        else:
            # Spans stay on one line: underline to the end of the opening line.
            end_column = len(self._line_content(start_line))

        self.tokens.append(Token(
            TokenType.STRING,
            lexeme,
            lexeme[1:-1],
            self._make_span(start_line, start_column, end_column),
        ))

    def _tokenize_identifier_or_keyword(self):
        start_column = self.column
        start_pos = self.pos

        while not self._is_at_end() and _is_identifier_continue(self._peek()):
            self._advance()

        lexeme = self.source[start_pos:self.pos]
        token_type = self.keywords.get(lexeme, TokenType.IDENTIFIER)

        if token_type == TokenType.IDENTIFIER:
            value = lexeme
        elif token_type in (TokenType.TRUE, TokenType.FALSE):
            value = token_type == TokenType.TRUE
        else:
            value = None

        self._add_token(token_type, lexeme, value, start_column)

    def _tokenize_operator(self):
        """Operators and punctuation, two-character compounds first."""
        start_column = self.column
        current_char = self._peek()

        pair = current_char + self._peek_next()
        if len(pair) == 2 and pair in OPERATORS:
            self._advance()
            self._advance()
            self._add_token(OPERATORS[pair], pair, None, start_column)
            return

        if current_char in OPERATORS:
            self._advance()
            self._add_token(OPERATORS[current_char], current_char, None, start_column)
            return

        raise create_unknown_character_error(
            current_char,
            self._make_span(self.line, start_column, start_column + 1)
        )

    def _add_token(self, token_type: TokenType, lexeme: str, value, start_column: int):
        self.tokens.append(Token(
            token_type,
            lexeme,
            value,
            self._make_span(self.line, start_column, self.column),
        ))

    def _make_span(self, line: int, start_column: int, end_column: int) -> SourceSpan:
        return SourceSpan(
            line=line,
            start_column=start_column,
            end_column=end_column,
            filename=self.filename,
            line_content=self._line_content(line),
        )

    def _line_content(self, line: int) -> str:
        if 1 <= line <= len(self.lines):
            return self.lines[line - 1]
        return ""

    def _advance(self) -> str:
        """Consume one character, updating line/column."""
        char = self.source[self.pos]
        self.pos += 1
        if char == '\n':
            self.line += 1
            self.column = 0
        else:
            self.column += 1
        return char

    def _peek(self) -> str:
        if self.pos < len(self.source):
            return self.source[self.pos]
        return '\0'

    def _peek_next(self) -> str:
        if self.pos + 1 < len(self.source):
            return self.source[self.pos + 1]
        return ''

    def _is_at_end(self) -> bool:
        return self.pos >= len(self.source)


def _is_digit(char: str) -> bool:
    return '0' <= char <= '9'


def _is_identifier_start(char: str) -> bool:
    return char.isascii() and (char.isalpha() or char == '_')


def _is_identifier_continue(char: str) -> bool:
    return char.isascii() and (char.isalnum() or char == '_')


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Raises:
        LexerError: If lexing fails
    """
    return Lexer(source, filename).tokenize()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    The file's base name is used as the diagnostic label.

    Raises:
        LexerError: If lexing fails
        OSError: If the file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize_string(source, os.path.basename(filepath))
