"""
Test suite for the Farpy Pratt parser.

Tests cover:
- Operator precedence across the whole binding-power table
- Left and right associativity
- Variable declarations and their required tokens
- Fatal syntax errors and preservation of already-parsed statements
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from farpy.lexer.lexer import Lexer
from farpy.lexer.tokens import Token, TokenType, SourceSpan
from farpy.lexer.errors import LexerError
from farpy.parser.parser import Parser, Precedence, parse_string, parse_file
from farpy.parser.ast_nodes import (
    NumberLiteral, StringLiteral, Identifier, BinaryOp, VarDeclaration
)
from farpy.parser.errors import ParseError


def shape(node):
    """Compact nested-tuple form of a tree, ignoring spans."""
    if isinstance(node, NumberLiteral):
        return node.value
    if isinstance(node, StringLiteral):
        return ("str", node.value)
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, BinaryOp):
        return (node.operator, shape(node.left), shape(node.right))
    if isinstance(node, VarDeclaration):
        return ("decl", node.name, node.mutable, node.type_name, shape(node.initializer))
    raise AssertionError(f"unexpected node {node!r}")


class TestParser(unittest.TestCase):
    """Test cases for the parser."""

    def _parse(self, code: str):
        tokens = Lexer(code, "test.fp").tokenize()
        parser = Parser(tokens)
        statements = parser.parse()
        self.assertFalse(parser.has_errors(), f"Unexpected errors: {parser.errors}")
        return statements

    def _parse_one(self, code: str):
        statements = self._parse(code)
        self.assertEqual(len(statements), 1)
        return statements[0]

    def test_literals(self):
        self.assertEqual(shape(self._parse_one("42")), 42.0)
        self.assertEqual(shape(self._parse_one('"hi"')), ("str", "hi"))
        self.assertEqual(shape(self._parse_one("name")), "name")

    def test_number_value_is_float(self):
        node = self._parse_one("7")
        self.assertIsInstance(node.value, float)
        self.assertEqual(node.value, 7.0)

    def test_precedence_of_assignment_sum_and_product(self):
        """'*' binds tighter than '+', which binds tighter than '='."""
        node = self._parse_one("x = 1 + 2 * 3")
        self.assertEqual(shape(node), ("=", "x", ("+", 1.0, ("*", 2.0, 3.0))))

        self.assertIsInstance(node, BinaryOp)
        self.assertIsInstance(node.left, Identifier)
        self.assertIsInstance(node.right.right, BinaryOp)

    def test_assignment_is_right_associative(self):
        node = self._parse_one("a = b = 1")
        self.assertEqual(shape(node), ("=", "a", ("=", "b", 1.0)))

    def test_compound_assignment_is_right_associative(self):
        node = self._parse_one("a += b -= c *= 2")
        self.assertEqual(shape(node), ("+=", "a", ("-=", "b", ("*=", "c", 2.0))))

    def test_power_is_right_associative(self):
        node = self._parse_one("2 ** 3 ** 2")
        self.assertEqual(shape(node), ("**", 2.0, ("**", 3.0, 2.0)))

    def test_power_binds_tighter_than_product(self):
        node = self._parse_one("2 * 3 ** 2")
        self.assertEqual(shape(node), ("*", 2.0, ("**", 3.0, 2.0)))

    def test_left_associativity(self):
        self.assertEqual(shape(self._parse_one("1 - 2 - 3")), ("-", ("-", 1.0, 2.0), 3.0))
        self.assertEqual(shape(self._parse_one("8 / 4 / 2")), ("/", ("/", 8.0, 4.0), 2.0))
        self.assertEqual(shape(self._parse_one("a || b || c")), ("||", ("||", "a", "b"), "c"))

    def test_logical_and_comparison_levels(self):
        node = self._parse_one("a || b && c == d < e")
        self.assertEqual(
            shape(node),
            ("||", "a", ("&&", "b", ("==", "c", ("<", "d", "e")))),
        )

    def test_bitwise_between_comparison_and_term(self):
        node = self._parse_one("a < b & c + d")
        self.assertEqual(shape(node), ("<", "a", ("&", "b", ("+", "c", "d"))))

    def test_every_operator_uses_its_lexeme(self):
        operators = ["=", "+=", "-=", "*=", "/=", "%=", "||", "&&", "==", "!=",
                     "<", "<=", ">", ">=", "&", "|", "^", "+", "-", "*", "/", "%", "**"]
        for operator in operators:
            with self.subTest(operator=operator):
                node = self._parse_one(f"a {operator} b")
                self.assertEqual(shape(node), (operator, "a", "b"))

    def test_binary_op_span_is_operator_token(self):
        node = self._parse_one("x = 1 + 2")
        self.assertEqual((node.span.start_column, node.span.end_column), (2, 3))
        self.assertEqual((node.right.span.start_column, node.right.span.end_column), (6, 7))

    def test_multiple_top_level_expressions(self):
        statements = self._parse("a = 1\nb = a + 2\n\"done\"")
        self.assertEqual(
            [shape(s) for s in statements],
            [("=", "a", 1.0), ("=", "b", ("+", "a", 2.0)), ("str", "done")],
        )
        self.assertEqual([s.span.line for s in statements], [1, 2, 3])

    def test_empty_input(self):
        self.assertEqual(self._parse(""), [])
        self.assertEqual(self._parse("   \n  "), [])

    def test_explicit_eof_token_ends_stream(self):
        tokens = Lexer("1 + 2").tokenize()
        eof = Token(TokenType.EOF, "", None, SourceSpan(1, 5, 5))
        ignored = Token(TokenType.NUMBER, "9", 9, SourceSpan(2, 0, 1))
        parser = Parser(tokens + [eof, ignored])
        statements = parser.parse()
        self.assertEqual([shape(s) for s in statements], [("+", 1.0, 2.0)])
        self.assertEqual(parser.errors, [])

    # Declarations

    def test_immutable_declaration(self):
        node = self._parse_one("new count: int = 1")
        self.assertIsInstance(node, VarDeclaration)
        self.assertEqual(node.name, "count")
        self.assertFalse(node.mutable)
        self.assertEqual(node.type_name, "int")
        self.assertEqual(shape(node.initializer), 1.0)
        self.assertEqual((node.span.start_column, node.span.end_column), (0, 3))

    def test_mutable_declaration(self):
        node = self._parse_one("new mut total: float = 1 + 2 * x")
        self.assertEqual(
            shape(node),
            ("decl", "total", True, "float", ("+", 1.0, ("*", 2.0, "x"))),
        )

    def test_declaration_followed_by_expression(self):
        statements = self._parse("new a: int = 1\na = a + 1")
        self.assertEqual(len(statements), 2)
        self.assertIsInstance(statements[0], VarDeclaration)
        self.assertEqual(shape(statements[1]), ("=", "a", ("+", "a", 1.0)))

    def test_declaration_with_custom_keyword(self):
        from farpy.lexer.tokens import CORE_KEYWORDS

        keywords = dict(CORE_KEYWORDS, let=TokenType.NEW, var=TokenType.MUT)
        tokens = Lexer("let var x: int = 5", keywords=keywords).tokenize()
        statements = Parser(tokens).parse()
        self.assertEqual(shape(statements[0]), ("decl", "x", True, "int", 5.0))

    def _assert_parse_error(self, code: str) -> ParseError:
        parser = Parser(Lexer(code, "test.fp").tokenize())
        statements = parser.parse()
        self.assertEqual(statements, [])
        self.assertEqual(len(parser.errors), 1)
        return parser.errors[0]

    def test_declaration_missing_colon(self):
        """Omitting ':' names ':' as the expected token and shows what was found."""
        error = self._assert_parse_error("new x int = 1")
        self.assertEqual(error.code, "P002")
        self.assertIn("':'", error.message)
        self.assertIn("'int'", error.message)
        self.assertEqual((error.span.start_column, error.span.end_column), (6, 9))

    def test_declaration_missing_name(self):
        error = self._assert_parse_error("new : int = 1")
        self.assertIn("identifier", error.message)
        self.assertIn("':'", error.message)

    def test_declaration_missing_type(self):
        error = self._assert_parse_error("new x: = 1")
        self.assertIn("identifier", error.message)
        self.assertIn("'='", error.message)

    def test_declaration_missing_assign(self):
        error = self._assert_parse_error("new x: int 1")
        self.assertIn("'='", error.message)
        self.assertIn("'1'", error.message)

    def test_declaration_truncated(self):
        error = self._assert_parse_error("new x:")
        self.assertIn("end of input", error.message)
        self.assertEqual(error.span.start_column, 6)

    def test_declaration_missing_initializer(self):
        error = self._assert_parse_error("new x: int =")
        self.assertEqual(error.code, "P004")

    # Errors

    def test_invalid_token_at_expression_start(self):
        for code in ["+ 1", ") a", "true", "if", "mut x"]:
            with self.subTest(code=code):
                error = self._assert_parse_error(code)
                self.assertEqual(error.code, "P001")
                self.assertEqual(error.span.start_column, 0)

    def test_missing_right_operand(self):
        error = self._assert_parse_error("1 +")
        self.assertEqual(error.code, "P004")
        self.assertEqual((error.span.start_column, error.span.end_column), (3, 3))

    def test_invalid_infix_token(self):
        """A token with a precedence but no infix rule is an infix-position error."""
        parser = Parser(Lexer("a ^ b").tokenize())
        del parser.infix_parsers[TokenType.CARET]
        statements = parser.parse()
        self.assertEqual(statements, [])
        self.assertEqual(parser.errors[0].code, "P003")
        self.assertEqual(parser.errors[0].token.lexeme, "^")

    def test_error_keeps_earlier_statements(self):
        """Statements parsed before a syntax error survive; nothing after it is parsed."""
        parser = Parser(Lexer("a = 1\nb = 2\n; c = 3\nd = 4").tokenize())
        statements = parser.parse()
        self.assertEqual([shape(s) for s in statements], [("=", "a", 1.0), ("=", "b", 2.0)])
        self.assertEqual(len(parser.errors), 1)
        self.assertEqual(parser.errors[0].span.line, 3)
        self.assertTrue(parser.has_errors())

    def test_deep_nesting_is_a_recorded_error(self):
        """A chain too deep for the interpreter stack stops parsing but keeps earlier statements."""
        chain = " = ".join(f"a{i}" for i in range(600)) + " = 1"
        parser = Parser(Lexer("first = 1\n" + chain, "deep.fp").tokenize())
        statements = parser.parse()

        self.assertEqual([shape(s) for s in statements], [("=", "first", 1.0)])
        self.assertTrue(parser.has_errors())
        self.assertEqual(parser.errors[0].code, "P005")
        self.assertIsInstance(parser.errors[0], ParseError)

    def test_very_long_literal_parses_to_infinity(self):
        node = self._parse_one("9" * 5000)
        self.assertEqual(node.value, float("inf"))

    def test_parse_error_renders_diagnostic(self):
        error = self._assert_parse_error("new x int = 1")
        text = str(error)
        self.assertTrue(text.startswith("parser error: "))
        self.assertIn("---> test.fp:1:6", text)
        self.assertIn("new x int = 1", text)
        self.assertIn("^^^", text)

    def test_precedence_values(self):
        self.assertEqual(int(Precedence.ASSIGNMENT), 1)
        self.assertEqual(int(Precedence.EQUALITY), 7)
        self.assertEqual(int(Precedence.FACTOR), 20)
        self.assertEqual(int(Precedence.POWER), 30)

    # Convenience functions

    def test_parse_string(self):
        statements = parse_string("a = 2 ** 3")
        self.assertEqual(shape(statements[0]), ("=", "a", ("**", 2.0, 3.0)))

    def test_parse_string_raises_first_error(self):
        with self.assertRaises(ParseError):
            parse_string("a = ")
        with self.assertRaises(LexerError):
            parse_string("a = #")

    def test_parse_file(self):
        import tempfile

        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "decl.fp")
            with open(path, "w", encoding="utf-8") as f:
                f.write('new greeting: string = "hi"\n')

            statements = parse_file(path)

        self.assertEqual(shape(statements[0]), ("decl", "greeting", False, "string", ("str", "hi")))
        self.assertEqual(statements[0].span.filename, "decl.fp")


if __name__ == '__main__':
    unittest.main()
