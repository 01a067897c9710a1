"""
Farpy Parser Package

Implements a Pratt (precedence-climbing) parser for the Farpy language.
Produces AST nodes that carry their source spans and convert to a plain
structured view for printing or tooling.
"""

from .ast_nodes import (
    ASTNode, ASTNodeType, NumberLiteral, StringLiteral, Identifier,
    BinaryOp, VarDeclaration, to_structured_view, dump_json
)
from .parser import Parser, Precedence, parse_string, parse_file
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser",
    "Precedence",
    "parse_string",
    "parse_file",

    # AST nodes
    "ASTNode", "ASTNodeType",
    "NumberLiteral", "StringLiteral", "Identifier",
    "BinaryOp", "VarDeclaration",
    "to_structured_view", "dump_json",

    # Error handling
    "ParseError",
]
