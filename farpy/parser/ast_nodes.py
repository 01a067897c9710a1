"""
Abstract Syntax Tree node definitions for Farpy.

The node set is closed: every node has an ASTNodeType tag and carries only
its own fields plus the SourceSpan it came from. Children are owned by
exactly one parent and there are no parent back-references.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from ..lexer.tokens import SourceSpan


class ASTNodeType(Enum):
    """Enumeration of all AST node types (values are the structured-view tags)."""

    NUMBER = "number"
    STRING = "string"
    IDENTIFIER = "identifier"
    BINARY_OP = "binaryOp"
    VAR_DECLARATION = "varDeclaration"


@dataclass
class ASTNode:
    """Base class for all AST nodes."""
    span: SourceSpan

    node_type = None  # type: ASTNodeType

    def children(self) -> List['ASTNode']:
        """Get all child nodes."""
        return []

    def to_structured_view(self) -> Dict[str, Any]:
        return to_structured_view(self)

    def __str__(self) -> str:
        return f"{self.node_type.value}@{self.span}"


# ============================================================================
# Literals
# ============================================================================

@dataclass
class NumberLiteral(ASTNode):
    value: float

    node_type = ASTNodeType.NUMBER


@dataclass
class StringLiteral(ASTNode):
    value: str

    node_type = ASTNodeType.STRING


@dataclass
class Identifier(ASTNode):
    name: str

    node_type = ASTNodeType.IDENTIFIER


# ============================================================================
# Expressions and declarations
# ============================================================================

@dataclass
class BinaryOp(ASTNode):
    """Binary operation; ``operator`` is the operator's source text."""
    operator: str
    left: Optional[ASTNode]
    right: Optional[ASTNode]

    node_type = ASTNodeType.BINARY_OP

    def children(self) -> List[ASTNode]:
        return [child for child in (self.left, self.right) if child is not None]


@dataclass
class VarDeclaration(ASTNode):
    """
    Variable declaration: ``new [mut] name: type = initializer``.

    ``type_name`` is recorded as written; nothing checks it yet.
    """
    name: str
    mutable: bool
    initializer: Optional[ASTNode]
    type_name: Optional[str] = None

    node_type = ASTNodeType.VAR_DECLARATION

    def children(self) -> List[ASTNode]:
        return [self.initializer] if self.initializer is not None else []


# ============================================================================
# Structured view
# ============================================================================

def _loc(span: SourceSpan) -> Dict[str, int]:
    return {
        "line": span.line,
        "start_column": span.start_column,
        "end_column": span.end_column,
    }


def _child_view(node: Optional[ASTNode]) -> Optional[Dict[str, Any]]:
    return to_structured_view(node) if node is not None else None


def to_structured_view(node: ASTNode) -> Dict[str, Any]:
    """
    Convert a node (recursively) into plain dicts/lists/scalars.

    Every view has ``kind`` and ``loc``; missing children become None.
    """
    node_type = getattr(node, "node_type", None)
    if not isinstance(node_type, ASTNodeType):
        raise TypeError(f"Cannot build a structured view of {type(node).__name__}")

    view: Dict[str, Any] = {"kind": node_type.value}

    if node_type == ASTNodeType.NUMBER:
        view["value"] = node.value
    elif node_type == ASTNodeType.STRING:
        view["value"] = node.value
    elif node_type == ASTNodeType.IDENTIFIER:
        view["value"] = node.name
    elif node_type == ASTNodeType.BINARY_OP:
        view["operator"] = node.operator
        view["left"] = _child_view(node.left)
        view["right"] = _child_view(node.right)
    elif node_type == ASTNodeType.VAR_DECLARATION:
        view["identifier"] = node.name
        view["mutable"] = node.mutable
        view["type"] = node.type_name
        view["value"] = _child_view(node.initializer)
    else:
        raise TypeError(f"No structured view for node type {node_type!r}")

    view["loc"] = _loc(node.span)
    return view


def dump_json(nodes: Sequence[ASTNode], indent: Optional[int] = 2) -> str:
    """Serialize a list of top-level statements as JSON."""
    return json.dumps([to_structured_view(node) for node in nodes], indent=indent)
