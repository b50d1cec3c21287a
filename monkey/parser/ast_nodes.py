"""
Abstract Syntax Tree node definitions for Monkey.

Every node is a frozen dataclass: the parser builds each node once and nothing
mutates it afterwards. Each node keeps the token that introduced it, so
`token_literal()` can report it, and renders itself back to source-like text
through `to_source_text()` (also `str(node)`). Infix and prefix expressions
render fully parenthesized, which makes precedence visible: `a + b * c`
renders as `(a + (b * c))`.

The concrete node set is closed. `AnyStatement` and `AnyExpression` are the
unions over it, so consumers can `match` on node classes exhaustively.

Author: marcel
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Iterator, List, Optional, Tuple, Union
from dataclasses import dataclass
from enum import Enum

from ..lexer.tokens import Token


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Top-level
    PROGRAM = "Program"

    # Statements
    LET_STATEMENT = "LetStatement"
    RETURN_STATEMENT = "ReturnStatement"
    EXPRESSION_STATEMENT = "ExpressionStatement"
    BLOCK_STATEMENT = "BlockStatement"

    # Literals
    IDENTIFIER = "Identifier"
    INTEGER_LITERAL = "IntegerLiteral"
    BOOLEAN = "Boolean"
    FUNCTION_LITERAL = "FunctionLiteral"

    # Expressions
    PREFIX_EXPRESSION = "PrefixExpression"
    INFIX_EXPRESSION = "InfixExpression"
    IF_EXPRESSION = "IfExpression"
    CALL_EXPRESSION = "CallExpression"


class ASTVisitor(ABC):
    """Abstract visitor interface for traversing AST nodes."""

    @abstractmethod
    def visit(self, node: 'ASTNode') -> Any:
        """Visit a generic AST node."""
        pass


class ASTNode(ABC):
    """Base class for all AST nodes."""

    node_type: ClassVar[ASTNodeType]

    def token_literal(self) -> str:
        """Literal of the token that introduced this node."""
        return self.token.literal

    @abstractmethod
    def to_source_text(self) -> str:
        """Render the node back as deterministic source-like text."""
        pass

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes, in source order."""
        pass

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    def __str__(self) -> str:
        return self.to_source_text()


class Statement(ASTNode):
    """Base class for statements."""
    pass


class Expression(ASTNode):
    """Base class for expressions."""
    pass


# ============================================================================
# Top-level node
# ============================================================================

@dataclass(frozen=True)
class Program(ASTNode):
    """Root AST node: the ordered top-level statements of a parse."""
    statements: Tuple[Statement, ...] = ()

    node_type: ClassVar[ASTNodeType] = ASTNodeType.PROGRAM

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def to_source_text(self) -> str:
        return "".join(stmt.to_source_text() for stmt in self.statements)

    def children(self) -> List[ASTNode]:
        return list(self.statements)


# ============================================================================
# Statements
# ============================================================================

@dataclass(frozen=True)
class LetStatement(Statement):
    """`let <name> = <value>;`"""
    token: Token
    name: 'Identifier'
    value: Expression

    node_type: ClassVar[ASTNodeType] = ASTNodeType.LET_STATEMENT

    def to_source_text(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value};"

    def children(self) -> List[ASTNode]:
        return [self.name, self.value]


@dataclass(frozen=True)
class ReturnStatement(Statement):
    """`return <value>;`"""
    token: Token
    value: Expression

    node_type: ClassVar[ASTNodeType] = ASTNodeType.RETURN_STATEMENT

    def to_source_text(self) -> str:
        return f"{self.token_literal()} {self.value};"

    def children(self) -> List[ASTNode]:
        return [self.value]


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    """An expression used as a statement. `token` is the expression's first token."""
    token: Token
    value: Expression

    node_type: ClassVar[ASTNodeType] = ASTNodeType.EXPRESSION_STATEMENT

    def to_source_text(self) -> str:
        return self.value.to_source_text()

    def children(self) -> List[ASTNode]:
        return [self.value]


@dataclass(frozen=True)
class BlockStatement(Statement):
    """Brace-delimited statement sequence; `token` is the opening `{`."""
    token: Token
    statements: Tuple[Statement, ...] = ()

    node_type: ClassVar[ASTNodeType] = ASTNodeType.BLOCK_STATEMENT

    def to_source_text(self) -> str:
        return "".join(stmt.to_source_text() for stmt in self.statements)

    def children(self) -> List[ASTNode]:
        return list(self.statements)


# ============================================================================
# Literals
# ============================================================================

@dataclass(frozen=True)
class Identifier(Expression):
    token: Token
    value: str

    node_type: ClassVar[ASTNodeType] = ASTNodeType.IDENTIFIER

    def to_source_text(self) -> str:
        return self.value

    def children(self) -> List[ASTNode]:
        return []


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    """Integer literal; `value` always fits a signed 64-bit integer."""
    token: Token
    value: int

    node_type: ClassVar[ASTNodeType] = ASTNodeType.INTEGER_LITERAL

    def to_source_text(self) -> str:
        return self.token.literal

    def children(self) -> List[ASTNode]:
        return []


@dataclass(frozen=True)
class Boolean(Expression):
    token: Token
    value: bool

    node_type: ClassVar[ASTNodeType] = ASTNodeType.BOOLEAN

    def to_source_text(self) -> str:
        return self.token.literal

    def children(self) -> List[ASTNode]:
        return []


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    """`fn(<parameters>) { <body> }`"""
    token: Token
    parameters: Tuple[Identifier, ...]
    body: BlockStatement

    node_type: ClassVar[ASTNodeType] = ASTNodeType.FUNCTION_LITERAL

    def to_source_text(self) -> str:
        params = ", ".join(param.to_source_text() for param in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"

    def children(self) -> List[ASTNode]:
        return [*self.parameters, self.body]


# ============================================================================
# Expressions
# ============================================================================

@dataclass(frozen=True)
class PrefixExpression(Expression):
    token: Token
    operator: str
    right: Expression

    node_type: ClassVar[ASTNodeType] = ASTNodeType.PREFIX_EXPRESSION

    def to_source_text(self) -> str:
        return f"({self.operator}{self.right})"

    def children(self) -> List[ASTNode]:
        return [self.right]


@dataclass(frozen=True)
class InfixExpression(Expression):
    token: Token
    left: Expression
    operator: str
    right: Expression

    node_type: ClassVar[ASTNodeType] = ASTNodeType.INFIX_EXPRESSION

    def to_source_text(self) -> str:
        return f"({self.left} {self.operator} {self.right})"

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]


@dataclass(frozen=True)
class IfExpression(Expression):
    """`if (<condition>) { ... } else { ... }`; the else branch is optional."""
    token: Token
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    node_type: ClassVar[ASTNodeType] = ASTNodeType.IF_EXPRESSION

    def to_source_text(self) -> str:
        result = f"if{self.condition} {self.consequence}"
        if self.alternative is not None:
            result += f"else {self.alternative}"
        return result

    def children(self) -> List[ASTNode]:
        children: List[ASTNode] = [self.condition, self.consequence]
        if self.alternative is not None:
            children.append(self.alternative)
        return children


@dataclass(frozen=True)
class CallExpression(Expression):
    """`<callee>(<arguments>)`; `token` is the `(`."""
    token: Token
    callee: Expression
    arguments: Tuple[Expression, ...] = ()

    node_type: ClassVar[ASTNodeType] = ASTNodeType.CALL_EXPRESSION

    def to_source_text(self) -> str:
        args = ", ".join(arg.to_source_text() for arg in self.arguments)
        return f"{self.callee}({args})"

    def children(self) -> List[ASTNode]:
        return [self.callee, *self.arguments]


# Closed unions over the concrete node shapes
AnyStatement = Union[LetStatement, ReturnStatement, ExpressionStatement, BlockStatement]
AnyExpression = Union[
    Identifier, IntegerLiteral, Boolean, FunctionLiteral,
    PrefixExpression, InfixExpression, IfExpression, CallExpression,
]


# ============================================================================
# Traversal
# ============================================================================

class NodeVisitor(ASTVisitor):
    """
    Visitor that dispatches on the concrete node class.

    `visit(node)` calls `visit_<ClassName>(node)` when the subclass defines
    it and `generic_visit(node)` otherwise. `generic_visit` visits every child.
    """

    def visit(self, node: ASTNode) -> Any:
        method = getattr(self, f"visit_{type(node).__name__}", self.generic_visit)
        return method(node)

    def generic_visit(self, node: ASTNode) -> Any:
        for child in node.children():
            child.accept(self)
        return None


def walk(node: ASTNode) -> Iterator[ASTNode]:
    """Yield `node` and all of its descendants, pre-order."""
    yield node
    for child in node.children():
        yield from walk(child)
