"""
Monkey Parser Package

Implements a Pratt-based recursive descent parser for the Monkey language.
Produces immutable Abstract Syntax Trees plus a list of diagnostics.

Key Features:
- Top-down operator precedence (Pratt parsing)
- Prefix/infix parse function tables keyed by token type
- Error collection and statement-level recovery instead of exceptions
- Deterministic source rendering of every node

Author: marcel
"""

from .ast_nodes import *
from .parser import Parser, Precedence, parse_string, parse_file
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser",
    "Precedence",
    "parse_string",
    "parse_file",

    # AST nodes
    "ASTNode", "ASTNodeType", "ASTVisitor", "NodeVisitor", "walk",
    "Program", "Statement", "Expression", "AnyStatement", "AnyExpression",
    "LetStatement", "ReturnStatement", "ExpressionStatement", "BlockStatement",
    "Identifier", "IntegerLiteral", "Boolean", "FunctionLiteral",
    "PrefixExpression", "InfixExpression", "IfExpression", "CallExpression",

    # Error handling
    "ParseError",
]
