"""
Monkey Language Front-End

A from-scratch lexer and Pratt parser for the Monkey expression-and-statement
language. Source text goes in, an immutable abstract syntax tree plus a list
of diagnostics comes out.

Architecture:
    monkey/
    ├── lexer/           # Tokenization and lexical analysis
    └── parser/          # Pratt parsing and AST generation

Author: marcel
License: MIT
"""

__version__ = "0.1.0"
__author__ = "marcel"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType
from .parser import Parser, Program, parse_string

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "Token",
    "TokenType",
    "Program",
    "parse_string",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
