"""
Monkey Lexer Package

Implements the lexical analyzer (tokenizer) for the Monkey language.

Key Features:
- On-demand scanning with a single character of lookahead
- Keyword classification for fn, let, true, false, if, else, return
- ILLEGAL tokens instead of exceptions for unknown characters
- Source location tracking for diagnostics

Author: marcel
"""

from .tokens import Token, TokenType, SourceLocation, KEYWORDS, lookup_identifier
from .lexer import Lexer, tokenize_string
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "KEYWORDS",
    "lookup_identifier",
    "tokenize_string",
    "Diagnostic",
    "LexerError",
]
