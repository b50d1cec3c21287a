"""
Token definitions for the Monkey lexer.

This module defines every token type the language knows about:
- Special tokens (illegal input, end of input)
- Identifiers and integer literals
- Operators and delimiters
- Keywords

plus the lookup tables the lexer uses to classify characters and words.

Author: marcel
"""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Dict, Optional


class TokenType(Enum):
    """
    Enumeration of all token types in Monkey.

    The set is closed: the parser's dispatch tables are checked against it.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    ILLEGAL = auto()                # Unrecognized character
    EOF = auto()                    # End of input

    # ========================================================================
    # Identifiers and Literals
    # ========================================================================
    IDENTIFIER = auto()             # add, foo_bar, x
    INTEGER = auto()                # 5, 1234

    # ========================================================================
    # Operators
    # ========================================================================
    ASSIGN = auto()                 # =
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    BANG = auto()                   # !
    MULTIPLY = auto()               # *
    DIVIDE = auto()                 # /

    LESS_THAN = auto()              # <
    GREATER_THAN = auto()           # >
    EQUAL = auto()                  # ==
    NOT_EQUAL = auto()              # !=

    # ========================================================================
    # Delimiters
    # ========================================================================
    COMMA = auto()                  # ,
    SEMICOLON = auto()              # ;

    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }

    # ========================================================================
    # Keywords
    # ========================================================================
    FN = auto()                     # fn
    LET = auto()                    # let
    TRUE = auto()                   # true
    FALSE = auto()                  # false
    IF = auto()                     # if
    ELSE = auto()                   # else
    RETURN = auto()                 # return

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for diagnostics only; it never takes part in token equality.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the Monkey language.

    `literal` is the exact source text of the token. Integer tokens keep their
    decimal text; conversion to a number is the parser's job.
    """
    type: TokenType
    literal: str
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"{self.type.name}({self.literal!r})"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.literal!r})"


# Lookup tables for token recognition

# Characters that always form a token on their own
SINGLE_CHAR_TOKENS: Dict[str, TokenType] = {
    "+": TokenType.PLUS,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "<": TokenType.LESS_THAN,
    ">": TokenType.GREATER_THAN,
}

# Reserved words
KEYWORDS: Dict[str, TokenType] = {
    "fn": TokenType.FN,
    "let": TokenType.LET,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,
}


def lookup_identifier(word: str) -> TokenType:
    """Classify a scanned word as a keyword or a plain identifier."""
    return KEYWORDS.get(word, TokenType.IDENTIFIER)
