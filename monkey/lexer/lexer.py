"""
Monkey Lexer - turns source text into tokens, one at a time, on demand.

The scanner keeps a cursor (current position, next-read position, current
character) and looks at most one character ahead, which is all `==` and `!=`
need. Bad characters never stop it: they come out as ILLEGAL tokens and the
parser decides what to do with them.
"""

import logging
from typing import Callable, Iterator, List, Optional

from .tokens import (
    Token, TokenType, SourceLocation, SINGLE_CHAR_TOKENS, lookup_identifier
)
from .errors import Diagnostic, LexerError, create_invalid_character_diagnostic

logger = logging.getLogger(__name__)

WHITESPACE = frozenset(" \t\n\r")


def is_letter(char: str) -> bool:
    """ASCII letters and underscore start and continue identifiers."""
    return "a" <= char <= "z" or "A" <= char <= "Z" or char == "_"


def is_digit(char: str) -> bool:
    return "0" <= char <= "9"


class Lexer:
    """
    Monkey lexical analyzer.

    Produces tokens lazily through `next_token()`. Once the input is exhausted
    every further call returns an EOF token.
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file for diagnostics
        """
        self.source = source
        self.filename = filename
        self.position = 0           # index of `ch`
        self.read_position = 0      # index of the next character to read
        self.ch: Optional[str] = None
        self.line = 1
        self.column = 0
        self.diagnostics: List[Diagnostic] = []

        self._read_char()

    def next_token(self) -> Token:
        """Scan and return the next token."""
        self._skip_whitespace()
        location = self._location()

        if self.ch is None:
            return Token(TokenType.EOF, "", location)

        token_type = SINGLE_CHAR_TOKENS.get(self.ch)
        if token_type is not None:
            token = Token(token_type, self.ch, location)
            self._read_char()
            return token

        if self.ch == "=":
            return self._read_operator(TokenType.ASSIGN, TokenType.EQUAL, location)
        if self.ch == "!":
            return self._read_operator(TokenType.BANG, TokenType.NOT_EQUAL, location)

        if is_letter(self.ch):
            literal = self._read_while(is_letter)
            return Token(lookup_identifier(literal), literal, location)

        if is_digit(self.ch):
            return Token(TokenType.INTEGER, self._read_while(is_digit), location)

        return self._read_illegal(location)

    def tokenize(self) -> List[Token]:
        """
        Tokenize the remaining input.

        Returns:
            List of tokens ending with exactly one EOF token
        """
        return list(self)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def _read_operator(self, single: TokenType, double: TokenType,
                       location: SourceLocation) -> Token:
        """Scan `=`/`==` or `!`/`!=` using one character of lookahead."""
        first = self.ch
        if self._peek_char() == "=":
            self._read_char()
            self._read_char()
            return Token(double, first + "=", location)

        self._read_char()
        return Token(single, first, location)

    def _read_illegal(self, location: SourceLocation) -> Token:
        char = self.ch
        diagnostic = create_invalid_character_diagnostic(char, location)
        self.diagnostics.append(diagnostic)
        logger.debug("illegal character %r at %s", char, location)

        self._read_char()
        return Token(TokenType.ILLEGAL, char, location)

    def _read_while(self, predicate: Callable[[str], bool]) -> str:
        start = self.position
        while self.ch is not None and predicate(self.ch):
            self._read_char()
        return self.source[start:self.position]

    def _skip_whitespace(self):
        while self.ch is not None and self.ch in WHITESPACE:
            self._read_char()

    def _read_char(self):
        """Advance the cursor by one character, updating line/column."""
        if self.ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        if self.read_position >= len(self.source):
            self.ch = None
        else:
            self.ch = self.source[self.read_position]

        self.position = self.read_position
        self.read_position += 1

    def _peek_char(self) -> Optional[str]:
        """Look at the next character without consuming it."""
        if self.read_position >= len(self.source):
            return None
        return self.source[self.read_position]

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.position)

    def has_errors(self) -> bool:
        """Check if the lexer met any illegal characters so far."""
        return len(self.diagnostics) > 0


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for diagnostics

    Returns:
        List of tokens

    Raises:
        LexerError: If the source contains an illegal character
    """
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()

    if lexer.has_errors():
        # Raise the first error encountered
        raise LexerError(lexer.diagnostics[0])

    return tokens
