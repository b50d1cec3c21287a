"""
Error handling for the Monkey parser.

The parser records diagnostics instead of raising: every helper here builds a
`Diagnostic` that the parser appends to its list and keeps going. `ParseError`
exists for callers that want a hard failure (see `parse_string`).

Author: marcel
"""

from typing import List, Optional

from ..lexer.tokens import Token, TokenType
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception wrapping the first diagnostic of a failed parse.

    `Parser.parse_program()` never raises it; only the strict convenience
    helpers do.
    """

    def __init__(self, diagnostic: Diagnostic, diagnostics: Optional[List[Diagnostic]] = None):
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic
        self.diagnostics = diagnostics if diagnostics is not None else [diagnostic]

    def __str__(self) -> str:
        return str(self.diagnostic)


class SyntaxErrorRecovery:
    """
    Helpers for reporting and recovering from syntax errors.
    """

    # Token types that close a statement at the current nesting level
    STATEMENT_BOUNDARIES = {
        TokenType.SEMICOLON,
        TokenType.RIGHT_BRACE,
        TokenType.EOF,
    }

    @staticmethod
    def suggest_missing_token(expected: TokenType) -> List[str]:
        """Suggest what token might be missing."""
        token_suggestions = {
            TokenType.IDENTIFIER: ["Add a name after 'let'", "Parameter lists only hold names"],
            TokenType.ASSIGN: ["Add an assignment operator '='"],
            TokenType.LEFT_PAREN: ["Wrap the condition or parameter list in '(' ')'"],
            TokenType.RIGHT_PAREN: ["Add a closing parenthesis ')'"],
            TokenType.LEFT_BRACE: ["Add an opening brace '{' to start a block"],
            TokenType.RIGHT_BRACE: ["Add a closing brace '}'"],
        }

        return list(token_suggestions.get(expected, []))


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P005": "Invalid expression",
    "P007": "Invalid integer literal",
    "P010": "Unexpected end of input",
    "P011": "Nesting too deep",
}


# Helper functions for creating common parser diagnostics

def create_unexpected_token_diagnostic(expected: TokenType, found: Token) -> Diagnostic:
    """Create a diagnostic for an `expect next token` check that failed."""
    code = "P010" if found.type == TokenType.EOF else "P001"

    return Diagnostic(
        message=(f"expected next token to be {expected.name}, "
                 f"got {found.type.name} ({found.literal!r}) instead"),
        location=found.location,
        severity="error",
        code=code,
        help_text=f"The parser expected to see {expected.name} at this position, "
                  f"but found {found.type.name} instead.",
        suggestions=SyntaxErrorRecovery.suggest_missing_token(expected),
    )


def create_missing_prefix_diagnostic(token: Token) -> Diagnostic:
    """Create a diagnostic for a token that cannot start an expression."""
    return Diagnostic(
        message=f"no prefix parse function for {token.type.name} ({token.literal!r}) found",
        location=token.location,
        severity="error",
        code="P005",
        help_text=f"{token.type.name} cannot start an expression.",
        suggestions=["Check the expression syntax", "Ensure all operators have operands"],
    )


def create_invalid_integer_diagnostic(token: Token) -> Diagnostic:
    """Create a diagnostic for an integer literal outside the 64-bit range."""
    return Diagnostic(
        message=f"could not parse {token.literal!r} as integer",
        location=token.location,
        severity="error",
        code="P007",
        help_text="Integer literals must fit in a signed 64-bit integer.",
    )


def create_nesting_too_deep_diagnostic(token: Token) -> Diagnostic:
    """Create a diagnostic for input nested past the interpreter's recursion limit."""
    return Diagnostic(
        message="expression nested too deeply",
        location=token.location,
        severity="error",
        code="P011",
        help_text="Parsing stopped here; the remaining input was not parsed.",
        suggestions=["Split the expression using let bindings"],
    )
