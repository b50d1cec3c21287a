"""
Error handling for the Monkey lexer.

Provides the diagnostic record shared by the lexer and the parser, plus the
lexer's own error codes and helpers. The lexer never raises on bad input: an
unknown character becomes an ILLEGAL token and a recorded diagnostic.

Author: marcel
"""

from typing import Optional, List
from dataclasses import dataclass

from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """A recorded, non-fatal report about the input (error, warning, hint)."""
    message: str
    location: Optional[SourceLocation]
    severity: str  # "error", "warning", "info", "hint"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}\n"
        if self.location is not None:
            result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    Exception wrapping a lexer diagnostic.

    Only raised by the strict convenience helpers, never by `Lexer` itself.
    """

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic

    def __str__(self) -> str:
        return str(self.diagnostic)


# Common error codes for categorization
LEXER_ERROR_CODES = {
    "L001": "Invalid character",
}

# Operators people reach for that Monkey does not have
_UNSUPPORTED_OPERATOR_HINTS = {
    "&": ["Monkey has no '&' or '&&' operator"],
    "|": ["Monkey has no '|' or '||' operator"],
    "%": ["Monkey has no modulo operator"],
    '"': ["Monkey has no string literals"],
    "[": ["Monkey has no array literals"],
    "]": ["Monkey has no array literals"],
}


def create_invalid_character_diagnostic(char: str, location: SourceLocation) -> Diagnostic:
    """Create a diagnostic for a character no token starts with."""
    if char.isprintable():
        help_text = f"The character '{char}' is not valid in Monkey source code."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return Diagnostic(
        message=f"Invalid character: {char!r}",
        location=location,
        severity="error",
        code="L001",
        help_text=help_text,
        suggestions=_UNSUPPORTED_OPERATOR_HINTS.get(char),
    )
