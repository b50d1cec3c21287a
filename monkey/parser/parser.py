"""
Monkey Pratt Parser Implementation

Implements a top-down operator precedence (Pratt) parser for Monkey. Each
token type registers a prefix and/or infix parse function; a numeric
precedence decides how far to the right an expression keeps growing.

The parser pulls tokens from the lexer on demand and only ever holds the
current token and one token of lookahead. It never raises on malformed input:
problems are recorded as diagnostics, the broken statement is dropped, and
parsing resumes at the next statement boundary.

Author: marcel
"""

import logging
from enum import IntEnum
from typing import Callable, Dict, List, Optional

from ..lexer.lexer import Lexer
from ..lexer.tokens import Token, TokenType
from ..lexer.errors import Diagnostic
from .ast_nodes import (
    Program, Statement, Expression, LetStatement, ReturnStatement,
    ExpressionStatement, BlockStatement, Identifier, IntegerLiteral, Boolean,
    PrefixExpression, InfixExpression, IfExpression, FunctionLiteral,
    CallExpression,
)
from .errors import (
    ParseError, SyntaxErrorRecovery, create_unexpected_token_diagnostic,
    create_missing_prefix_diagnostic, create_invalid_integer_diagnostic,
    create_nesting_too_deep_diagnostic,
)

logger = logging.getLogger(__name__)

INT64_MAX = 2 ** 63 - 1


class Precedence(IntEnum):
    """Operator precedence levels for Pratt parsing."""
    LOWEST = 1
    EQUALS = 2          # ==, !=
    LESSGREATER = 3     # <, >
    SUM = 4             # +, -
    PRODUCT = 5         # *, /
    PREFIX = 6          # -x, !x
    CALL = 7            # add(x)


# Operator precedence table; anything missing ranks as LOWEST
PRECEDENCES: Dict[TokenType, Precedence] = {
    TokenType.EQUAL: Precedence.EQUALS,
    TokenType.NOT_EQUAL: Precedence.EQUALS,
    TokenType.LESS_THAN: Precedence.LESSGREATER,
    TokenType.GREATER_THAN: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.MULTIPLY: Precedence.PRODUCT,
    TokenType.DIVIDE: Precedence.PRODUCT,
    TokenType.LEFT_PAREN: Precedence.CALL,
}

# Token types with neither a prefix nor an infix parse function.
# Every TokenType must be in this set or in one of the parser's tables.
NON_EXPRESSION_TOKENS = frozenset({
    TokenType.ILLEGAL,
    TokenType.EOF,
    TokenType.ASSIGN,
    TokenType.COMMA,
    TokenType.SEMICOLON,
    TokenType.RIGHT_PAREN,
    TokenType.LEFT_BRACE,
    TokenType.RIGHT_BRACE,
    TokenType.LET,
    TokenType.ELSE,
    TokenType.RETURN,
})


class Parser:
    """
    Monkey Pratt parser.

    Usage:
        parser = Parser(Lexer("let x = 1 + 2;"))
        program = parser.parse_program()
        if parser.errors():
            ...
    """

    def __init__(self, lexer: Lexer):
        """
        Initialize parser over a lexer.

        Args:
            lexer: Token source; the parser owns it from here on
        """
        self.lexer = lexer
        self.diagnostics: List[Diagnostic] = []
        # Set while the current token is a `}` that failed to start an expression
        # and so still belongs to an enclosing block
        self._stray_brace = False

        self._init_parsing_tables()

        # Fill current and lookahead tokens
        self.cur_token: Token = lexer.next_token()
        self.peek_token: Token = lexer.next_token()

    def _init_parsing_tables(self):
        """Initialize the prefix and infix parse function tables."""

        # Prefix parsing functions (for tokens that can start expressions)
        self.prefix_parsers: Dict[TokenType, Callable[[], Optional[Expression]]] = {
            # Literals
            TokenType.IDENTIFIER: self._parse_identifier,
            TokenType.INTEGER: self._parse_integer_literal,
            TokenType.TRUE: self._parse_boolean,
            TokenType.FALSE: self._parse_boolean,

            # Unary operators
            TokenType.BANG: self._parse_prefix_expression,
            TokenType.MINUS: self._parse_prefix_expression,

            # Grouping and compound expressions
            TokenType.LEFT_PAREN: self._parse_grouped_expression,
            TokenType.IF: self._parse_if_expression,
            TokenType.FN: self._parse_function_literal,
        }

        # Infix parsing functions (binary operators and calls)
        self.infix_parsers: Dict[TokenType, Callable[[Expression], Optional[Expression]]] = {
            # Arithmetic operators
            TokenType.PLUS: self._parse_infix_expression,
            TokenType.MINUS: self._parse_infix_expression,
            TokenType.MULTIPLY: self._parse_infix_expression,
            TokenType.DIVIDE: self._parse_infix_expression,

            # Comparison operators
            TokenType.EQUAL: self._parse_infix_expression,
            TokenType.NOT_EQUAL: self._parse_infix_expression,
            TokenType.LESS_THAN: self._parse_infix_expression,
            TokenType.GREATER_THAN: self._parse_infix_expression,

            # Function call
            TokenType.LEFT_PAREN: self._parse_call_expression,
        }

    def parse_program(self) -> Program:
        """
        Parse the token stream into an AST.

        Returns:
            Program AST node; statements that failed to parse are left out
            and described in `errors()`
        """
        self.diagnostics = []
        statements: List[Statement] = []

        while not self._cur_token_is(TokenType.EOF):
            try:
                stmt = self._parse_statement()
            except RecursionError:
                # Nesting deeper than the interpreter stack; the rest of the
                # input cannot be resynchronized reliably
                self._record(create_nesting_too_deep_diagnostic(self.cur_token))
                break

            if stmt is not None:
                statements.append(stmt)
            else:
                self._synchronize()
            self._next_token()

        return Program(tuple(statements))

    def errors(self) -> List[str]:
        """Messages of the diagnostics recorded by the last parse."""
        return [diagnostic.message for diagnostic in self.diagnostics]

    def has_errors(self) -> bool:
        """Check if parser encountered any errors."""
        return len(self.diagnostics) > 0

    # Statements

    def _parse_statement(self) -> Optional[Statement]:
        """Parse a statement starting at the current token."""
        if self._cur_token_is(TokenType.LET):
            return self._parse_let_statement()
        elif self._cur_token_is(TokenType.RETURN):
            return self._parse_return_statement()
        else:
            return self._parse_expression_statement()

    def _parse_let_statement(self) -> Optional[LetStatement]:
        token = self.cur_token

        if not self._expect_peek(TokenType.IDENTIFIER):
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)

        if not self._expect_peek(TokenType.ASSIGN):
            return None

        self._next_token()
        value = self._parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        self._skip_optional_semicolon()
        return LetStatement(token, name, value)

    def _parse_return_statement(self) -> Optional[ReturnStatement]:
        token = self.cur_token

        self._next_token()
        value = self._parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        self._skip_optional_semicolon()
        return ReturnStatement(token, value)

    def _parse_expression_statement(self) -> Optional[ExpressionStatement]:
        token = self.cur_token

        value = self._parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        self._skip_optional_semicolon()
        return ExpressionStatement(token, value)

    def _parse_block_statement(self) -> Optional[BlockStatement]:
        """Parse `{ statement* }` with the current token on the `{`."""
        token = self.cur_token
        statements: List[Statement] = []

        self._next_token()

        while not self._cur_token_is(TokenType.RIGHT_BRACE) and not self._cur_token_is(TokenType.EOF):
            stmt = self._parse_statement()
            if stmt is not None:
                statements.append(stmt)
            else:
                self._synchronize()
                # A stray '}' the failed statement stopped on closes this block
                if self._stray_brace:
                    break
            self._next_token()

        if not self._cur_token_is(TokenType.RIGHT_BRACE):
            self._record(create_unexpected_token_diagnostic(TokenType.RIGHT_BRACE, self.cur_token))
            return None

        self._stray_brace = False
        return BlockStatement(token, tuple(statements))

    # Expressions

    def _parse_expression(self, precedence: Precedence) -> Optional[Expression]:
        """Parse an expression whose operators all bind tighter than `precedence`."""
        prefix_parser = self.prefix_parsers.get(self.cur_token.type)
        if prefix_parser is None:
            if self._cur_token_is(TokenType.RIGHT_BRACE):
                self._stray_brace = True
            self._record(create_missing_prefix_diagnostic(self.cur_token))
            return None

        left = prefix_parser()

        while left is not None and precedence < self._peek_precedence():
            infix_parser = self.infix_parsers.get(self.peek_token.type)
            if infix_parser is None:
                return left

            self._next_token()
            left = infix_parser(left)

        return left

    # Prefix parsers (tokens that can start expressions)

    def _parse_identifier(self) -> Identifier:
        return Identifier(self.cur_token, self.cur_token.literal)

    def _parse_integer_literal(self) -> Optional[IntegerLiteral]:
        """Convert the token's decimal text; out of range is a diagnostic."""
        token = self.cur_token
        literal = token.literal

        # More significant digits than INT64_MAX has can never fit
        if (not (literal.isascii() and literal.isdigit())
                or len(literal.lstrip("0")) > len(str(INT64_MAX))):
            self._record(create_invalid_integer_diagnostic(token))
            return None

        value = int(literal)
        if value > INT64_MAX:
            self._record(create_invalid_integer_diagnostic(token))
            return None

        return IntegerLiteral(token, value)

    def _parse_boolean(self) -> Boolean:
        return Boolean(self.cur_token, self._cur_token_is(TokenType.TRUE))

    def _parse_prefix_expression(self) -> Optional[PrefixExpression]:
        token = self.cur_token

        self._next_token()
        right = self._parse_expression(Precedence.PREFIX)
        if right is None:
            return None

        return PrefixExpression(token, token.literal, right)

    def _parse_grouped_expression(self) -> Optional[Expression]:
        self._next_token()  # Consume (

        expression = self._parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        if not self._expect_peek(TokenType.RIGHT_PAREN):
            return None

        return expression

    def _parse_if_expression(self) -> Optional[IfExpression]:
        token = self.cur_token

        if not self._expect_peek(TokenType.LEFT_PAREN):
            return None

        self._next_token()
        condition = self._parse_expression(Precedence.LOWEST)
        if condition is None:
            return None

        if not self._expect_peek(TokenType.RIGHT_PAREN):
            return None
        if not self._expect_peek(TokenType.LEFT_BRACE):
            return None

        consequence = self._parse_block_statement()
        if consequence is None:
            return None

        alternative = None
        if self._peek_token_is(TokenType.ELSE):
            self._next_token()

            if not self._expect_peek(TokenType.LEFT_BRACE):
                return None

            alternative = self._parse_block_statement()
            if alternative is None:
                return None

        return IfExpression(token, condition, consequence, alternative)

    def _parse_function_literal(self) -> Optional[FunctionLiteral]:
        token = self.cur_token

        if not self._expect_peek(TokenType.LEFT_PAREN):
            return None

        parameters = self._parse_function_parameters()
        if parameters is None:
            return None

        if not self._expect_peek(TokenType.LEFT_BRACE):
            return None

        body = self._parse_block_statement()
        if body is None:
            return None

        return FunctionLiteral(token, tuple(parameters), body)

    def _parse_function_parameters(self) -> Optional[List[Identifier]]:
        """Parse `(a, b, c)` with the current token on the `(`."""
        identifiers: List[Identifier] = []

        if self._peek_token_is(TokenType.RIGHT_PAREN):
            self._next_token()
            return identifiers

        if not self._expect_peek(TokenType.IDENTIFIER):
            return None
        identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        while self._peek_token_is(TokenType.COMMA):
            self._next_token()
            if not self._expect_peek(TokenType.IDENTIFIER):
                return None
            identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        if not self._expect_peek(TokenType.RIGHT_PAREN):
            return None

        return identifiers

    # Infix parsers (binary operators and calls)

    def _parse_infix_expression(self, left: Expression) -> Optional[InfixExpression]:
        """Parse a binary operation; the right side binds at the operator's own rank."""
        token = self.cur_token
        precedence = self._cur_precedence()

        self._next_token()
        right = self._parse_expression(precedence)
        if right is None:
            return None

        return InfixExpression(token, left, token.literal, right)

    def _parse_call_expression(self, callee: Expression) -> Optional[CallExpression]:
        token = self.cur_token

        arguments = self._parse_call_arguments()
        if arguments is None:
            return None

        return CallExpression(token, callee, tuple(arguments))

    def _parse_call_arguments(self) -> Optional[List[Expression]]:
        """Parse `(x, y + 1)` with the current token on the `(`."""
        args: List[Expression] = []

        if self._peek_token_is(TokenType.RIGHT_PAREN):
            self._next_token()
            return args

        self._next_token()
        arg = self._parse_expression(Precedence.LOWEST)
        if arg is None:
            return None
        args.append(arg)

        while self._peek_token_is(TokenType.COMMA):
            self._next_token()
            self._next_token()
            arg = self._parse_expression(Precedence.LOWEST)
            if arg is None:
                return None
            args.append(arg)

        if not self._expect_peek(TokenType.RIGHT_PAREN):
            return None

        return args

    # Utility methods

    def _next_token(self):
        """Shift the lookahead into the current token and pull a new one."""
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()
        self._stray_brace = False

    def _cur_token_is(self, token_type: TokenType) -> bool:
        return self.cur_token.type == token_type

    def _peek_token_is(self, token_type: TokenType) -> bool:
        return self.peek_token.type == token_type

    def _expect_peek(self, token_type: TokenType) -> bool:
        """Advance if the next token has the expected type, else record a diagnostic."""
        if self._peek_token_is(token_type):
            self._next_token()
            return True

        self._record(create_unexpected_token_diagnostic(token_type, self.peek_token))
        return False

    def _skip_optional_semicolon(self):
        if self._peek_token_is(TokenType.SEMICOLON):
            self._next_token()

    def _peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def _cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    def _record(self, diagnostic: Diagnostic):
        self.diagnostics.append(diagnostic)
        logger.debug("parse error at %s: %s", diagnostic.location, diagnostic.message)

    def _synchronize(self):
        """
        Skip the rest of a statement that failed to parse.

        Leaves the current token on the statement's last token: its `;`, or
        the token before the `}` closing the enclosing block, or the token
        before EOF. A stray `}` the statement failed on is left current so the
        enclosing block can close on it. Braces opened inside the statement,
        including bodies it already parsed, are skipped whole.
        """
        logger.debug("dropping statement, resynchronizing from %s", self.cur_token)

        at_boundary = self.cur_token.type in SyntaxErrorRecovery.STATEMENT_BOUNDARIES
        # A `}` that closed a nested body of this statement ends nothing
        if at_boundary and (self._stray_brace or not self._cur_token_is(TokenType.RIGHT_BRACE)):
            return

        depth = 1 if self._cur_token_is(TokenType.LEFT_BRACE) else 0
        while not self._peek_token_is(TokenType.EOF):
            if self._peek_token_is(TokenType.LEFT_BRACE):
                depth += 1
            elif self._peek_token_is(TokenType.RIGHT_BRACE):
                if depth == 0:
                    return
                depth -= 1
            elif self._peek_token_is(TokenType.SEMICOLON) and depth == 0:
                self._next_token()
                return
            self._next_token()


def parse_string(source: str, filename: str = "<string>") -> Program:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string
        filename: Filename for diagnostics

    Returns:
        Program AST

    Raises:
        ParseError: If any diagnostic was recorded
    """
    parser = Parser(Lexer(source, filename))
    program = parser.parse_program()

    if parser.has_errors():
        # Raise the first error encountered
        raise ParseError(parser.diagnostics[0], parser.diagnostics)

    return program


def parse_file(filepath: str) -> Program:
    """
    Convenience function to parse a source file.

    Args:
        filepath: Path to source file

    Returns:
        Program AST

    Raises:
        ParseError: If parsing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return parse_string(source, filepath)
