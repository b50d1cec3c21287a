"""
Test suite for diagnostics and error recovery.

Tests cover:
- Diagnostic rendering and error codes
- Statement-level recovery in the parser
- Strict convenience helpers that raise

Author: marcel
"""

import unittest
import sys
import os
import tempfile

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from monkey.lexer.lexer import Lexer
from monkey.lexer.tokens import Token, TokenType, SourceLocation
from monkey.lexer.errors import Diagnostic, LEXER_ERROR_CODES, create_invalid_character_diagnostic
from monkey.parser.parser import Parser, parse_string, parse_file
from monkey.parser.errors import (
    ParseError, SyntaxErrorRecovery, PARSER_ERROR_CODES,
    create_unexpected_token_diagnostic, create_missing_prefix_diagnostic,
    create_invalid_integer_diagnostic,
)


def parse(source: str):
    """Parse `source` and return (program, parser)."""
    parser = Parser(Lexer(source))
    return parser.parse_program(), parser


class TestDiagnostics(unittest.TestCase):
    """Test cases for diagnostic records and factories."""

    def test_diagnostic_string(self):
        """Test the multi-line rendering of a diagnostic."""
        diagnostic = Diagnostic(
            message="boom",
            location=SourceLocation("a.mk", 2, 3, 10),
            severity="error",
            code="P001",
            help_text="try again",
            suggestions=["look closer"],
        )

        self.assertEqual(
            str(diagnostic),
            "ERROR: boom\n"
            "  --> a.mk:2:3\n"
            "  help: try again\n"
            "  suggestions:\n"
            "    - look closer\n"
        )

    def test_diagnostic_without_location(self):
        diagnostic = Diagnostic("bare", None, "warning")
        self.assertEqual(str(diagnostic), "WARNING: bare\n")

    def test_unexpected_token_diagnostic(self):
        """Test message format and the end-of-input code."""
        found = Token(TokenType.INTEGER, "5")
        diagnostic = create_unexpected_token_diagnostic(TokenType.ASSIGN, found)

        self.assertEqual(diagnostic.message, "expected next token to be ASSIGN, got INTEGER ('5') instead")
        self.assertEqual(diagnostic.code, "P001")
        self.assertIn("Add an assignment operator '='", diagnostic.suggestions)

        at_end = create_unexpected_token_diagnostic(TokenType.RIGHT_BRACE, Token(TokenType.EOF, ""))
        self.assertEqual(at_end.code, "P010")

    def test_missing_prefix_diagnostic(self):
        diagnostic = create_missing_prefix_diagnostic(Token(TokenType.RIGHT_PAREN, ")"))
        self.assertEqual(diagnostic.message, "no prefix parse function for RIGHT_PAREN (')') found")
        self.assertEqual(diagnostic.code, "P005")

    def test_invalid_integer_diagnostic(self):
        diagnostic = create_invalid_integer_diagnostic(Token(TokenType.INTEGER, "99999999999999999999"))
        self.assertEqual(diagnostic.message, "could not parse '99999999999999999999' as integer")
        self.assertEqual(diagnostic.code, "P007")

    def test_invalid_character_diagnostic(self):
        """Test hints for operators Monkey does not support."""
        location = SourceLocation("<string>", 1, 1, 0)

        ampersand = create_invalid_character_diagnostic("&", location)
        self.assertEqual(ampersand.code, "L001")
        self.assertEqual(ampersand.message, "Invalid character: '&'")
        self.assertTrue(ampersand.suggestions)

        nul = create_invalid_character_diagnostic("\x00", location)
        self.assertIn("U+0000", nul.help_text)
        self.assertIsNone(nul.suggestions)

    def test_error_codes_are_documented(self):
        for code in ("P001", "P005", "P007", "P010", "P011"):
            self.assertIn(code, PARSER_ERROR_CODES)
        self.assertEqual(LEXER_ERROR_CODES["L001"], "Invalid character")

    def test_suggest_missing_token(self):
        self.assertEqual(
            SyntaxErrorRecovery.suggest_missing_token(TokenType.RIGHT_PAREN),
            ["Add a closing parenthesis ')'"]
        )
        self.assertEqual(SyntaxErrorRecovery.suggest_missing_token(TokenType.COMMA), [])


class TestErrorRecovery(unittest.TestCase):
    """Test cases for parsing malformed input."""

    def test_malformed_let_is_dropped(self):
        """Test that a bad statement is skipped and the next one still parses."""
        program, parser = parse("let x 5; let y = 2;")

        self.assertEqual(parser.errors(), ["expected next token to be ASSIGN, got INTEGER ('5') instead"])
        self.assertEqual(len(program.statements), 1)
        self.assertEqual(str(program), "let y = 2;")

    def test_malformed_let_variants(self):
        """Test that each broken let form reports without raising."""
        for source in ["let = 5;", "let x = ;", "let 5 = x;", "let", "let x"]:
            with self.subTest(source=source):
                program, parser = parse(source)
                self.assertTrue(parser.has_errors())
                self.assertEqual(program.statements, ())

    def test_missing_prefix_for_illegal_token(self):
        """Test that an ILLEGAL token cannot start an expression."""
        lexer = Lexer("let a = @; let b = 1;")
        parser = Parser(lexer)
        program = parser.parse_program()

        self.assertEqual(parser.errors(), ["no prefix parse function for ILLEGAL ('@') found"])
        self.assertEqual(str(program), "let b = 1;")
        self.assertEqual(len(lexer.diagnostics), 1)

    def test_integer_overflow(self):
        """Test that integers past the signed 64-bit range are diagnosed."""
        program, parser = parse("let big = 9223372036854775808; big;")

        self.assertEqual(parser.errors(), ["could not parse '9223372036854775808' as integer"])
        self.assertEqual(parser.diagnostics[0].code, "P007")
        self.assertEqual(str(program), "big")

    def test_integer_with_thousands_of_digits(self):
        """Test that a literal too long to convert is still just a diagnostic."""
        digits = "9" * 5000
        program, parser = parse(f"let x = {digits}; let y = 1;")

        self.assertEqual(len(parser.diagnostics), 1)
        self.assertEqual(parser.diagnostics[0].code, "P007")
        self.assertEqual(str(program), "let y = 1;")

    def test_leading_zeros_do_not_count_toward_range(self):
        program, parser = parse("0" * 30 + "42")
        self.assertEqual(parser.errors(), [])
        self.assertEqual(program.statements[0].value.value, 42)

    def test_deep_nesting_is_a_diagnostic(self):
        """Test that nesting past the recursion limit keeps earlier statements."""
        for nested in ["-" * 10000 + "1", "(" * 10000 + "1" + ")" * 10000, "f(" * 10000 + ")" * 10000]:
            with self.subTest(nested=nested[:5]):
                program, parser = parse("let a = 1; " + nested)

                self.assertEqual(parser.errors(), ["expression nested too deeply"])
                self.assertEqual(parser.diagnostics[0].code, "P011")
                self.assertEqual(str(program), "let a = 1;")

    def test_most_negative_integer_is_rejected(self):
        """Test that the minus sign is not part of the literal."""
        _, parser = parse("-9223372036854775808")
        self.assertEqual(parser.errors(), ["could not parse '9223372036854775808' as integer"])

    def test_unclosed_block_reports_end_of_input(self):
        program, parser = parse("fn(x) { x")

        self.assertEqual(program.statements, ())
        self.assertEqual(parser.errors(), ["expected next token to be RIGHT_BRACE, got EOF ('') instead"])
        self.assertEqual(parser.diagnostics[0].code, "P010")

    def test_unclosed_call(self):
        _, parser = parse("add(1, 2")
        self.assertEqual(parser.errors(), ["expected next token to be RIGHT_PAREN, got EOF ('') instead"])

    def test_stray_closing_brace(self):
        """Test that a stray '}' costs one diagnostic and nothing else."""
        program, parser = parse("} x")

        self.assertEqual(parser.errors(), ["no prefix parse function for RIGHT_BRACE ('}') found"])
        self.assertEqual(str(program), "x")

    def test_recovery_inside_block(self):
        """Test that a bad statement inside a block does not discard the block."""
        program, parser = parse("fn(x) { let = 1; x }")

        self.assertEqual(len(parser.errors()), 1)
        self.assertEqual(str(program), "fn(x) x")

    def test_nested_body_brace_does_not_close_block(self):
        """Test that a '}' closing a parsed body is skipped, not treated as stray."""
        program, parser = parse("if (a) { (fn() { 1 } ; y } z")

        self.assertEqual(parser.errors(), ["expected next token to be RIGHT_PAREN, got SEMICOLON (';') instead"])
        self.assertEqual(len(program.statements), 2)
        self.assertEqual(str(program), "ifa yz")

    def test_nested_body_brace_before_block_end(self):
        program, parser = parse("fn(x) { (fn() { 1 } } z")

        self.assertEqual(len(parser.errors()), 1)
        self.assertEqual(str(program), "fn(x) z")

    def test_stray_brace_inside_block(self):
        """Test that a stray '}' still closes the block it sits in."""
        program, parser = parse("fn(x) { x + } y")

        self.assertEqual(parser.errors(), ["no prefix parse function for RIGHT_BRACE ('}') found"])
        self.assertEqual(str(program), "fn(x) y")

    def test_bad_parameter_list(self):
        _, parser = parse("fn(1) { 1 }")
        self.assertEqual(parser.errors()[0], "expected next token to be IDENTIFIER, got INTEGER ('1') instead")

    def test_garbage_terminates(self):
        """Test that arbitrary token soup yields diagnostics, never an exception."""
        program, parser = parse("let let let ) ( } { ;; ) else = ,")
        self.assertTrue(parser.has_errors())
        self.assertIsNotNone(program)

    def test_diagnostic_locations(self):
        """Test that diagnostics point at the offending token."""
        parser = Parser(Lexer("let x = 1;\nlet y 2;", filename="prog.mk"))
        parser.parse_program()

        self.assertEqual(str(parser.diagnostics[0].location), "prog.mk:2:7")


class TestStrictHelpers(unittest.TestCase):
    """Test cases for parse_string and parse_file."""

    def test_parse_string(self):
        program = parse_string("let x = 1 + 2;")
        self.assertEqual(str(program), "let x = (1 + 2);")

    def test_parse_string_raises(self):
        with self.assertRaises(ParseError) as ctx:
            parse_string("let x 5; let = 1;", filename="t.mk")

        error = ctx.exception
        self.assertEqual(len(error.diagnostics), 2)
        self.assertIs(error.diagnostic, error.diagnostics[0])
        self.assertIn("ERROR: expected next token to be ASSIGN", str(error))
        self.assertIn("--> t.mk:1:7", str(error))

    def test_parse_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "prog.mk")
            with open(path, "w", encoding="utf-8") as f:
                f.write("let double = fn(x) { x * 2 };\ndouble(4);\n")

            program = parse_file(path)

        self.assertEqual(len(program.statements), 2)
        self.assertEqual(str(program), "let double = fn(x) (x * 2);double(4)")


if __name__ == '__main__':
    unittest.main()
