"""
Literal grammar tests for Quill.

Integer literals are range-checked when the parser consumes them; strings
are taken verbatim.
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from quill.lexer import Token, TokenType, SourceSpan, tokenize_string
from quill.parser import (
    Parser, parse_literal_tokens, parse_int_text, Expr, ExprKind, IntLit, StrLit,
    MalformedLiteralError, UnexpectedTokenError, AlternativeError,
)


def int_token(text: str) -> Token:
    return Token(TokenType.INTEGER, text, text, SourceSpan(0, len(text)))


def str_token(value: str) -> Token:
    lexeme = '"' + value + '"'
    return Token(TokenType.STRING, lexeme, value, SourceSpan(0, len(lexeme)))


class TestIntegerLiterals(unittest.TestCase):
    """Test integer literal validation."""

    def test_valid_integers(self):
        cases = {
            "0": 0,
            "42": 42,
            "1_000_000": 1000000,
            "2147483647": 2 ** 31 - 1,
            "2_147_483_647": 2 ** 31 - 1,
            "007": 7,
            "1__2": 12,
            "-2147483648": -(2 ** 31),
            "+5": 5,
        }
        for text, expected in cases.items():
            with self.subTest(text=text):
                expr = parse_literal_tokens([int_token(text)])
                self.assertEqual(expr.kind, ExprKind.LIT)
                self.assertEqual(expr.lit, IntLit(expected))

    def test_malformed_integers(self):
        for text in ["2147483648", "99999999999", "-2147483649", "12ab", "_", "", "1.5", "- 1"]:
            with self.subTest(text=text):
                with self.assertRaises(MalformedLiteralError) as ctx:
                    parse_literal_tokens([int_token(text)])
                self.assertEqual(ctx.exception.code, "P002")
                self.assertIs(ctx.exception.found.type, TokenType.INTEGER)

    def test_malformed_is_not_an_unexpected_token(self):
        with self.assertRaises(MalformedLiteralError) as ctx:
            parse_literal_tokens([int_token("4294967296")])
        self.assertNotIsInstance(ctx.exception, UnexpectedTokenError)
        self.assertIn("out of range", ctx.exception.reason)

    def test_parse_int_text(self):
        self.assertEqual(parse_int_text("1_2_3"), 123)
        with self.assertRaises(ValueError):
            parse_int_text("0x10")

    def test_from_lexer(self):
        expr = parse_literal_tokens(tokenize_string("65_535"))
        self.assertEqual(expr, Expr.literal(IntLit(65535)))

        with self.assertRaises(MalformedLiteralError):
            parse_literal_tokens(tokenize_string("3_000_000_000"))


class TestStringLiterals(unittest.TestCase):
    """Test string literals."""

    def test_string_verbatim(self):
        expr = parse_literal_tokens([str_token("hello, world")])
        self.assertEqual(expr.lit, StrLit("hello, world"))

    def test_decoded_by_lexer(self):
        expr = parse_literal_tokens(tokenize_string(r'"tab\there"'))
        self.assertEqual(expr.lit, StrLit("tab\there"))

    def test_int_and_str_are_distinct(self):
        self.assertNotEqual(IntLit(1), StrLit(1))


class TestLiteralErrors(unittest.TestCase):
    """Test literal rule failures."""

    def test_not_a_literal(self):
        token = Token(TokenType.IDENTIFIER, "x", "x", SourceSpan(3, 4))
        with self.assertRaises(AlternativeError) as ctx:
            parse_literal_tokens([token])
        error = ctx.exception
        self.assertEqual(error.expected, ["integer literal", "string literal"])
        self.assertIs(error.found, token)
        self.assertEqual(error.span, SourceSpan(3, 4))
        self.assertEqual(len(error.errors), 2)

    def test_empty_input(self):
        with self.assertRaises(UnexpectedTokenError) as ctx:
            parse_literal_tokens([])
        self.assertTrue(ctx.exception.at_end)
        self.assertEqual(ctx.exception.code, "P010")

    def test_extra_tokens(self):
        with self.assertRaises(UnexpectedTokenError) as ctx:
            parse_literal_tokens(tokenize_string('1 "two"'))
        self.assertEqual(ctx.exception.expected, ["end of input"])
        self.assertEqual(ctx.exception.found.type, TokenType.STRING)

    def test_cursor_advances(self):
        parser = Parser(tokenize_string('7 "x"'))
        self.assertEqual(parser.parse_literal().lit, IntLit(7))
        self.assertEqual(parser.parse_literal().lit, StrLit("x"))
        parser.expect_end()


if __name__ == '__main__':
    unittest.main()
