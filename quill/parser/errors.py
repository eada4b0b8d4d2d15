"""
Error handling for the Quill parser.

Every parse failure is terminal: the parser never recovers or returns a
partial program. Errors carry the span of the offending token (or of the end
of input) and the set of things that would have been accepted there.
"""

from typing import List, Optional, Sequence

from ..lexer.tokens import Token, SourceSpan
from ..lexer.errors import Diagnostic


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P002": "Malformed literal",
    "P003": "Unconsumed trailing input",
    "P010": "Unexpected end of input",
}


class ParseError(Exception):
    """
    Base class for parse failures.

    Contains detailed diagnostic information for error reporting.
    """

    code = "P001"

    def __init__(
        self,
        message: str,
        span: SourceSpan,
        found: Optional[Token] = None,
        expected: Sequence[str] = (),
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
        index: int = 0,
    ):
        super().__init__(message)
        self.message = message
        self.found = found
        self.index = index  # position in the token list
        self.expected = sorted(set(expected))
        self.diagnostic = Diagnostic(
            message=message,
            span=span,
            severity="error",
            code=self.code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def span(self) -> SourceSpan:
        return self.diagnostic.span

    @property
    def at_end(self) -> bool:
        """True when the error was raised at the end of input."""
        return self.found is None

    def __str__(self) -> str:
        return str(self.diagnostic)


class UnexpectedTokenError(ParseError):
    """A rule expected one token category and found another, or nothing."""

    def __init__(self, expected: Sequence[str], found: Optional[Token], span: SourceSpan, index: int = 0):
        if found is None:
            self.code = "P010"
        expected_str = _join_expected(sorted(set(expected)))
        found_str = found.describe() if found is not None else "end of input"
        super().__init__(
            message=f"Expected {expected_str}, found {found_str}",
            span=span,
            found=found,
            expected=expected,
            index=index,
        )


class AlternativeError(UnexpectedTokenError):
    """
    None of the branches of an ordered choice matched.

    ``errors`` holds every branch's error in branch order. The reported
    span and expectations come from the branches that got furthest.
    """

    def __init__(self, errors: Sequence[ParseError]):
        self.errors = list(errors)
        furthest = max(e.index for e in self.errors)
        leading = [e for e in self.errors if e.index == furthest]
        expected = [name for e in leading for name in e.expected]
        super().__init__(expected, leading[0].found, leading[0].span, furthest)


class MalformedLiteralError(ParseError):
    """A literal token failed semantic validation, e.g. integer overflow."""

    code = "P002"

    def __init__(self, token: Token, reason: str, index: int = 0):
        super().__init__(
            message=f"Malformed literal '{token.lexeme}': {reason}",
            span=token.span,
            found=token,
            help_text=reason,
            suggestions=["Integer literals must fit in a signed 32-bit integer"],
            index=index,
        )
        self.reason = reason


class TrailingInputError(ParseError):
    """Tokens remain after the last item the program rule could parse."""

    code = "P003"

    def __init__(self, found: Token, cause: Optional[ParseError] = None, index: int = 0):
        super().__init__(
            message=f"Unexpected {found.describe()} after the last item",
            span=found.span,
            found=found,
            expected=["'struct'", "'func'", "end of input"],
            help_text="Only struct and func declarations may appear at the top level.",
            index=index,
        )
        self.cause = cause


def _join_expected(expected: List[str]) -> str:
    if not expected:
        return "something else"
    if len(expected) == 1:
        return expected[0]
    return ", ".join(expected[:-1]) + " or " + expected[-1]
