"""
Error handling for the Quill lexer.

Provides error reporting with source span information and
IDE-friendly diagnostics shared with the parser.
"""

from typing import Optional, List
from dataclasses import dataclass

from .tokens import SourceSpan


@dataclass
class Diagnostic:
    """A rendered-on-demand diagnostic (error, warning, info)."""
    message: str
    span: SourceSpan
    severity: str  # "error", "warning", "info", "hint"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix += f"[{self.code}]"
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.span}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    Exception raised when the lexer cannot classify its input.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        span: SourceSpan,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message=message,
            span=span,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def span(self) -> SourceSpan:
        return self.diagnostic.span

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Unexpected character",
    "L002": "Unterminated string literal",
}


def create_unexpected_character_error(char: str, span: SourceSpan) -> LexerError:
    """Create an error for a character no token starts with."""
    if char.isprintable():
        help_text = f"The character '{char}' does not start any Quill token."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"Unexpected character: '{char}'",
        span=span,
        code="L001",
        help_text=help_text,
    )


def create_unterminated_string_error(span: SourceSpan) -> LexerError:
    """Create an error for an unterminated string literal."""
    return LexerError(
        message="Unterminated string literal",
        span=span,
        code="L002",
        help_text='String literals must be closed with a matching " quote.',
        suggestions=['Add a closing " quote', "Check for unescaped quotes in the string"]
    )
