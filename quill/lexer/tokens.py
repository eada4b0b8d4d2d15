"""
Token definitions for the Quill lexer.

This module defines the closed set of token types the Quill grammar consumes:
- Identifiers
- Literals (integers, strings)
- Keywords (struct, func)
- Punctuation and paired delimiters

Every token carries a span into its source for diagnostics.
"""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Any, Optional


class TokenType(Enum):
    """
    Enumeration of all token types in Quill.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of file

    # ========================================================================
    # Literals
    # ========================================================================
    INTEGER = auto()                # 42, 1_000_000 (raw text, checked by the parser)
    STRING = auto()                 # "hello"

    # ========================================================================
    # Identifiers and Keywords
    # ========================================================================
    IDENTIFIER = auto()             # name, i32, T
    STRUCT = auto()                 # struct
    FUNC = auto()                   # func

    # ========================================================================
    # Punctuation and Delimiters
    # ========================================================================
    COLON = auto()                  # :
    COMMA = auto()                  # ,
    SEMICOLON = auto()              # ;
    LESS_THAN = auto()              # <
    GREATER_THAN = auto()           # >
    OPEN = auto()                   # ( {   (see Delimiter)
    CLOSE = auto()                  # ) }   (see Delimiter)


class Delimiter(Enum):
    """Kinds of paired delimiters."""
    PAREN = "paren"
    BRACE = "brace"


@dataclass(frozen=True)
class SourceSpan:
    """
    A range ``[start, end)`` of character offsets in the source code.

    Line and column describe where the span starts, for humans.
    """
    start: int
    end: int
    filename: str = "<unknown>"
    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceSpan({self.start}..{self.end}, {self.filename!r}, {self.line}, {self.column})"

    def to(self, other: "SourceSpan") -> "SourceSpan":
        """Span covering this span through the end of ``other``."""
        return SourceSpan(self.start, other.end, self.filename, self.line, self.column)


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the Quill language.

    ``value`` holds the semantic payload: the name for identifiers, the raw
    digit text for integers, the decoded text for strings and the
    ``Delimiter`` for open/close tokens.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any = None
    span: SourceSpan = field(default_factory=lambda: SourceSpan(0, 0))

    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    @property
    def delimiter(self) -> Optional[Delimiter]:
        if self.type in (TokenType.OPEN, TokenType.CLOSE):
            return self.value
        return None

    def matches(self, token_type: TokenType, delimiter: Optional[Delimiter] = None) -> bool:
        """Check the token's type, and its delimiter kind when one is given."""
        if self.type != token_type:
            return False
        return delimiter is None or self.value == delimiter

    def describe(self) -> str:
        """Human-readable description used in diagnostics."""
        if self.type == TokenType.IDENTIFIER:
            return f"identifier '{self.value}'"
        if self.type == TokenType.INTEGER:
            return f"integer literal '{self.lexeme}'"
        if self.type == TokenType.STRING:
            return f"string literal {self.lexeme}"
        return describe_expected(self.type, self.delimiter)


# Lookup tables used by the lexer

KEYWORDS = {
    "struct": TokenType.STRUCT,
    "func": TokenType.FUNC,
}

PUNCTUATION = {
    ":": (TokenType.COLON, None),
    ",": (TokenType.COMMA, None),
    ";": (TokenType.SEMICOLON, None),
    "<": (TokenType.LESS_THAN, None),
    ">": (TokenType.GREATER_THAN, None),
    "(": (TokenType.OPEN, Delimiter.PAREN),
    ")": (TokenType.CLOSE, Delimiter.PAREN),
    "{": (TokenType.OPEN, Delimiter.BRACE),
    "}": (TokenType.CLOSE, Delimiter.BRACE),
}

_SYMBOLS = {value: text for text, value in PUNCTUATION.items()}

_CATEGORY_NAMES = {
    TokenType.EOF: "end of input",
    TokenType.INTEGER: "integer literal",
    TokenType.STRING: "string literal",
    TokenType.IDENTIFIER: "identifier",
}


def describe_expected(token_type: TokenType, delimiter: Optional[Delimiter] = None) -> str:
    """Describe a token category the way diagnostics spell it."""
    if token_type in _CATEGORY_NAMES:
        return _CATEGORY_NAMES[token_type]
    for text, keyword in KEYWORDS.items():
        if keyword == token_type:
            return f"'{text}'"
    if (token_type, delimiter) in _SYMBOLS:
        return f"'{_SYMBOLS[(token_type, delimiter)]}'"
    return token_type.name.lower()
