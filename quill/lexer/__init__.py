"""
Quill Lexer Package

Splits Quill source text into classified, spanned tokens for the parser.

Key Features:
- Identifiers, `struct`/`func` keywords, punctuation and paired delimiters
- Integer literals kept as raw text (validated by the parser)
- String literals with escape decoding
- Source spans on every token for diagnostics
"""

from .tokens import Token, TokenType, Delimiter, SourceSpan
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "tokenize_string",
    "tokenize_file",
    "Token",
    "TokenType",
    "Delimiter",
    "SourceSpan",
    "Diagnostic",
    "LexerError",
]
