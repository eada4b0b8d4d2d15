"""
Quill Front End Package

Lexer and declaration parser for the Quill language: turns source text into
tokens, and tokens into `struct` and `func` items.

Architecture:
    quill/
    ├── lexer/           # Tokenization
    ├── parser/          # Declaration grammar and AST
    ├── config.py        # Front-end options
    ├── log.py           # Logging setup for entry points
    └── cli.py           # Command line driver
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .config import FrontendConfig, SourceTooLargeError
from .lexer import Lexer, Token, TokenType, LexerError
from .parser import Parser, Item, ParseError, parse_string, parse_file

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "Token",
    "TokenType",
    "Item",
    "FrontendConfig",

    # Entry points
    "parse_string",
    "parse_file",

    # Errors
    "LexerError",
    "ParseError",
    "SourceTooLargeError",

    # Version info
    "__version__",
    "__license__",
]
