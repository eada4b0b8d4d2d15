"""
Quill Parser Package

Turns a token list into the items of a Quill program: `struct` and `func`
declarations, plus literal expressions.

Key Features:
- Recursive descent with ordered choice and cursor rewind
- Immutable AST values with source spans
- Structured, terminal errors (unexpected token, malformed literal,
  trailing input)
"""

from .ast_nodes import (
    ASTNodeType, Lit, IntLit, StrLit, ExprKind, Expr, TypedName,
    StructKind, FuncKind, ItemKind, Item, StmtKind, Stmt, Block, program_to_dict,
)
from .parser import (
    Parser, parse_tokens, parse_literal_tokens, parse_string, parse_file, parse_int_text,
)
from .errors import (
    ParseError, UnexpectedTokenError, AlternativeError, MalformedLiteralError,
    TrailingInputError, PARSER_ERROR_CODES,
)

__all__ = [
    # Core parser
    "Parser", "parse_tokens", "parse_literal_tokens", "parse_string", "parse_file",
    "parse_int_text",

    # AST nodes
    "ASTNodeType", "Lit", "IntLit", "StrLit", "ExprKind", "Expr", "TypedName",
    "StructKind", "FuncKind", "ItemKind", "Item", "StmtKind", "Stmt", "Block",
    "program_to_dict",

    # Error handling
    "ParseError", "UnexpectedTokenError", "AlternativeError",
    "MalformedLiteralError", "TrailingInputError", "PARSER_ERROR_CODES",
]
