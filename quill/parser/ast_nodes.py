"""
Abstract Syntax Tree node definitions for Quill.

Nodes are immutable values built once, bottom-up, while their tokens are
parsed. Each node carries the span it was parsed from; spans take no part in
equality, so trees compare by structure alone.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Tuple, Union

from ..lexer.tokens import SourceSpan


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Items (top-level declarations)
    ITEM = "Item"
    STRUCT = "Struct"
    FUNC = "Func"

    # Statements
    BLOCK = "Block"
    STMT = "Stmt"

    # Expressions
    EXPR = "Expr"
    INT_LIT = "Int"
    STR_LIT = "Str"


def _span_field():
    return field(default=None, compare=False, repr=False)


# ============================================================================
# Literals and expressions
# ============================================================================

@dataclass(frozen=True)
class Lit:
    """Base class for literal values."""
    value: Any
    span: Optional[SourceSpan] = _span_field()

    node_type = None

    def to_dict(self) -> Dict[str, Any]:
        return {"node": self.node_type.value, "value": self.value}


@dataclass(frozen=True)
class IntLit(Lit):
    """Signed 32-bit integer literal."""
    value: int

    node_type = ASTNodeType.INT_LIT

    MIN = -(2 ** 31)
    MAX = 2 ** 31 - 1


@dataclass(frozen=True)
class StrLit(Lit):
    """Decoded string literal."""
    value: str

    node_type = ASTNodeType.STR_LIT


class ExprKind(Enum):
    LIT = "Lit"


@dataclass(frozen=True)
class Expr:
    """An expression. Literals are the only expressions so far."""
    kind: ExprKind
    lit: Lit
    span: Optional[SourceSpan] = _span_field()

    node_type = ASTNodeType.EXPR

    @classmethod
    def literal(cls, lit: Lit) -> "Expr":
        return cls(ExprKind.LIT, lit, lit.span)

    def to_dict(self) -> Dict[str, Any]:
        return {"node": self.node_type.value, "kind": self.kind.value, "lit": self.lit.to_dict()}


# ============================================================================
# Items (top-level declarations)
# ============================================================================

class TypedName(NamedTuple):
    """A ``name: type_name`` pair, used for struct fields and function arguments."""
    name: str
    type_name: str


def _typed_names(pairs: Optional[Iterable[Tuple[str, str]]]) -> Optional[Tuple[TypedName, ...]]:
    if pairs is None:
        return None
    return tuple(TypedName(*pair) for pair in pairs)


@dataclass(frozen=True)
class StructKind:
    """
    Struct declaration body.

    ``fields`` is ``None`` for a unit struct (``struct Foo;``) and an empty
    tuple for an explicit empty body (``struct Foo {}``). Lists passed in
    are stored as tuples.
    """
    generics: Optional[Tuple[str, ...]]
    fields: Optional[Tuple[TypedName, ...]]

    node_type = ASTNodeType.STRUCT

    def __post_init__(self):
        if self.generics is not None:
            object.__setattr__(self, "generics", tuple(self.generics))
        object.__setattr__(self, "fields", _typed_names(self.fields))

    @property
    def is_unit(self) -> bool:
        return self.fields is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "node": self.node_type.value,
            "generics": None if self.generics is None else list(self.generics),
            "fields": None if self.fields is None else [list(f) for f in self.fields],
        }


@dataclass(frozen=True)
class FuncKind:
    """Function declaration signature; the body is always empty."""
    inputs: Tuple[TypedName, ...]

    node_type = ASTNodeType.FUNC

    def __post_init__(self):
        object.__setattr__(self, "inputs", _typed_names(self.inputs))

    def to_dict(self) -> Dict[str, Any]:
        return {"node": self.node_type.value, "inputs": [list(i) for i in self.inputs]}


ItemKind = Union[StructKind, FuncKind]


@dataclass(frozen=True)
class Item:
    """A named top-level declaration."""
    ident: str
    kind: ItemKind
    span: Optional[SourceSpan] = _span_field()

    node_type = ASTNodeType.ITEM

    def to_dict(self) -> Dict[str, Any]:
        return {"node": self.node_type.value, "ident": self.ident, "kind": self.kind.to_dict()}

    def __str__(self) -> str:
        if isinstance(self.kind, StructKind):
            text = f"struct {self.ident}"
            if self.kind.generics is not None:
                text += f"<{', '.join(self.kind.generics)}>"
            if self.kind.fields is None:
                return text + ";"
            if not self.kind.fields:
                return text + " {}"
            return text + " { " + ", ".join(f"{n}: {t}" for n, t in self.kind.fields) + " }"
        return f"func {self.ident}(" + ", ".join(f"{n}: {t}" for n, t in self.kind.inputs) + ")"


# ============================================================================
# Statements
# ============================================================================

class StmtKind(Enum):
    ITEM = "Item"
    EXPR = "Expr"


@dataclass(frozen=True)
class Stmt:
    """A statement wrapping either a nested item or an expression."""
    kind: StmtKind
    node: Union[Item, Expr]
    span: Optional[SourceSpan] = _span_field()

    node_type = ASTNodeType.STMT

    def to_dict(self) -> Dict[str, Any]:
        return {"node": self.node_type.value, "kind": self.kind.value, "value": self.node.to_dict()}


@dataclass(frozen=True)
class Block:
    """
    An ordered list of statements.

    The grammar only accepts empty function bodies and never builds a
    populated block.
    """
    stmts: Tuple[Stmt, ...] = ()
    span: Optional[SourceSpan] = _span_field()

    node_type = ASTNodeType.BLOCK

    def __post_init__(self):
        object.__setattr__(self, "stmts", tuple(self.stmts))

    def to_dict(self) -> Dict[str, Any]:
        return {"node": self.node_type.value, "stmts": [s.to_dict() for s in self.stmts]}


def program_to_dict(items: List[Item]) -> List[Dict[str, Any]]:
    """Serialize a parsed program into JSON-compatible data."""
    return [item.to_dict() for item in items]
