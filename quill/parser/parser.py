"""
Quill declaration parser.

Recursive descent over a token list. Each rule method reads tokens at the
cursor and either returns an AST fragment, leaving the cursor after it, or
raises a ParseError. Ordered choices rewind the cursor between branches.

Grammar:

    program  = item* EOF
    item     = struct | func
    struct   = "struct" IDENT generics? ( fields | ";" )
    func     = "func" IDENT args "{" "}"
    generics = "<" IDENT ( "," IDENT )* ">"
    fields   = "{" ( field ( "," field )* ","? )? "}"
    args     = "(" ( field ( "," field )* )? ")"
    field    = IDENT ":" IDENT
    literal  = INTEGER | STRING
"""

import logging
import re
from typing import Callable, List, Optional, TypeVar

from ..config import FrontendConfig
from ..lexer.tokens import Token, TokenType, Delimiter, SourceSpan, describe_expected
from .ast_nodes import (
    Block, Expr, FuncKind, IntLit, Item, Lit, StrLit, StructKind, TypedName
)
from .errors import (
    AlternativeError, MalformedLiteralError, ParseError, TrailingInputError,
    UnexpectedTokenError
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DECIMAL_INTEGER = re.compile(r'[+-]?[0-9]+')


def parse_int_text(text: str) -> int:
    """
    Parse integer literal text as a signed 32-bit value.

    ``_`` separators are dropped first. Raises ValueError with a reason when
    the rest is not a decimal integer or does not fit in 32 bits.
    """
    digits = text.replace('_', '')
    if not _DECIMAL_INTEGER.fullmatch(digits):
        raise ValueError("not a decimal integer")
    value = int(digits)
    if not IntLit.MIN <= value <= IntLit.MAX:
        raise ValueError("out of range for a signed 32-bit integer")
    return value


class Parser:
    """
    Quill recursive-descent parser.

    A parser owns a private cursor over a read-only token list, so separate
    instances can run concurrently. The token list may end with an EOF token
    or simply stop.
    """

    def __init__(self, tokens: List[Token]):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the lexer
        """
        self.tokens = tokens
        self.current = 0
        self.errors: List[ParseError] = []

    @classmethod
    def from_source(cls, source: str, filename: str = "<string>") -> "Parser":
        from ..lexer import tokenize_string

        return cls(tokenize_string(source, filename))

    def parse(self) -> List[Item]:
        """
        Parse the whole token stream into its items.

        Returns:
            Items in source order (possibly empty)

        Raises:
            ParseError: If any part of the stream does not parse
        """
        self.current = 0
        try:
            items = self._parse_program()
        except ParseError as e:
            self.errors.append(e)
            logger.debug("parse failed at token %d: %s", e.index, e.message)
            raise
        logger.debug("parsed %d items", len(items))
        return items

    # Program and items

    def _parse_program(self) -> List[Item]:
        items = []
        while not self._is_at_end():
            start = self.current
            try:
                items.append(self._parse_item())
            except ParseError as e:
                if e.index > start:
                    raise
                # Nothing could start here: the rest of the stream is left over
                raise TrailingInputError(self.tokens[start], cause=e, index=start) from e
        return items

    def _parse_item(self) -> Item:
        """Parse a top-level item: a struct, else a function."""
        item = self._choice(self._parse_struct, self._parse_func)
        logger.debug("parsed %s", item)
        return item

    def _parse_struct(self) -> Item:
        """Parse a struct declaration."""
        start_token = self._consume(TokenType.STRUCT)
        name = self._parse_ident()
        generics = self._parse_generics()
        try:
            fields = self._choice(self._parse_field_list, self._parse_unit_body)
        except AlternativeError as e:
            if generics is not None or e.index != self.current:
                raise
            # '<' was also acceptable here
            missing_generics = self._unexpected([describe_expected(TokenType.LESS_THAN)])
            raise AlternativeError([missing_generics] + e.errors) from None

        return Item(name, StructKind(generics, fields), self._span_since(start_token))

    def _parse_func(self) -> Item:
        """Parse a function declaration with its (empty) body."""
        start_token = self._consume(TokenType.FUNC)
        name = self._parse_ident()
        inputs = self._parse_argument_list()
        self._parse_empty_block()

        return Item(name, FuncKind(inputs), self._span_since(start_token))

    # Item parts

    def _parse_generics(self) -> Optional[List[str]]:
        """Parse ``<A, B>`` if present. No ``<`` means no generics."""
        if not self._match(TokenType.LESS_THAN):
            return None
        names = [self._parse_ident()]
        while self._match(TokenType.COMMA):
            names.append(self._parse_ident())
        self._consume(TokenType.GREATER_THAN)
        return names

    def _parse_field_list(self) -> List[TypedName]:
        """Struct fields: braces, trailing comma allowed."""
        return self._parse_delimited(Delimiter.BRACE, self._parse_typed_name, allow_trailing=True)

    def _parse_argument_list(self) -> List[TypedName]:
        """Function arguments: parentheses, no trailing comma."""
        return self._parse_delimited(Delimiter.PAREN, self._parse_typed_name, allow_trailing=False)

    def _parse_unit_body(self) -> None:
        self._consume(TokenType.SEMICOLON)
        return None

    def _parse_typed_name(self) -> TypedName:
        """Parse ``name: type``; shared by struct fields and function arguments."""
        name = self._parse_ident()
        self._consume(TokenType.COLON)
        return TypedName(name, self._parse_ident())

    def _parse_empty_block(self) -> Block:
        """A function body must be exactly ``{}``."""
        start_token = self._consume(TokenType.OPEN, Delimiter.BRACE)
        self._consume(TokenType.CLOSE, Delimiter.BRACE)
        return Block([], self._span_since(start_token))

    def _parse_ident(self) -> str:
        return self._consume(TokenType.IDENTIFIER).value

    # Literals

    def parse_literal(self) -> Expr:
        """Parse one literal expression at the cursor: an integer, else a string."""
        return Expr.literal(self._choice(self._parse_int_literal, self._parse_str_literal))

    def _parse_int_literal(self) -> Lit:
        token = self._consume(TokenType.INTEGER)
        text = token.value if token.value is not None else token.lexeme
        try:
            value = parse_int_text(text)
        except ValueError as e:
            raise MalformedLiteralError(token, str(e), index=self.current - 1) from None
        return IntLit(value, token.span)

    def _parse_str_literal(self) -> Lit:
        token = self._consume(TokenType.STRING)
        return StrLit(token.value, token.span)

    # Combinators

    def _choice(self, *rules: Callable[[], T]) -> T:
        """
        Try each rule in order from the same position; return the first success.

        When every rule fails, a malformed literal at the furthest position is
        re-raised as is; otherwise the failures are merged.
        """
        start = self.current
        failures = []
        for rule in rules:
            try:
                return rule()
            except ParseError as e:
                failures.append(e)
                self.current = start

        furthest = max(e.index for e in failures)
        for e in failures:
            if e.index == furthest and isinstance(e, MalformedLiteralError):
                raise e
        logger.debug("no alternative matched at token %d", start)
        raise AlternativeError(failures)

    def _parse_delimited(self, delimiter: Delimiter, rule: Callable[[], T],
                         allow_trailing: bool) -> List[T]:
        """Parse a comma-separated, possibly empty list between a delimiter pair."""
        self._consume(TokenType.OPEN, delimiter)
        elements = []
        if not self._check(TokenType.CLOSE, delimiter):
            elements.append(rule())
            while self._match(TokenType.COMMA):
                if allow_trailing and self._check(TokenType.CLOSE, delimiter):
                    break
                elements.append(rule())
        self._consume(TokenType.CLOSE, delimiter)
        return elements

    # Utility methods

    def _match(self, token_type: TokenType, delimiter: Optional[Delimiter] = None) -> bool:
        """Check if current token matches type and consume if so."""
        if self._check(token_type, delimiter):
            self._advance()
            return True
        return False

    def _check(self, token_type: TokenType, delimiter: Optional[Delimiter] = None) -> bool:
        """Check if current token matches type without consuming."""
        if self._is_at_end():
            return False
        return self._peek().matches(token_type, delimiter)

    def _advance(self) -> Token:
        """Consume and return current token."""
        token = self.tokens[self.current]
        self.current += 1
        return token

    def _is_at_end(self) -> bool:
        """Check if we've reached the end of tokens. Only a final EOF token ends the input."""
        if self.current >= len(self.tokens):
            return True
        return self.current == len(self.tokens) - 1 and self.tokens[self.current].type == TokenType.EOF

    def _peek(self) -> Optional[Token]:
        """Return current token without consuming, or None at the end."""
        if self._is_at_end():
            return None
        return self.tokens[self.current]

    def _consume(self, token_type: TokenType, delimiter: Optional[Delimiter] = None) -> Token:
        """Consume token of expected type or raise error."""
        if self._check(token_type, delimiter):
            return self._advance()
        raise self._unexpected([describe_expected(token_type, delimiter)])

    def _unexpected(self, expected: List[str]) -> UnexpectedTokenError:
        found = self._peek()
        span = found.span if found is not None else self._end_span()
        return UnexpectedTokenError(expected, found, span, index=self.current)

    def _end_span(self) -> SourceSpan:
        """Span marking the end of input."""
        if self.current < len(self.tokens):
            return self.tokens[self.current].span  # the EOF token
        if self.tokens:
            last = self.tokens[-1].span
            return SourceSpan(last.end, last.end, last.filename, last.line, last.column)
        return SourceSpan(0, 0)

    def _span_since(self, start_token: Token) -> SourceSpan:
        return start_token.span.to(self.tokens[self.current - 1].span)

    def expect_end(self) -> None:
        """Raise unless every token has been consumed."""
        if not self._is_at_end():
            raise self._unexpected([describe_expected(TokenType.EOF)])


def parse_tokens(tokens: List[Token]) -> List[Item]:
    """Parse a token list into its items."""
    return Parser(tokens).parse()


def parse_literal_tokens(tokens: List[Token]) -> Expr:
    """Parse a token list that must hold exactly one literal."""
    parser = Parser(tokens)
    expr = parser.parse_literal()
    parser.expect_end()
    return expr


def parse_string(source: str, filename: Optional[str] = None,
                 config: Optional[FrontendConfig] = None) -> List[Item]:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting (defaults to the config's)
        config: Front-end options; defaults apply when omitted

    Returns:
        Items in source order

    Raises:
        SourceTooLargeError: If the source exceeds the configured limit
        LexerError: If lexing fails
        ParseError: If parsing fails
    """
    from ..lexer import tokenize_string

    config = config or FrontendConfig()
    filename = filename or config.filename
    config.check_source_size(source, filename)

    tokens = tokenize_string(source, filename)
    return Parser(tokens).parse()


def parse_file(filepath: str, config: Optional[FrontendConfig] = None) -> List[Item]:
    """
    Convenience function to parse a source file.

    Raises:
        SourceTooLargeError: If the file exceeds the configured limit
        LexerError: If lexing fails
        ParseError: If parsing fails
        OSError: If file cannot be read
    """
    config = config or FrontendConfig()
    with open(filepath, 'r', encoding=config.encoding) as f:
        source = f.read()

    return parse_string(source, filepath, config)
