"""
Quill Lexer - turns source text into a list of spanned tokens.

The lexer only classifies. Integer literals keep their raw digit text and are
range-checked by the parser when it consumes them.
"""

import logging
import re
from typing import List, Optional

from .tokens import Token, TokenType, SourceSpan, KEYWORDS, PUNCTUATION
from .errors import (
    LexerError, create_unexpected_character_error, create_unterminated_string_error
)

logger = logging.getLogger(__name__)


class Lexer:
    """
    Quill lexical analyzer.

    Converts source code text into a list of tokens terminated by an EOF
    token. Errors are collected and lexing continues past the offending
    character, so one pass reports every unclassifiable character.
    """

    _identifier_pattern = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')
    _integer_pattern = re.compile(r'[0-9][0-9_]*')

    _escape_sequences = {
        'n': '\n',
        't': '\t',
        'r': '\r',
        '\\': '\\',
        '"': '"',
        "'": "'",
        '0': '\0',
    }

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []
        self.errors: List[LexerError] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens including EOF token
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens.clear()
        self.errors.clear()

        while self.pos < len(self.source):
            try:
                self._skip_whitespace_and_comments()

                if self.pos >= len(self.source):
                    break

                self.tokens.append(self._next_token())

            except LexerError as e:
                self.errors.append(e)
                # Resume after the character that could not be classified
                if self.pos == e.span.start:
                    self._advance()

        self.tokens.append(Token(TokenType.EOF, "", None, self._span_from(self.pos, self.line, self.column)))

        logger.debug("%s: %d tokens, %d errors", self.filename, len(self.tokens), len(self.errors))
        return self.tokens

    def _next_token(self) -> Token:
        """Get the next token from the source."""
        start_pos = self.pos
        start_line = self.line
        start_column = self.column

        current_char = self.source[self.pos]

        match = self._integer_pattern.match(self.source, self.pos)
        if match:
            lexeme = match.group(0)
            self._advance_by(len(lexeme))
            return Token(TokenType.INTEGER, lexeme, lexeme,
                         self._span_from(start_pos, start_line, start_column))

        if current_char.isalpha() or current_char == '_':
            match = self._identifier_pattern.match(self.source, self.pos)
            if match:
                lexeme = match.group(0)
                self._advance_by(len(lexeme))
                token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
                value = lexeme if token_type == TokenType.IDENTIFIER else None
                return Token(token_type, lexeme, value,
                             self._span_from(start_pos, start_line, start_column))

        if current_char == '"':
            return self._tokenize_string(start_pos, start_line, start_column)

        if current_char in PUNCTUATION:
            token_type, delimiter = PUNCTUATION[current_char]
            self._advance()
            return Token(token_type, current_char, delimiter,
                         self._span_from(start_pos, start_line, start_column))

        raise create_unexpected_character_error(
            current_char,
            SourceSpan(start_pos, start_pos + 1, self.filename, start_line, start_column)
        )

    def _tokenize_string(self, start_pos: int, line: int, column: int) -> Token:
        """Tokenize a string literal, decoding escape sequences."""
        self._advance()  # Skip opening quote
        value_parts = []

        while self.pos < len(self.source) and self.source[self.pos] != '"':
            if self.source[self.pos] == '\\':
                if self.pos + 1 >= len(self.source):
                    break
                self._advance()  # Skip backslash
                value_parts.append(self._handle_escape_sequence())
            else:
                value_parts.append(self.source[self.pos])
                self._advance()

        if self.pos >= len(self.source) or self.source[self.pos] != '"':
            raise create_unterminated_string_error(self._span_from(start_pos, line, column))

        self._advance()  # Skip closing quote

        lexeme = self.source[start_pos:self.pos]
        return Token(TokenType.STRING, lexeme, ''.join(value_parts),
                     self._span_from(start_pos, line, column))

    def _handle_escape_sequence(self) -> str:
        """Decode the escape whose backslash was just consumed."""
        escape_char = self.source[self.pos]
        self._advance()

        if escape_char in self._escape_sequences:
            return self._escape_sequences[escape_char]

        digits = {'x': 2, 'u': 4}.get(escape_char)
        if digits is not None:
            hex_digits = self.source[self.pos:self.pos + digits]
            if len(hex_digits) == digits and all(c in '0123456789abcdefABCDEF' for c in hex_digits):
                self._advance_by(digits)
                return chr(int(hex_digits, 16))

        # Unknown escape: keep the escaped character
        return escape_char

    def _skip_whitespace_and_comments(self):
        """Skip whitespace and comments."""
        while self.pos < len(self.source):
            if self.source[self.pos].isspace():
                self._advance()
                continue

            # Line comments //
            if self.source.startswith('//', self.pos):
                while self.pos < len(self.source) and self.source[self.pos] != '\n':
                    self._advance()
                continue

            # Block comments /* */
            if self.source.startswith('/*', self.pos):
                end = self.source.find('*/', self.pos + 2)
                self._advance_by((end + 2 if end != -1 else len(self.source)) - self.pos)
                continue

            break

    def _span_from(self, start_pos: int, line: int, column: int) -> SourceSpan:
        return SourceSpan(start_pos, self.pos, self.filename, line, column)

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance_by(self, count: int):
        """Advance position by multiple characters."""
        for _ in range(count):
            self._advance()

    def has_errors(self) -> bool:
        """Check if lexer encountered any errors."""
        return len(self.errors) > 0


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        LexerError: If lexing fails
    """
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()

    if lexer.has_errors():
        # Raise the first error encountered
        raise lexer.errors[0]

    return tokens


def tokenize_file(filepath: str, encoding: Optional[str] = 'utf-8') -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        LexerError: If lexing fails
        OSError: If file cannot be read
    """
    with open(filepath, 'r', encoding=encoding) as f:
        source = f.read()

    return tokenize_string(source, filepath)
