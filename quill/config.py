"""
Front-end configuration.

Holds the options shared by the lexer/parser drivers and the command line.
The grammar itself takes no options; these only affect how source text is
read and how much of it is accepted.
"""

import os
from dataclasses import dataclass

DEFAULT_MAX_SOURCE_BYTES = 1024 * 1024


class SourceTooLargeError(ValueError):
    """Raised before lexing when a source exceeds ``max_source_bytes``."""

    def __init__(self, filename: str, size: int, limit: int):
        super().__init__(f"{filename}: source is {size} bytes, limit is {limit} bytes")
        self.filename = filename
        self.size = size
        self.limit = limit


@dataclass
class FrontendConfig:
    """
    Options for reading and parsing Quill sources.

    Attributes:
        filename:           Name reported in diagnostics for in-memory sources.
        max_source_bytes:   Reject sources larger than this (UTF-8 bytes); 0 disables.
        log_level:          Level name for the ``quill`` logger, e.g. "WARNING".
        encoding:           Encoding used when reading source files.
    """
    filename: str = "<string>"
    max_source_bytes: int = DEFAULT_MAX_SOURCE_BYTES
    log_level: str = "WARNING"
    encoding: str = "utf-8"

    @classmethod
    def from_env(cls, environ=None) -> 'FrontendConfig':
        """Build a config, overriding defaults from QUILL_* environment variables."""
        environ = os.environ if environ is None else environ
        config = cls()
        if environ.get("QUILL_MAX_SOURCE_BYTES"):
            try:
                config.max_source_bytes = int(environ["QUILL_MAX_SOURCE_BYTES"])
            except ValueError:
                raise ValueError(
                    f"QUILL_MAX_SOURCE_BYTES must be an integer, got {environ['QUILL_MAX_SOURCE_BYTES']!r}"
                ) from None
        if environ.get("QUILL_LOG_LEVEL"):
            config.log_level = environ["QUILL_LOG_LEVEL"].upper()
        return config

    def check_source_size(self, source: str, filename: str) -> None:
        """Raise SourceTooLargeError when the guard is on and ``source`` is too big."""
        if self.max_source_bytes <= 0:
            return
        size = len(source.encode(self.encoding, errors="replace"))
        if size > self.max_source_bytes:
            raise SourceTooLargeError(filename, size, self.max_source_bytes)
