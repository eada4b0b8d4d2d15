"""
Command line driver for the Quill front end.

    quill FILE...            print one line per parsed item
    quill --json FILE...     print the AST as JSON
    quill --tokens FILE...   print the token stream
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import FrontendConfig, SourceTooLargeError
from .lexer import LexerError, tokenize_string
from .log import configure_logging, verbosity_to_level
from .parser import ParseError, Parser, program_to_dict

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SYNTAX_ERROR = 1
EXIT_USAGE = 2


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quill",
        description="Lex and parse Quill source files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    quill shapes.ql                 # One line per struct/func
    quill --json shapes.ql          # AST as JSON
    quill --tokens shapes.ql        # Token stream
        """
    )
    parser.add_argument('files', nargs='+', metavar='FILE',
                        help='Quill source files to parse')
    output = parser.add_mutually_exclusive_group()
    output.add_argument('--json', action='store_true',
                        help='Print the parsed items as JSON')
    output.add_argument('--tokens', action='store_true',
                        help='Print the token stream instead of parsing')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Log progress (-v) or debug traces (-vv)')
    parser.add_argument('--max-bytes', type=int, default=None,
                        help='Reject sources larger than this many bytes (0 disables)')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def process_file(path: str, args: argparse.Namespace, config: FrontendConfig) -> Optional[object]:
    """
    Lex and parse one file, printing its output.

    Returns the JSON payload for --json, else None. Lexer and parser errors
    propagate to the caller.
    """
    logger.info("Parsing %s", path)
    with open(path, 'r', encoding=config.encoding) as f:
        source = f.read()
    config.check_source_size(source, path)

    if args.tokens:
        for token in tokenize_string(source, path):
            print(f"{token.span}\t{token}")
        return None

    items = Parser.from_source(source, path).parse()
    logger.info("%s: %d items", path, len(items))
    if args.json:
        return {"file": path, "items": program_to_dict(items)}
    for item in items:
        print(item)
    return None


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the quill command."""
    args = build_arg_parser().parse_args(argv)

    try:
        config = FrontendConfig.from_env()
    except ValueError as e:
        print(f"quill: {e}", file=sys.stderr)
        return EXIT_USAGE
    if args.max_bytes is not None:
        config.max_source_bytes = args.max_bytes
    level = verbosity_to_level(args.verbose) if args.verbose else config.log_level
    configure_logging(level)

    status = EXIT_OK
    results = []
    for path in args.files:
        try:
            result = process_file(path, args, config)
        except OSError as e:
            print(f"quill: cannot read {path}: {e.strerror or e}", file=sys.stderr)
            status = max(status, EXIT_USAGE)
            continue
        except SourceTooLargeError as e:
            print(f"quill: {e}", file=sys.stderr)
            status = max(status, EXIT_SYNTAX_ERROR)
            continue
        except (LexerError, ParseError) as e:
            print(str(e), end="", file=sys.stderr)
            status = max(status, EXIT_SYNTAX_ERROR)
            continue
        if result is not None:
            results.append(result)

    if args.json:
        print(json.dumps(results, indent=2))
    return status


if __name__ == "__main__":
    sys.exit(main())
