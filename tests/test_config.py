"""
Configuration and logging setup tests for Quill.
"""

import io
import logging
import unittest
import sys
import os
import tempfile

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from quill.config import FrontendConfig, SourceTooLargeError, DEFAULT_MAX_SOURCE_BYTES
import quill.log
from quill.log import configure_logging, verbosity_to_level
from quill.parser import parse_string, parse_file, Item, StructKind


class TestFrontendConfig(unittest.TestCase):
    """Test front-end options."""

    def test_defaults(self):
        config = FrontendConfig()
        self.assertEqual(config.max_source_bytes, DEFAULT_MAX_SOURCE_BYTES)
        self.assertEqual(config.log_level, "WARNING")
        self.assertEqual(config.filename, "<string>")

    def test_from_env(self):
        config = FrontendConfig.from_env({
            "QUILL_MAX_SOURCE_BYTES": "2048",
            "QUILL_LOG_LEVEL": "debug",
        })
        self.assertEqual(config.max_source_bytes, 2048)
        self.assertEqual(config.log_level, "DEBUG")

        self.assertEqual(FrontendConfig.from_env({}), FrontendConfig())

    def test_from_env_rejects_bad_integer(self):
        with self.assertRaises(ValueError) as ctx:
            FrontendConfig.from_env({"QUILL_MAX_SOURCE_BYTES": "lots"})
        self.assertIn("QUILL_MAX_SOURCE_BYTES", str(ctx.exception))

    def test_source_size_guard(self):
        config = FrontendConfig(max_source_bytes=5)
        with self.assertRaises(SourceTooLargeError) as ctx:
            parse_string("struct Foo;", config=config)
        self.assertEqual(ctx.exception.size, 11)
        self.assertEqual(ctx.exception.limit, 5)
        self.assertEqual(ctx.exception.filename, "<string>")

    def test_size_is_measured_in_bytes(self):
        source = "/*é*/"
        config = FrontendConfig(max_source_bytes=len(source))
        with self.assertRaises(SourceTooLargeError):
            config.check_source_size(source, "accent.ql")

    def test_zero_disables_guard(self):
        config = FrontendConfig(max_source_bytes=0)
        self.assertEqual(parse_string("struct Foo;" * 10, config=config)[9].ident, "Foo")

    def test_filename_from_config(self):
        config = FrontendConfig(filename="memory.ql")
        items = parse_string("struct Foo;", config=config)
        self.assertEqual(items[0].span.filename, "memory.ql")

    def test_parse_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "unit.ql")
            with open(path, 'w', encoding='utf-8') as f:
                f.write("struct Unit;\n")
            items = parse_file(path)
        self.assertEqual(items, [Item("Unit", StructKind(None, None))])
        self.assertEqual(items[0].span.filename, path)


class TestLoggingSetup(unittest.TestCase):
    """Test logging configuration for entry points."""

    def setUp(self):
        self._reset()

    def tearDown(self):
        self._reset()

    def _reset(self):
        logger = logging.getLogger("quill")
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
        quill.log._handler = None

    def test_handlers_do_not_stack(self):
        configure_logging("INFO", stream=io.StringIO())
        configure_logging("DEBUG", stream=io.StringIO())
        logger = logging.getLogger("quill")
        self.assertEqual(logger.handlers, [quill.log._handler])
        self.assertEqual(logger.level, logging.DEBUG)

    def test_parser_debug_output(self):
        stream = io.StringIO()
        configure_logging(logging.DEBUG, stream=stream)
        parse_string("struct Foo;")
        self.assertIn("quill.parser.parser: parsed 1 items", stream.getvalue())

    def test_unknown_level(self):
        with self.assertRaises(ValueError):
            configure_logging("LOUD", stream=io.StringIO())

    def test_verbosity_to_level(self):
        self.assertEqual(verbosity_to_level(0), logging.WARNING)
        self.assertEqual(verbosity_to_level(1), logging.INFO)
        self.assertEqual(verbosity_to_level(2), logging.DEBUG)
        self.assertEqual(verbosity_to_level(5), logging.DEBUG)


if __name__ == '__main__':
    unittest.main()
