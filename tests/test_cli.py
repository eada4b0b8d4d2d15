"""
Command line driver tests for Quill.
"""

import io
import json
import unittest
import sys
import os
import tempfile
from contextlib import redirect_stdout, redirect_stderr

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from quill.cli import main, EXIT_OK, EXIT_SYNTAX_ERROR, EXIT_USAGE


class TestCommandLine(unittest.TestCase):
    """Test the quill command."""

    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.tmp = self._tmpdir.name

    def tearDown(self):
        self._tmpdir.cleanup()

    def _write(self, name: str, source: str) -> str:
        path = os.path.join(self.tmp, name)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(source)
        return path

    def _run(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            status = main(list(argv))
        return status, out.getvalue(), err.getvalue()

    def test_prints_items(self):
        path = self._write("shapes.ql", "struct Pair<T> { a: T, b: T, }\nfunc add(a: i32, b: i32) {}\n")
        status, out, err = self._run(path)
        self.assertEqual(status, EXIT_OK)
        self.assertEqual(out.splitlines(), ["struct Pair<T> { a: T, b: T }", "func add(a: i32, b: i32)"])
        self.assertEqual(err, "")

    def test_json_output(self):
        path = self._write("unit.ql", "struct Unit;")
        status, out, _ = self._run("--json", path)
        self.assertEqual(status, EXIT_OK)
        self.assertEqual(
            json.loads(out),
            [{"file": path, "items": [
                {"node": "Item", "ident": "Unit",
                 "kind": {"node": "Struct", "generics": None, "fields": None}},
            ]}]
        )

    def test_token_output(self):
        path = self._write("tokens.ql", "struct Foo;")
        status, out, _ = self._run("--tokens", path)
        self.assertEqual(status, EXIT_OK)
        lines = out.splitlines()
        self.assertEqual(len(lines), 4)
        self.assertEqual(lines[0], f"{path}:1:1\tSTRUCT('struct')")
        self.assertEqual(lines[1], f"{path}:1:8\tIDENTIFIER('Foo')")

    def test_syntax_error(self):
        path = self._write("bad.ql", "struct Foo; ;")
        status, out, err = self._run(path)
        self.assertEqual(status, EXIT_SYNTAX_ERROR)
        self.assertEqual(out, "")
        self.assertIn("ERROR[P003]", err)
        self.assertIn(f"{path}:1:13", err)

    def test_lexer_error(self):
        path = self._write("lex.ql", "struct Foo$;")
        status, _, err = self._run(path)
        self.assertEqual(status, EXIT_SYNTAX_ERROR)
        self.assertIn("ERROR[L001]", err)

    def test_missing_file(self):
        status, _, err = self._run(os.path.join(self.tmp, "missing.ql"))
        self.assertEqual(status, EXIT_USAGE)
        self.assertIn("cannot read", err)

    def test_continues_after_a_failing_file(self):
        bad = self._write("bad.ql", "func f() { 1 }")
        good = self._write("good.ql", "func main() {}")
        status, out, _ = self._run(bad, good)
        self.assertEqual(status, EXIT_SYNTAX_ERROR)
        self.assertEqual(out.splitlines(), ["func main()"])

    def test_max_bytes(self):
        path = self._write("big.ql", "struct Foo;")
        status, _, err = self._run("--max-bytes", "4", path)
        self.assertEqual(status, EXIT_SYNTAX_ERROR)
        self.assertIn("limit is 4 bytes", err)

        status, _, _ = self._run("--max-bytes", "0", path)
        self.assertEqual(status, EXIT_OK)

    def test_json_and_tokens_are_exclusive(self):
        path = self._write("x.ql", "")
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main(["--json", "--tokens", path])
        self.assertEqual(ctx.exception.code, 2)


if __name__ == '__main__':
    unittest.main()
