import io
import unittest
from unittest import mock

import unused_imports
from analysis_context import AnalysisContext
from ast_parser import ParseObjCError
from events import DeclEvent, ImportEvent, UsageEvent
from symbols import SymbolKind


class ParseArgsTest(unittest.TestCase):
    def test_defaults(self):
        options = unused_imports.parse_args(["main.m"])
        self.assertEqual(options["files"], ["main.m"])
        self.assertFalse(options["debug_print"])
        self.assertIsNone(options["build_dir"])
        self.assertEqual(options["extra_args"], [])

    def test_flags_and_extra_compiler_args(self):
        options = unused_imports.parse_args(
            ["--debug-print", "main.m", "--", "-I", "include", "-DDEBUG=1"]
        )
        self.assertTrue(options["debug_print"])
        self.assertEqual(options["files"], ["main.m"])
        self.assertEqual(options["extra_args"], ["-I", "include", "-DDEBUG=1"])

    def test_missing_file_is_a_usage_error(self):
        with self.assertRaises(unused_imports.UsageError):
            unused_imports.parse_args(["--debug-print"])

    def test_unknown_option_is_a_usage_error(self):
        with self.assertRaises(unused_imports.UsageError):
            unused_imports.parse_args(["--fix", "main.m"])

    def test_missing_build_dir_value(self):
        with self.assertRaises(unused_imports.UsageError):
            unused_imports.parse_args(["main.m", "-p"])

    def test_main_returns_2_on_usage_error(self):
        with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
            status = unused_imports.main([])
        self.assertEqual(status, 2)
        self.assertIn("Usage:", err.getvalue())


class RunFileTest(unittest.TestCase):
    def test_parse_failure_is_surfaced(self):
        out = io.StringIO()
        err = io.StringIO()
        with mock.patch.object(
            unused_imports, "parse_objc_file", side_effect=ParseObjCError("Input file does not exist: x.m")
        ):
            status = unused_imports.run_file("x.m", out=out, err=err)

        self.assertEqual(status, 1)
        self.assertEqual(out.getvalue(), "")
        self.assertIn("Failed to parse x.m", err.getvalue())

    def test_report_prints_warnings_and_dump(self):
        context = AnalysisContext("/src/main.m").apply_all(
            [
                ImportEvent("/src/Used.h", 1),
                ImportEvent("/src/Unused.h", 2),
                DeclEvent("/src/Used.h", SymbolKind.ENUM_CONSTANT_DECLARATION, "ColorRed"),
                UsageEvent(SymbolKind.ENUM_CONSTANT, "ColorRed"),
            ]
        ).freeze()

        out = io.StringIO()
        warnings = unused_imports.report(context, "main.m", out=out)
        self.assertEqual(warnings, ["main.m:2: warning: Unused import /src/Unused.h"])
        self.assertEqual(out.getvalue().splitlines(), warnings)

        verbose = io.StringIO()
        unused_imports.report(context, "main.m", debug_print=True, out=verbose)
        lines = verbose.getvalue().splitlines()
        self.assertIn("File: /src/Used.h", lines)
        self.assertLess(lines.index("Unused Imports:"), lines.index(warnings[0]))


if __name__ == "__main__":
    unittest.main()
