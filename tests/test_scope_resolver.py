import os
import tempfile
import textwrap
import unittest
from pathlib import Path

from scope_resolver import HEADER, MAIN, MODULE, ScopeResolver, framework_module_name


class ScopeResolverTest(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(os.path.realpath(self._tmp.name))
        self.main = self._touch("main.m")
        self.direct = self._touch("Direct.h")
        self.nested = self._touch("Nested.h")
        self.stray = self._touch("Stray.h")

    def tearDown(self):
        self._tmp.cleanup()

    def _touch(self, rel, text=""):
        path = self.root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text), encoding="utf-8")
        return str(path)

    def _resolver(self, inclusions=None):
        if inclusions is None:
            inclusions = [(self.main, self.direct), (self.direct, self.nested)]
        return ScopeResolver(self.main, inclusions)

    def test_main_file(self):
        self.assertEqual(self._resolver().resolve(self.main), (MAIN, self.main))

    def test_transitively_included_headers_are_textual(self):
        resolver = self._resolver()
        self.assertEqual(resolver.resolve(self.direct), (HEADER, self.direct))
        self.assertEqual(resolver.resolve(self.nested), (HEADER, self.nested))

    def test_inclusions_not_reachable_from_main_are_ignored(self):
        other = self._touch("Other.m")
        resolver = self._resolver([(other, self.stray)])
        self.assertIsNone(resolver.resolve(self.stray))

    def test_unknown_file_is_dropped(self):
        self.assertIsNone(self._resolver().resolve(self.stray))
        self.assertIsNone(self._resolver().resolve(None))

    def test_framework_header_belongs_to_framework_module(self):
        header = self._touch("Frameworks/MyKit.framework/Headers/MKView.h")
        self.assertEqual(self._resolver().resolve(header), (MODULE, "MyKit"))

    def test_outermost_framework_is_the_module(self):
        path = os.sep.join(["", "SDK", "UIKit.framework", "Frameworks", "Sub.framework", "Headers", "A.h"])
        self.assertEqual(framework_module_name(path), "UIKit")
        self.assertIsNone(framework_module_name("/usr/include/stdio.h"))

    def test_module_map_names_module(self):
        self._touch(
            "deps/geometry/module.modulemap",
            """
            module Geometry {
                header "Point.h"
                export *
            }
            """,
        )
        header = self._touch("deps/geometry/include/Point.h")
        resolver = self._resolver()
        self.assertEqual(resolver.resolve(header), (MODULE, "Geometry"))

    def test_textual_inclusion_wins_over_module_map(self):
        self._touch("lib/module.modulemap", "module Lib { header \"Lib.h\" }\n")
        header = self._touch("lib/Lib.h")
        resolver = self._resolver([(self.main, header)])
        self.assertEqual(resolver.resolve(header), (HEADER, header))

    def test_import_of_module_header_resolves_to_module(self):
        header = self._touch("Frameworks/MyKit.framework/Headers/MyKit.h")
        resolver = self._resolver()
        self.assertEqual(resolver.resolve_import(header), (MODULE, "MyKit"))
        self.assertEqual(resolver.resolve_import(self.direct), (HEADER, self.direct))


if __name__ == "__main__":
    unittest.main()
