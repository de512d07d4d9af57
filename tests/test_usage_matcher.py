import unittest

from class_hierarchy import ClassHierarchyIndex
from symbol_registry import SymbolRegistry
from symbols import DECLARATION_KINDS, Symbol, SymbolKind
from usage_matcher import UsageMatcher

PLAIN_PAIRS = [
    (SymbolKind.CLASS_DECLARATION, SymbolKind.CLASS),
    (SymbolKind.CLASS_DECLARATION, SymbolKind.TYPE),
    (SymbolKind.TYPEDEF_DECLARATION, SymbolKind.TYPE),
    (SymbolKind.STRUCT_DECLARATION, SymbolKind.STRUCT),
    (SymbolKind.VARIABLE_DECLARATION, SymbolKind.VARIABLE),
    (SymbolKind.FUNCTION_DECLARATION, SymbolKind.FUNCTION),
    (SymbolKind.ENUM_DECLARATION, SymbolKind.ENUM),
    (SymbolKind.ENUM_CONSTANT_DECLARATION, SymbolKind.ENUM_CONSTANT),
    (SymbolKind.PROTOCOL_DECLARATION, SymbolKind.PROTOCOL),
    (SymbolKind.PROTOCOL_DECLARATION, SymbolKind.TYPE),
    (SymbolKind.MACRO_DEFINITION, SymbolKind.MACRO),
    (SymbolKind.CATEGORY_DECLARATION, SymbolKind.CATEGORY),
]

MEMBER_PAIRS = [
    (SymbolKind.METHOD_DECLARATION, SymbolKind.METHOD),
    (SymbolKind.PROPERTY_DECLARATION, SymbolKind.PROPERTY),
    (SymbolKind.PROPERTY_DECLARATION, SymbolKind.METHOD),
    (SymbolKind.PROTOCOL_CONFORMANCE_DECLARATION, SymbolKind.PROTOCOL_CONFORMANCE),
]


class UsageMatcherTest(unittest.TestCase):
    def setUp(self):
        self.hierarchy = ClassHierarchyIndex()
        self.matcher = UsageMatcher(self.hierarchy)
        self.registry = SymbolRegistry()

    def _declare(self, kind, name, owner=None):
        self.registry.insert("H.h", Symbol(kind, name), owner)

    def _use(self, kind, name, owner=None):
        self.registry.insert("main.m", Symbol(kind, name), owner)

    def _header_used(self):
        return self.matcher.any_symbol_used(self.registry.get("H.h"), self.registry.get("main.m"))

    def test_every_declaration_kind_has_a_rule(self):
        for kind in DECLARATION_KINDS:
            # Raises for a kind with no rule; unmatched plain lookups are just False.
            self.assertFalse(self.matcher.symbol_used(Symbol(kind, "x"), SymbolRegistry().get("main.m")))

    def test_plain_declarations_match_their_usage_kind(self):
        for decl_kind, usage_kind in PLAIN_PAIRS:
            with self.subTest(decl=decl_kind.value, usage=usage_kind.value):
                registry = SymbolRegistry()
                registry.insert("H.h", Symbol(decl_kind, "x"))
                registry.insert("main.m", Symbol(usage_kind, "x"))
                self.assertTrue(self.matcher.any_symbol_used(registry.get("H.h"), registry.get("main.m")))

    def test_member_declarations_match_their_usage_kind(self):
        for decl_kind, usage_kind in MEMBER_PAIRS:
            with self.subTest(decl=decl_kind.value, usage=usage_kind.value):
                registry = SymbolRegistry()
                registry.insert("H.h", Symbol(decl_kind, "x"), "Foo")
                registry.insert("main.m", Symbol(usage_kind, "x"), "Foo")
                self.assertTrue(self.matcher.any_symbol_used(registry.get("H.h"), registry.get("main.m")))

    def test_plain_match_needs_the_right_usage_kind(self):
        self._declare(SymbolKind.TYPEDEF_DECLARATION, "Handle")
        self._use(SymbolKind.CLASS, "Handle")
        self.assertFalse(self._header_used())

    def test_method_called_on_id_is_used(self):
        self._declare(SymbolKind.METHOD_DECLARATION, "foo", "Base")
        self._use(SymbolKind.METHOD, "foo", "id")
        self.assertTrue(self._header_used())

    def test_method_called_on_subclass_is_used(self):
        self.hierarchy.record("Derived", "Base")
        self._declare(SymbolKind.METHOD_DECLARATION, "foo", "Base")
        self._use(SymbolKind.METHOD, "foo", "Derived")
        self.assertTrue(self._header_used())

    def test_method_called_on_unrelated_class_is_unused(self):
        self._declare(SymbolKind.METHOD_DECLARATION, "foo", "Base")
        self._use(SymbolKind.METHOD, "foo", "Unrelated")
        self.assertFalse(self._header_used())

    def test_method_called_on_superclass_is_unused(self):
        self.hierarchy.record("Derived", "Base")
        self._declare(SymbolKind.METHOD_DECLARATION, "foo", "Derived")
        self._use(SymbolKind.METHOD, "foo", "Base")
        self.assertFalse(self._header_used())

    def test_class_match_is_existential_over_both_owner_sets(self):
        self.hierarchy.record("Derived", "Base")
        self._declare(SymbolKind.METHOD_DECLARATION, "foo", "Other")
        self._declare(SymbolKind.METHOD_DECLARATION, "foo", "Base")
        self._use(SymbolKind.METHOD, "foo", "Unrelated")
        self._use(SymbolKind.METHOD, "foo", "Derived")
        self.assertTrue(self._header_used())

    def test_member_usage_without_owner_does_not_match(self):
        self._declare(SymbolKind.METHOD_DECLARATION, "foo", "Base")
        self._use(SymbolKind.METHOD, "foo")
        self.assertFalse(self._header_used())

    def test_property_used_through_accessor_message(self):
        self._declare(SymbolKind.PROPERTY_DECLARATION, "title", "View")
        self._use(SymbolKind.METHOD, "title", "View")
        self.assertTrue(self._header_used())

    def test_property_not_used_through_setter_selector(self):
        self._declare(SymbolKind.PROPERTY_DECLARATION, "title", "View")
        self._use(SymbolKind.METHOD, "setTitle:", "View")
        self.assertFalse(self._header_used())

    def test_protocol_conformance_matches_subclass_argument(self):
        self.hierarchy.record("Cell", "View")
        self._declare(SymbolKind.PROTOCOL_CONFORMANCE_DECLARATION, "Drawable", "View")
        self._use(SymbolKind.PROTOCOL_CONFORMANCE, "Drawable", "Cell")
        self.assertTrue(self._header_used())

    def test_one_used_symbol_is_enough(self):
        self._declare(SymbolKind.FUNCTION_DECLARATION, "a")
        self._declare(SymbolKind.FUNCTION_DECLARATION, "b")
        self._declare(SymbolKind.STRUCT_DECLARATION, "c")
        self._use(SymbolKind.FUNCTION, "b")
        self.assertTrue(self._header_used())

    def test_usage_facts_in_a_header_are_ignored(self):
        self._declare(SymbolKind.FUNCTION, "a")
        self._use(SymbolKind.FUNCTION, "a")
        self.assertFalse(self._header_used())


if __name__ == "__main__":
    unittest.main()
