from clang.cindex import CursorKind

from base_rule import ScopedRule
from events import DeclEvent, MacroExpansionEvent
from scope_resolver import HEADER, MODULE
from symbols import SymbolKind


class MacroRule(ScopedRule):
    """
    Macro definitions in headers reachable from the main file, and macro
    expansions inside the main file.

    Module headers are not lexed again, so a macro from a module is only
    visible through the definition an expansion resolves to.
    """

    _KINDS = {CursorKind.MACRO_DEFINITION, CursorKind.MACRO_INSTANTIATION}

    def matches(self, node):
        return node.get("kind") in self._KINDS and bool(node.get("name"))

    def _owning_module(self, node):
        try:
            definition = node.get("cursor").referenced
        except Exception:
            return None
        if definition is None or definition.location.file is None:
            return None
        scope = self.resolver.resolve(definition.location.file.name)
        if scope is None or scope.role != MODULE:
            return None
        return scope.key

    def apply(self, node):
        name = node.get("name")

        if node.get("kind") == CursorKind.MACRO_DEFINITION:
            scope = self.scope_of(node)
            if scope is None or scope.role != HEADER:
                return None
            return [DeclEvent(scope.key, SymbolKind.MACRO_DEFINITION, name)]

        if not self.in_main(node):
            return None
        return [MacroExpansionEvent(name, self._owning_module(node))]
