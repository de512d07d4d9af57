import logging

from class_hierarchy import ClassHierarchyIndex
from events import DeclEvent, ImportEvent, MacroExpansionEvent, SuperclassEvent, UsageEvent
from import_index import ImportIndex
from macro_index import MacroIndex
from symbol_registry import SymbolRegistry
from symbols import Symbol, SymbolKind, is_declaration

logger = logging.getLogger(__name__)


class AnalysisFrozenError(RuntimeError):
    pass


class AnalysisContext:
    """
    All facts gathered for one main file.

    Events are applied while the front-end walks the translation unit.
    After freeze() the context is read-only and only used for reporting.
    """

    def __init__(self, main_scope):
        self.main_scope = main_scope
        self.registry = SymbolRegistry()
        self.hierarchy = ClassHierarchyIndex()
        self.imports = ImportIndex()
        self.macros = MacroIndex(self.registry)
        self.frozen = False

    def apply(self, event):
        if self.frozen:
            raise AnalysisFrozenError(f"Cannot apply {event!r}: analysis context is frozen")

        if isinstance(event, DeclEvent):
            self._apply_decl(event)
        elif isinstance(event, UsageEvent):
            self._apply_usage(event)
        elif isinstance(event, ImportEvent):
            self.imports.record(event.scope, event.line, event.is_module)
        elif isinstance(event, SuperclassEvent):
            self.hierarchy.record(event.subclass, event.superclass)
        elif isinstance(event, MacroExpansionEvent):
            self.macros.expand(self.main_scope, event.name, event.owning_module)
        else:
            raise TypeError(f"Unknown analysis event: {event!r}")

    def apply_all(self, events):
        for event in events:
            self.apply(event)
        return self

    def _apply_decl(self, event):
        if not event.scope or not event.name:
            logger.debug("Dropping declaration without scope or name: %r", event)
            return
        if event.kind == SymbolKind.MACRO_DEFINITION:
            self.macros.define(event.scope, event.name)
            return
        self.registry.insert(event.scope, Symbol(event.kind, event.name), event.owner)

    def _apply_usage(self, event):
        if not event.name:
            return
        if is_declaration(event.kind):
            raise ValueError(f"Usage event with declaration kind: {event!r}")
        if event.kind == SymbolKind.MACRO:
            self.macros.expand(self.main_scope, event.name)
            return
        self.registry.insert(self.main_scope, Symbol(event.kind, event.name), event.owner)

    def freeze(self):
        self.frozen = True
        return self

    def main_symbols(self):
        return self.registry.get(self.main_scope)
