from symbols import Symbol, SymbolKind


class MacroIndex:
    """
    Records macro definitions and expansions into a SymbolRegistry.

    Precompiled modules are not re-lexed, so their macro definitions are
    never seen as header text. An expansion whose current definition is
    owned by a module therefore also records the definition under that
    module's name.
    """

    def __init__(self, registry):
        self.registry = registry

    def define(self, scope, name):
        if not scope or not name:
            return None
        return self.registry.insert(scope, Symbol(SymbolKind.MACRO_DEFINITION, name))

    def expand(self, main_scope, name, owning_module=None):
        if not name:
            return None
        usage = self.registry.insert(main_scope, Symbol(SymbolKind.MACRO, name))
        if owning_module:
            self.define(owning_module, name)
        return usage
