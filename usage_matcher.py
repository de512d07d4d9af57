from symbols import DECLARATION_KINDS, SymbolKind

# Receiver token the front-end uses for messages whose static type is unknown.
DYNAMIC_RECEIVER = "id"


def receiver_is_dynamic(owner):
    """
    A message sent to `id` may reach any class, so it counts as a use of
    every declaration with the same selector.
    """
    return owner == DYNAMIC_RECEIVER


class UsageMatcher:
    """
    Decides whether a declaration is used by the main file.

    Plain kinds match on (kind, name) only. Member kinds (methods,
    properties, protocol conformances) also compare the declaring classes
    with the receiver classes recorded at the use site, walking the class
    hierarchy since a call through a subclass can land on an ancestor.
    """

    def __init__(self, hierarchy):
        self.hierarchy = hierarchy
        self._rules = {
            SymbolKind.CLASS_DECLARATION: self._plain(SymbolKind.CLASS, SymbolKind.TYPE),
            SymbolKind.TYPEDEF_DECLARATION: self._plain(SymbolKind.TYPE),
            SymbolKind.STRUCT_DECLARATION: self._plain(SymbolKind.STRUCT),
            SymbolKind.VARIABLE_DECLARATION: self._plain(SymbolKind.VARIABLE),
            SymbolKind.FUNCTION_DECLARATION: self._plain(SymbolKind.FUNCTION),
            SymbolKind.ENUM_DECLARATION: self._plain(SymbolKind.ENUM),
            SymbolKind.ENUM_CONSTANT_DECLARATION: self._plain(SymbolKind.ENUM_CONSTANT),
            SymbolKind.PROTOCOL_DECLARATION: self._plain(SymbolKind.PROTOCOL, SymbolKind.TYPE),
            SymbolKind.MACRO_DEFINITION: self._plain(SymbolKind.MACRO),
            SymbolKind.CATEGORY_DECLARATION: self._plain(SymbolKind.CATEGORY),
            SymbolKind.METHOD_DECLARATION: self._with_class(SymbolKind.METHOD),
            SymbolKind.PROPERTY_DECLARATION: self._property_used,
            SymbolKind.PROTOCOL_CONFORMANCE_DECLARATION: self._with_class(SymbolKind.PROTOCOL_CONFORMANCE),
        }
        missing = DECLARATION_KINDS - set(self._rules)
        if missing:
            raise ValueError(f"No usage rule for: {sorted(k.value for k in missing)}")

    def _plain(self, *usage_kinds):
        def rule(symbol, main_symbols):
            return any(main_symbols.contains(kind, symbol.name) for kind in usage_kinds)

        return rule

    def _with_class(self, usage_kind):
        def rule(symbol, main_symbols):
            return self.match_with_class(symbol, usage_kind, main_symbols)

        return rule

    def _property_used(self, symbol, main_symbols):
        # Accessors can be sent as plain messages ([obj name], [obj setName:]),
        # so a property also counts as used through a method use of its name.
        if self.match_with_class(symbol, SymbolKind.PROPERTY, main_symbols):
            return True
        return self.match_with_class(symbol, SymbolKind.METHOD, main_symbols)

    def match_with_class(self, symbol, usage_kind, main_symbols):
        usage = main_symbols.find(usage_kind, symbol.name)
        if usage is None:
            return False
        if not symbol.owners or not usage.owners:
            return False

        for declaring_class in symbol.owners:
            for receiver_class in usage.owners:
                if receiver_is_dynamic(receiver_class):
                    return True
                if self.hierarchy.is_same_or_subclass(declaring_class, receiver_class):
                    return True
        return False

    def symbol_used(self, symbol, main_symbols):
        rule = self._rules.get(symbol.kind)
        if rule is None:
            # Usage facts recorded in a header say nothing about the main file.
            return False
        return rule(symbol, main_symbols)

    def any_symbol_used(self, scope_symbols, main_symbols):
        for symbol in scope_symbols:
            if self.symbol_used(symbol, main_symbols):
                return True
        return False
