from symbols import Symbol

class SymbolSet:
    """
    The facts recorded for one file scope, at most one per (kind, name).
    """

    def __init__(self):
        self._symbols = {}

    def add(self, symbol, owner=None):
        existing = self._symbols.get(symbol.key)
        if existing is None:
            existing = Symbol(symbol.kind, symbol.name, symbol.owners)
            self._symbols[symbol.key] = existing
        if owner:
            existing.owners.add(owner)
        return existing

    def find(self, kind, name):
        return self._symbols.get((kind, name))

    def contains(self, kind, name):
        return (kind, name) in self._symbols

    def __contains__(self, symbol):
        return symbol.key in self._symbols

    def __iter__(self):
        return iter(self._symbols.values())

    def __len__(self):
        return len(self._symbols)

    def __repr__(self):
        return f"SymbolSet({list(self._symbols.values())!r})"

class SymbolRegistry:
    """
    Per-scope symbol sets. Inserting a symbol that is already present only
    merges its owner into the existing entry.
    """

    def __init__(self):
        self._scopes = {}

    def insert(self, scope, symbol, owner=None):
        symbols = self._scopes.get(scope)
        if symbols is None:
            symbols = SymbolSet()
            self._scopes[scope] = symbols
        return symbols.add(symbol, owner)

    def get(self, scope):
        symbols = self._scopes.get(scope)
        return symbols if symbols is not None else SymbolSet()

    def has_scope(self, scope):
        return scope in self._scopes

    def scopes(self):
        return list(self._scopes)

    def items(self):
        return list(self._scopes.items())
