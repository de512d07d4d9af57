from symbols import display_name
from usage_matcher import UsageMatcher

HEADER_SUFFIXES = (".h", ".hh", ".hpp")


class UnusedImport:
    __slots__ = ("scope", "line")

    def __init__(self, scope, line):
        self.scope = scope
        self.line = line

    def __eq__(self, other):
        if not isinstance(other, UnusedImport):
            return NotImplemented
        return (self.scope, self.line) == (other.scope, other.line)

    def __repr__(self):
        return f"UnusedImport({self.scope!r}, line={self.line})"


class UnusedImportReporter:
    """
    Final pass over the imported headers and modules of a frozen context.

    A scope is unused when none of its declarations matches a use in the
    main file. Diagnostics point at the main file's own import line.
    """

    def __init__(self, context, main_file, header_suffixes=HEADER_SUFFIXES):
        self.context = context
        self.main_file = main_file
        self.header_suffixes = tuple(header_suffixes)
        self.matcher = UsageMatcher(context.hierarchy)

    def _is_candidate(self, record):
        if record.is_module:
            return True
        return record.scope.endswith(self.header_suffixes)

    def candidates(self):
        return [r for r in self.context.imports.records() if self._is_candidate(r)]

    def unused_imports(self):
        main_symbols = self.context.main_symbols()
        unused = []
        for record in self.candidates():
            if record.scope == self.context.main_scope:
                continue
            scope_symbols = self.context.registry.get(record.scope)
            if not self.matcher.any_symbol_used(scope_symbols, main_symbols):
                unused.append(UnusedImport(record.scope, record.line))
        unused.sort(key=lambda u: (u.line if isinstance(u.line, int) else 10**9, u.scope))
        return unused

    def format_warning(self, unused):
        return f"{self.main_file}:{unused.line}: warning: Unused import {unused.scope}"

    def warnings(self):
        return [self.format_warning(u) for u in self.unused_imports()]

    def dump(self):
        lines = []
        for scope, symbols in sorted(self.context.registry.items(), key=lambda item: item[0]):
            lines.append(f"File: {scope}")
            for symbol in sorted(symbols, key=lambda s: (s.kind.value, s.name)):
                kind = display_name(symbol.kind)
                if symbol.owners:
                    for owner in sorted(symbol.owners):
                        lines.append(f"{kind}: {owner} {symbol.name}")
                else:
                    lines.append(f"{kind}: {symbol.name}")
            lines.append("")

        lines.append("")
        lines.append("Modules:")
        for module in sorted(self.context.imports.modules()):
            lines.append(module)
        lines.append("")
        lines.append("Unused Imports:")
        return lines
