class ImportRecord:
    """
    One scope imported by the main file and the line of its first import.
    """

    __slots__ = ("scope", "line", "is_module")

    def __init__(self, scope, line, is_module=False):
        self.scope = scope
        self.line = line
        self.is_module = is_module

    def __eq__(self, other):
        if not isinstance(other, ImportRecord):
            return NotImplemented
        return (self.scope, self.line, self.is_module) == (other.scope, other.line, other.is_module)

    def __repr__(self):
        kind = "module" if self.is_module else "header"
        return f"ImportRecord({self.scope!r}, line={self.line}, {kind})"


class ImportIndex:
    """
    Headers and modules imported by the main file. The first import of a
    scope wins; later imports of the same scope are ignored.
    """

    def __init__(self):
        self._records = {}

    def record(self, scope, line, is_module=False):
        if not scope or scope in self._records:
            return False
        self._records[scope] = ImportRecord(scope, line, is_module)
        return True

    def is_imported(self, scope):
        return scope in self._records

    def line_for(self, scope):
        record = self._records.get(scope)
        if record is None:
            return None
        return record.line

    def get(self, scope):
        return self._records.get(scope)

    def records(self):
        return list(self._records.values())

    def modules(self):
        return [r.scope for r in self._records.values() if r.is_module]

    def __len__(self):
        return len(self._records)
