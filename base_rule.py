from events import DeclEvent, UsageEvent
from scope_resolver import MAIN


class BaseRule:
    def matches(self, node):
        raise NotImplementedError("matches() must be implemented")

    def apply(self, node):
        raise NotImplementedError("apply() must be implemented")

    def finalize(self):
        """
        Optional hook for rules that need a full-AST pass before emitting events.
        """
        return []


class ScopedRule(BaseRule):
    """
    Base for rules that attribute facts to the scope a cursor comes from.
    """

    def __init__(self, resolver):
        self.resolver = resolver

    def scope_of(self, node):
        return self.resolver.resolve(node.get("path") or node.get("file"))

    def in_main(self, node):
        scope = self.scope_of(node)
        return scope is not None and scope.role == MAIN

    def declaration(self, node, kind, name, owner=None):
        """
        A declaration made outside the main file, or None when it comes
        from the main file itself or from nowhere we can attribute.
        """
        scope = self.scope_of(node)
        if scope is None or scope.role == MAIN or not name:
            return None
        return DeclEvent(scope.key, kind, name, owner)

    def usage(self, node, kind, name, owner=None):
        if not name or not self.in_main(node):
            return None
        return UsageEvent(kind, name, owner)
