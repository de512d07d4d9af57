import logging

from clang.cindex import CursorKind

from base_rule import ScopedRule
from events import ImportEvent
from scope_resolver import MODULE

logger = logging.getLogger(__name__)


def top_level_module(name):
    return name.split(".", 1)[0] if name else name


class ImportRule(ScopedRule):
    """
    Records every #import/#include directive and @import declaration
    written in the main file, with the line it appears on.
    """

    _KINDS = {CursorKind.INCLUSION_DIRECTIVE, CursorKind.MODULE_IMPORT_DECL}

    def matches(self, node):
        return node.get("kind") in self._KINDS and self.in_main(node)

    def _included_path(self, node):
        cursor = node.get("cursor")
        try:
            included = cursor.get_included_file()
        except Exception as exc:
            logger.debug("Unresolved inclusion '%s' on line %s: %s", node.get("name"), node.get("line"), exc)
            return None
        if included is None:
            return None
        return included.name

    def apply(self, node):
        line = node.get("line")

        if node.get("kind") == CursorKind.MODULE_IMPORT_DECL:
            module = top_level_module(node.get("name"))
            if not module:
                return None
            return [ImportEvent(module, line, is_module=True)]

        path = self._included_path(node)
        if not path:
            logger.debug("Skipping unresolved inclusion '%s' on line %s", node.get("name"), line)
            return None
        scope = self.resolver.resolve_import(path)
        if scope is None:
            return None
        return [ImportEvent(scope.key, line, is_module=scope.role == MODULE)]
