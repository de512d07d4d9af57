import logging

from clang.cindex import CursorKind

from base_rule import ScopedRule
from objc_cursors import (
    IMPLEMENTATION_KINDS,
    class_name_of_container,
    enclosing_node,
    has_global_storage,
    is_file_level,
    is_static_local,
)
from symbols import SymbolKind
from type_names import owner_names
from usage_matcher import DYNAMIC_RECEIVER

logger = logging.getLogger(__name__)


def referenced_cursor(node):
    cursor = node.get("cursor")
    if cursor is None:
        return None
    try:
        return cursor.referenced
    except Exception:
        return None


class DeclRefRule(ScopedRule):
    """
    References to global variables, functions and enum constants.
    """

    _REFERENCE_KINDS = {
        CursorKind.FUNCTION_DECL: SymbolKind.FUNCTION,
        CursorKind.ENUM_CONSTANT_DECL: SymbolKind.ENUM_CONSTANT,
    }

    def matches(self, node):
        return node.get("kind") == CursorKind.DECL_REF_EXPR and self.in_main(node)

    def apply(self, node):
        referenced = referenced_cursor(node)
        if referenced is None or not referenced.spelling:
            return None

        kind = referenced.kind
        if kind == CursorKind.VAR_DECL:
            if not has_global_storage(referenced) or is_static_local(referenced):
                return None
            return [self.usage(node, SymbolKind.VARIABLE, referenced.spelling)]
        if kind in self._REFERENCE_KINDS:
            return [self.usage(node, self._REFERENCE_KINDS[kind], referenced.spelling)]
        if kind == CursorKind.PARM_DECL:
            return None

        logger.debug(
            "Unknown referenced declaration kind %s for '%s' on line %s",
            kind.name,
            referenced.spelling,
            node.get("line"),
        )
        return None


class TypeRefRule(ScopedRule):
    """
    Type names written in the main file: typedefs, tags, classes and
    protocols. File-level class and protocol references are forward
    declarations (@class Foo; @protocol Bar;) and need no import.
    """

    _TAG_KINDS = {
        CursorKind.TYPEDEF_DECL: SymbolKind.TYPE,
        CursorKind.STRUCT_DECL: SymbolKind.STRUCT,
        CursorKind.UNION_DECL: SymbolKind.STRUCT,
        CursorKind.ENUM_DECL: SymbolKind.ENUM,
    }
    _KINDS = {
        CursorKind.TYPE_REF,
        CursorKind.OBJC_CLASS_REF,
        CursorKind.OBJC_SUPER_CLASS_REF,
        CursorKind.OBJC_PROTOCOL_REF,
    }

    def matches(self, node):
        return node.get("kind") in self._KINDS and self.in_main(node)

    def apply(self, node):
        kind = node.get("kind")

        if kind == CursorKind.TYPE_REF:
            referenced = referenced_cursor(node)
            if referenced is None:
                return None
            symbol_kind = self._TAG_KINDS.get(referenced.kind)
            if symbol_kind is None:
                return None
            return [self.usage(node, symbol_kind, referenced.spelling)]

        if kind in (CursorKind.OBJC_CLASS_REF, CursorKind.OBJC_PROTOCOL_REF) and is_file_level(node):
            return None
        if kind == CursorKind.OBJC_PROTOCOL_REF:
            return [self.usage(node, SymbolKind.PROTOCOL, node.get("name"))]
        return [self.usage(node, SymbolKind.TYPE, node.get("name"))]


class PropertyRefRule(ScopedRule):
    """
    Dot-syntax access to a declared property, owned by the receiver type.
    Implicit properties (plain getter methods) are left to the message rule.
    """

    def matches(self, node):
        return node.get("kind") == CursorKind.MEMBER_REF_EXPR and self.in_main(node)

    def _receivers(self, node):
        children = node.get("children", [])
        if children:
            spelling = children[0].get("cursor").type.spelling
            if spelling:
                return owner_names(spelling)
        implementation = enclosing_node(node, IMPLEMENTATION_KINDS)
        if implementation is not None:
            class_name = class_name_of_container(implementation.get("cursor"))
            if class_name:
                return [class_name]
        return [DYNAMIC_RECEIVER]

    def apply(self, node):
        referenced = referenced_cursor(node)
        if referenced is None or referenced.kind != CursorKind.OBJC_PROPERTY_DECL:
            return None
        name = referenced.spelling
        return [self.usage(node, SymbolKind.PROPERTY, name, owner) for owner in self._receivers(node)]
