import logging

from clang.cindex import CursorKind

from base_rule import ScopedRule
from events import SuperclassEvent
from objc_cursors import (
    IMPLEMENTATION_KINDS,
    METHOD_KINDS,
    child_of_kind,
    class_name_of_container,
    has_global_storage,
    is_unnamed,
)
from symbols import SymbolKind
from type_names import type_usage_names

logger = logging.getLogger(__name__)


def type_usages(rule, node, spelling):
    return [rule.usage(node, SymbolKind.TYPE, name) for name in type_usage_names(spelling)]


def protocol_conformances(rule, node, class_name):
    """
    Protocols adopted in an interface or category header, owned by the
    class that gains the conformance.
    """
    if not class_name:
        return []
    events = []
    for child in node.get("children", []):
        if child.get("kind") != CursorKind.OBJC_PROTOCOL_REF:
            continue
        events.append(
            rule.declaration(node, SymbolKind.PROTOCOL_CONFORMANCE_DECLARATION, child.get("name"), class_name)
        )
    return events


class InterfaceRule(ScopedRule):
    """
    @interface definitions: the class itself, its superclass link and the
    protocols it adopts. Forward @class declarations never reach here.
    """

    def matches(self, node):
        return node.get("kind") == CursorKind.OBJC_INTERFACE_DECL and bool(node.get("name"))

    def apply(self, node):
        name = node.get("name")
        events = []

        for child in node.get("children", []):
            if child.get("kind") == CursorKind.OBJC_SUPER_CLASS_REF and child.get("name"):
                events.append(SuperclassEvent(name, child.get("name")))
                break

        events.append(self.declaration(node, SymbolKind.CLASS_DECLARATION, name))
        events.extend(protocol_conformances(self, node, name))
        return events


class CategoryRule(ScopedRule):
    def matches(self, node):
        return node.get("kind") == CursorKind.OBJC_CATEGORY_DECL

    def apply(self, node):
        cursor = node.get("cursor")
        events = []
        # Class extensions "@interface Foo ()" have no category name.
        if node.get("name"):
            events.append(self.declaration(node, SymbolKind.CATEGORY_DECLARATION, node.get("name")))
        events.extend(protocol_conformances(self, node, class_name_of_container(cursor)))
        return events


class TypeDeclarationRule(ScopedRule):
    """
    Typedefs, structs, unions, enums, enum constants and protocols declared
    in headers or modules. Only defining occurrences of tag types count;
    forward declarations are skipped.
    """

    _DEFINITION_KINDS = {
        CursorKind.STRUCT_DECL: SymbolKind.STRUCT_DECLARATION,
        CursorKind.UNION_DECL: SymbolKind.STRUCT_DECLARATION,
        CursorKind.ENUM_DECL: SymbolKind.ENUM_DECLARATION,
    }
    _PLAIN_KINDS = {
        CursorKind.OBJC_PROTOCOL_DECL: SymbolKind.PROTOCOL_DECLARATION,
        CursorKind.TYPEDEF_DECL: SymbolKind.TYPEDEF_DECLARATION,
        CursorKind.ENUM_CONSTANT_DECL: SymbolKind.ENUM_CONSTANT_DECLARATION,
    }

    def matches(self, node):
        kind = node.get("kind")
        if kind in self._PLAIN_KINDS:
            return bool(node.get("name"))
        if kind in self._DEFINITION_KINDS:
            cursor = node.get("cursor")
            return not is_unnamed(cursor) and cursor.is_definition()
        return False

    def __init__(self, resolver):
        super().__init__(resolver)
        self._typedefs = {}

    def apply(self, node):
        kind = node.get("kind")
        if kind == CursorKind.TYPEDEF_DECL:
            # A redeclared typedef belongs to its most recent declaration.
            self._typedefs[node.get("name")] = node
            return None
        symbol_kind = self._PLAIN_KINDS.get(kind) or self._DEFINITION_KINDS[kind]
        return [self.declaration(node, symbol_kind, node.get("name"))]

    def finalize(self):
        events = []
        for name, node in self._typedefs.items():
            events.append(self.declaration(node, SymbolKind.TYPEDEF_DECLARATION, name))
        return [event for event in events if event is not None]


class VariableRule(ScopedRule):
    def matches(self, node):
        return node.get("kind") == CursorKind.VAR_DECL and bool(node.get("name"))

    def apply(self, node):
        cursor = node.get("cursor")
        name = node.get("name")

        if not has_global_storage(cursor):
            return type_usages(self, node, cursor.type.spelling)

        if self.in_main(node):
            return [self.usage(node, SymbolKind.VARIABLE, name)] + type_usages(self, node, cursor.type.spelling)
        return [self.declaration(node, SymbolKind.VARIABLE_DECLARATION, name)]


class FunctionRule(ScopedRule):
    def matches(self, node):
        return node.get("kind") == CursorKind.FUNCTION_DECL and bool(node.get("name"))

    def apply(self, node):
        name = node.get("name")
        if self.in_main(node):
            cursor = node.get("cursor")
            return [self.usage(node, SymbolKind.FUNCTION, name)] + type_usages(
                self, node, cursor.result_type.spelling
            )
        return [self.declaration(node, SymbolKind.FUNCTION_DECLARATION, name)]


class ParameterTypeRule(ScopedRule):
    def matches(self, node):
        return node.get("kind") == CursorKind.PARM_DECL and self.in_main(node)

    def apply(self, node):
        return type_usages(self, node, node.get("cursor").type.spelling)


class PropertyRule(ScopedRule):
    """
    Properties belong to the interface, the extended class of a category,
    or the protocol that declares them.
    """

    def matches(self, node):
        return node.get("kind") == CursorKind.OBJC_PROPERTY_DECL and bool(node.get("name"))

    def _owner(self, cursor):
        parent = cursor.semantic_parent
        if parent is None:
            return None
        if parent.kind == CursorKind.OBJC_PROTOCOL_DECL:
            return parent.spelling or None
        return class_name_of_container(parent)

    def apply(self, node):
        cursor = node.get("cursor")
        if self.in_main(node):
            return type_usages(self, node, cursor.type.spelling)

        owner = self._owner(cursor)
        if not owner:
            return None
        return [self.declaration(node, SymbolKind.PROPERTY_DECLARATION, node.get("name"), owner)]


class MethodRule(ScopedRule):
    """
    Method declarations are owned by their interface, protocol or the class
    a category extends. Method definitions in the main file's
    @implementation count as uses of the selector on that class.
    """

    def matches(self, node):
        return node.get("kind") in METHOD_KINDS and bool(node.get("name"))

    def apply(self, node):
        cursor = node.get("cursor")
        selector = node.get("name")
        parent = cursor.semantic_parent
        if parent is None:
            logger.warning("Method '%s' on line %s has no parent, skipped", selector, node.get("line"))
            return None

        if parent.kind in IMPLEMENTATION_KINDS:
            class_name = class_name_of_container(parent)
            if not class_name:
                return None
            return [self.usage(node, SymbolKind.METHOD, selector, class_name)] + type_usages(
                self, node, cursor.result_type.spelling
            )

        if parent.kind in (CursorKind.OBJC_INTERFACE_DECL, CursorKind.OBJC_PROTOCOL_DECL):
            owner = parent.spelling
        elif parent.kind == CursorKind.OBJC_CATEGORY_DECL:
            owner = class_name_of_container(parent)
            if not owner:
                logger.warning(
                    "Method '%s' belongs to category '%s' with no class, skipped",
                    selector,
                    parent.spelling,
                )
                return None
        else:
            logger.warning(
                "Method '%s' has unsupported parent %s, skipped",
                selector,
                parent.kind.name,
            )
            return None

        if not owner:
            return None
        return [self.declaration(node, SymbolKind.METHOD_DECLARATION, selector, owner)]


class ImplementationRule(ScopedRule):
    def matches(self, node):
        return node.get("kind") in IMPLEMENTATION_KINDS and self.in_main(node)

    def apply(self, node):
        cursor = node.get("cursor")
        if node.get("kind") == CursorKind.OBJC_IMPLEMENTATION_DECL:
            return [self.usage(node, SymbolKind.CLASS, node.get("name"))]

        events = [self.usage(node, SymbolKind.CATEGORY, node.get("name"))]
        class_ref = child_of_kind(cursor, CursorKind.OBJC_CLASS_REF)
        if class_ref is not None:
            events.append(self.usage(node, SymbolKind.CLASS, class_ref.spelling))
        return events
