from clang.cindex import CursorKind, TypeKind

from base_rule import ScopedRule
from objc_cursors import (
    IMPLEMENTATION_KINDS,
    class_name_of_container,
    enclosing_node,
    is_super_send,
    unwrap_expression,
)
from symbols import SymbolKind
from type_names import owner_names, qualified_protocols, type_usage_names
from usage_matcher import DYNAMIC_RECEIVER


class MessageExprRule(ScopedRule):
    """
    Objective-C message sends in the main file.

    The selector is recorded as a Method use owned by every class the
    receiver's static type names. Class messages also use the class as a
    type, and messages to `super` are owned by the enclosing implementation
    (the method itself is declared on one of its ancestors).
    """

    def matches(self, node):
        return node.get("kind") == CursorKind.OBJC_MESSAGE_EXPR and self.in_main(node)

    def _split_receiver(self, node):
        children = node.get("children", [])
        # Children are [receiver, *arguments]; super sends have no receiver child.
        if is_super_send(node.get("cursor")) or not children:
            return None, children
        return children[0], children[1:]

    def _super_owner(self, node):
        implementation = enclosing_node(node, IMPLEMENTATION_KINDS)
        if implementation is None:
            return [DYNAMIC_RECEIVER]
        class_name = class_name_of_container(implementation.get("cursor"))
        return [class_name] if class_name else [DYNAMIC_RECEIVER]

    def _return_type_usages(self, node, method):
        result_type = method.result_type
        if result_type.kind != TypeKind.OBJCOBJECTPOINTER:
            return []
        return [self.usage(node, SymbolKind.TYPE, name) for name in type_usage_names(result_type.spelling)]

    def _conformance_usages(self, node, method, arguments):
        """
        Passing an object where `id<P>` is expected relies on a declaration
        that the object's class conforms to P.
        """
        events = []
        for param, argument in zip(method.get_arguments(), arguments):
            protocols = qualified_protocols(param.type.spelling)
            if not protocols:
                continue
            arg_type = unwrap_expression(argument.get("cursor")).type.spelling
            for protocol in protocols:
                for owner in owner_names(arg_type):
                    events.append(self.usage(node, SymbolKind.PROTOCOL_CONFORMANCE, protocol, owner))
        return events

    def apply(self, node):
        selector = node.get("name")
        if not selector:
            return None

        receiver, arguments = self._split_receiver(node)
        events = []

        if receiver is None:
            owners = self._super_owner(node)
        elif receiver.get("kind") == CursorKind.OBJC_CLASS_REF:
            owners = [receiver.get("name")]
            events.append(self.usage(node, SymbolKind.TYPE, receiver.get("name")))
        else:
            owners = owner_names(receiver.get("cursor").type.spelling)

        for owner in owners:
            events.append(self.usage(node, SymbolKind.METHOD, selector, owner))

        try:
            method = node.get("cursor").referenced
        except Exception:
            method = None
        if method is not None and method.kind in (
            CursorKind.OBJC_INSTANCE_METHOD_DECL,
            CursorKind.OBJC_CLASS_METHOD_DECL,
        ):
            events.extend(self._return_type_usages(node, method))
            events.extend(self._conformance_usages(node, method, arguments))

        return events
