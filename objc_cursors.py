from clang.cindex import CursorKind, StorageClass

CONTAINER_KINDS = {
    CursorKind.OBJC_INTERFACE_DECL,
    CursorKind.OBJC_CATEGORY_DECL,
    CursorKind.OBJC_PROTOCOL_DECL,
}

IMPLEMENTATION_KINDS = {
    CursorKind.OBJC_IMPLEMENTATION_DECL,
    CursorKind.OBJC_CATEGORY_IMPL_DECL,
}

METHOD_KINDS = {
    CursorKind.OBJC_INSTANCE_METHOD_DECL,
    CursorKind.OBJC_CLASS_METHOD_DECL,
}


def is_unnamed(cursor):
    name = cursor.spelling
    if not name:
        return True
    # Newer libclang spells anonymous records as "struct (unnamed at a.h:3:9)".
    if "(unnamed" in name or "(anonymous" in name:
        return True
    try:
        return cursor.is_anonymous()
    except AttributeError:
        return False


def child_of_kind(cursor, kind):
    for child in cursor.get_children():
        if child.kind == kind:
            return child
    return None


def class_name_of_container(cursor):
    """
    The interface a container declares members for: the interface itself,
    the class a category extends, or None for anything else.
    """
    if cursor is None:
        return None
    if cursor.kind in (CursorKind.OBJC_INTERFACE_DECL, CursorKind.OBJC_IMPLEMENTATION_DECL):
        return cursor.spelling or None
    if cursor.kind in (CursorKind.OBJC_CATEGORY_DECL, CursorKind.OBJC_CATEGORY_IMPL_DECL):
        class_ref = child_of_kind(cursor, CursorKind.OBJC_CLASS_REF)
        if class_ref is None:
            return None
        return class_ref.spelling or None
    return None


def has_global_storage(cursor):
    parent = cursor.semantic_parent
    if parent is not None and parent.kind == CursorKind.TRANSLATION_UNIT:
        return True
    return cursor.storage_class in (StorageClass.STATIC, StorageClass.EXTERN)


def is_static_local(cursor):
    parent = cursor.semantic_parent
    if parent is None or parent.kind == CursorKind.TRANSLATION_UNIT:
        return False
    return cursor.storage_class == StorageClass.STATIC


def enclosing_node(node, kinds):
    cur = node.get("parent")
    while cur is not None:
        if cur.get("kind") in kinds:
            return cur
        cur = cur.get("parent")
    return None


def is_file_level(node):
    parent = node.get("parent")
    return parent is None or parent.get("kind") == CursorKind.TRANSLATION_UNIT


def unwrap_expression(cursor):
    """
    Skip implicit conversions so the argument's own static type is seen,
    not the parameter type it was converted to.
    """
    current = cursor
    while current.kind == CursorKind.UNEXPOSED_EXPR:
        children = list(current.get_children())
        if len(children) != 1:
            break
        current = children[0]
    return current


def is_super_send(cursor):
    """
    `[super foo]` has no receiver child, so it is recognised by its
    tokens rather than by counting children.
    """
    spellings = []
    for token in cursor.get_tokens():
        spellings.append(token.spelling)
        if len(spellings) == 2:
            break
    return spellings == ["[", "super"]
