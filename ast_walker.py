import os


def walk_ast(cursor, nodes, *, debug=False, parent=None, _realpath_cache=None):
    """
    Recursively walks a Clang AST cursor and collects all nodes
    into a flat list for the rule engine.

    Unlike a per-file lint, the whole translation unit is kept: header and
    module declarations are needed to know what each import provides.
    Each node also keeps its children and parent for rules that need structure.
    """

    if _realpath_cache is None:
        _realpath_cache = {}

    location = cursor.location
    cursor_file = location.file.name if location.file else None
    path = None
    if cursor_file:
        path = _realpath_cache.get(cursor_file)
        if path is None:
            path = os.path.realpath(cursor_file)
            _realpath_cache[cursor_file] = path

    node = {
        "kind": cursor.kind,
        "name": cursor.spelling,
        "line": location.line,
        "children": [],
        "cursor": cursor,
        "parent": parent,
        "file": cursor_file,
        "path": path,
    }

    nodes.append(node)

    if debug:
        print("VISITING:", cursor.kind, cursor.spelling, cursor_file)

    for child in cursor.get_children():
        child_node = walk_ast(
            child,
            nodes,
            debug=debug,
            parent=node,
            _realpath_cache=_realpath_cache,
        )
        node["children"].append(child_node)

    return node
