import re

from usage_matcher import DYNAMIC_RECEIVER

_QUALIFIERS = {
    "const",
    "volatile",
    "restrict",
    "__kindof",
    "__strong",
    "__weak",
    "__unsafe_unretained",
    "__autoreleasing",
    "__block",
    "_Nullable",
    "_Nonnull",
    "_Null_unspecified",
    "_Nullable_result",
    "__nullable",
    "__nonnull",
    "nullable",
    "nonnull",
    "struct",
    "union",
    "enum",
}

_IDENT_RE = re.compile(r"[A-Za-z_][\w]*")

OBJC_CLASS_TYPE = "Class"


class TypeName:
    """
    An Objective-C type spelling split into its base name, the protocols it
    is qualified with and its generic arguments.
    """

    __slots__ = ("base", "protocols", "arguments")

    def __init__(self, base, protocols=(), arguments=()):
        self.base = base
        self.protocols = list(protocols)
        self.arguments = list(arguments)

    def __repr__(self):
        return f"TypeName({self.base!r}, protocols={self.protocols!r}, arguments={self.arguments!r})"


def _split_top_level(text):
    parts = []
    depth = 0
    current = []
    for ch in text:
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(ch)
    tail = "".join(current).strip()
    if tail:
        parts.append(tail)
    return [p for p in parts if p]


def _strip_qualifiers(spelling):
    words = []
    for word in spelling.replace("*", " * ").split():
        if word in _QUALIFIERS:
            continue
        words.append(word)
    return " ".join(words)


def parse_type(spelling):
    if not spelling:
        return None
    text = _strip_qualifiers(spelling)
    match = _IDENT_RE.search(text)
    if match is None:
        return None
    base = match.group(0)

    rest = text[match.end():].lstrip()
    if not rest.startswith("<"):
        return TypeName(base)

    depth = 0
    end = None
    for i, ch in enumerate(rest):
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
            if depth == 0:
                end = i
                break
    inner = rest[1:end] if end is not None else rest[1:]

    protocols = []
    arguments = []
    for item in _split_top_level(inner):
        if "*" in item or "<" in item:
            arguments.append(item)
        else:
            protocols.append(item.strip())
    return TypeName(base, protocols, arguments)


def owner_names(spelling):
    """
    Class names a message receiver of this type can be matched against.

    `Foo *` gives Foo, `Foo<P> *` gives Foo and P, `id<P>` gives P and an
    unknown or bare `id` receiver gives "id".
    """
    parsed = parse_type(spelling)
    if parsed is None:
        return [DYNAMIC_RECEIVER]
    if parsed.base in (DYNAMIC_RECEIVER, "instancetype"):
        return list(parsed.protocols) or [DYNAMIC_RECEIVER]
    if parsed.base == OBJC_CLASS_TYPE:
        return list(parsed.protocols) or [OBJC_CLASS_TYPE]
    return [parsed.base] + list(parsed.protocols)


def type_usage_names(spelling):
    """
    Names a type spelling refers to, including protocol qualifiers and
    generic arguments (`NSArray<Foo *> *` gives NSArray and Foo).
    """
    parsed = parse_type(spelling)
    if parsed is None:
        return []
    names = []
    if parsed.base not in (DYNAMIC_RECEIVER, OBJC_CLASS_TYPE, "instancetype"):
        names.append(parsed.base)
    names.extend(parsed.protocols)
    for argument in parsed.arguments:
        for name in type_usage_names(argument):
            if name not in names:
                names.append(name)
    return names


def qualified_protocols(spelling):
    """Protocols of an `id<P>` or `Class<P>` type, empty for anything else."""
    parsed = parse_type(spelling)
    if parsed is None or parsed.base not in (DYNAMIC_RECEIVER, OBJC_CLASS_TYPE):
        return []
    return list(parsed.protocols)
