from enum import Enum


class SymbolKind(Enum):
    """
    Declaration kinds and the usage kinds they are matched against.
    """

    CLASS_DECLARATION = "ClassDeclaration"
    CLASS = "Class"
    TYPEDEF_DECLARATION = "TypedefDeclaration"
    TYPE = "Type"
    STRUCT_DECLARATION = "StructDeclaration"
    STRUCT = "Struct"
    VARIABLE_DECLARATION = "VariableDeclaration"
    VARIABLE = "Variable"
    FUNCTION_DECLARATION = "FunctionDeclaration"
    FUNCTION = "Function"
    ENUM_DECLARATION = "EnumDeclaration"
    ENUM = "Enum"
    ENUM_CONSTANT_DECLARATION = "EnumConstantDeclaration"
    ENUM_CONSTANT = "EnumConstant"
    PROTOCOL_DECLARATION = "ProtocolDeclaration"
    PROTOCOL = "Protocol"
    METHOD_DECLARATION = "MethodDeclaration"
    METHOD = "Method"
    PROPERTY_DECLARATION = "PropertyDeclaration"
    PROPERTY = "Property"
    MACRO_DEFINITION = "MacroDefinition"
    MACRO = "Macro"
    PROTOCOL_CONFORMANCE_DECLARATION = "ProtocolConformanceDeclaration"
    PROTOCOL_CONFORMANCE = "ProtocolConformance"
    CATEGORY_DECLARATION = "CategoryDeclaration"
    CATEGORY = "Category"


DECLARATION_KINDS = frozenset(
    {
        SymbolKind.CLASS_DECLARATION,
        SymbolKind.TYPEDEF_DECLARATION,
        SymbolKind.STRUCT_DECLARATION,
        SymbolKind.VARIABLE_DECLARATION,
        SymbolKind.FUNCTION_DECLARATION,
        SymbolKind.ENUM_DECLARATION,
        SymbolKind.ENUM_CONSTANT_DECLARATION,
        SymbolKind.PROTOCOL_DECLARATION,
        SymbolKind.METHOD_DECLARATION,
        SymbolKind.PROPERTY_DECLARATION,
        SymbolKind.MACRO_DEFINITION,
        SymbolKind.PROTOCOL_CONFORMANCE_DECLARATION,
        SymbolKind.CATEGORY_DECLARATION,
    }
)

USAGE_KINDS = frozenset(kind for kind in SymbolKind if kind not in DECLARATION_KINDS)

# Kinds whose facts carry the declaring or receiving class.
MEMBER_KINDS = frozenset(
    {
        SymbolKind.METHOD_DECLARATION,
        SymbolKind.METHOD,
        SymbolKind.PROPERTY_DECLARATION,
        SymbolKind.PROPERTY,
        SymbolKind.PROTOCOL_CONFORMANCE_DECLARATION,
        SymbolKind.PROTOCOL_CONFORMANCE,
    }
)


def is_declaration(kind):
    return kind in DECLARATION_KINDS


def display_name(kind):
    return kind.value


class Symbol:
    """
    A kinded, named fact about a declaration or a use of one.

    Identity is (kind, name). `owners` is accumulated metadata: the
    declaring interfaces of a member, or the receiver classes of a use.
    """

    __slots__ = ("kind", "name", "owners")

    def __init__(self, kind, name, owners=None):
        self.kind = kind
        self.name = name
        self.owners = set(owners or ())

    @property
    def key(self):
        return (self.kind, self.name)

    def __eq__(self, other):
        if not isinstance(other, Symbol):
            return NotImplemented
        return self.key == other.key

    def __hash__(self):
        return hash(self.key)

    def __repr__(self):
        if self.owners:
            return f"Symbol({self.kind.value}, {self.name!r}, owners={sorted(self.owners)!r})"
        return f"Symbol({self.kind.value}, {self.name!r})"
