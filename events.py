from dataclasses import dataclass
from typing import Optional

from symbols import SymbolKind


@dataclass(frozen=True)
class DeclEvent:
    """A declaration attributed to a header, module or the main file."""

    scope: str
    kind: SymbolKind
    name: str
    owner: Optional[str] = None


@dataclass(frozen=True)
class UsageEvent:
    """A use inside the main file; `owner` is the receiver class or "id"."""

    kind: SymbolKind
    name: str
    owner: Optional[str] = None


@dataclass(frozen=True)
class ImportEvent:
    scope: str
    line: int
    is_module: bool = False


@dataclass(frozen=True)
class SuperclassEvent:
    subclass: str
    superclass: str


@dataclass(frozen=True)
class MacroExpansionEvent:
    """
    A macro expanded in the main file. `owning_module` names the precompiled
    module that owns the macro's current definition, if any.
    """

    name: str
    owning_module: Optional[str] = None
