import logging
import os
import re
from collections import defaultdict, namedtuple

logger = logging.getLogger(__name__)

MAIN = "main"
HEADER = "header"
MODULE = "module"

ResolvedScope = namedtuple("ResolvedScope", ["role", "key"])

MODULE_MAP_NAMES = ("module.modulemap", "module.map")
_MODULE_DECL_RE = re.compile(
    r"^\s*(?:explicit\s+)?(?:framework\s+)?module\s+([A-Za-z_][\w]*)",
    re.MULTILINE,
)


def framework_module_name(path):
    """
    `.../UIKit.framework/Headers/UIView.h` belongs to module `UIKit`. For
    nested frameworks the outermost one is the top-level module.
    """
    for part in path.split(os.sep):
        if part.endswith(".framework") and len(part) > len(".framework"):
            return part[: -len(".framework")]
    return None


class ScopeResolver:
    """
    Attributes a source file to the main file, a header textually reachable
    from it, or a precompiled module.

    Files that are neither (predefines, PCH content, headers of a module
    that cannot be named) resolve to None and their facts are dropped.
    """

    def __init__(self, main_path, inclusions=()):
        self.main_path = os.path.realpath(main_path)
        self._realpath_cache = {}
        self._module_map_cache = {}
        self._module_cache = {}
        self.textual_files = self._reachable_from_main(inclusions)

    @classmethod
    def from_translation_unit(cls, translation_unit, main_file):
        inclusions = []
        for inclusion in translation_unit.get_includes():
            if inclusion.source is None or inclusion.include is None:
                continue
            inclusions.append((inclusion.source.name, inclusion.include.name))
        return cls(main_file, inclusions)

    def _realpath(self, path):
        cached = self._realpath_cache.get(path)
        if cached is None:
            cached = os.path.realpath(path)
            self._realpath_cache[path] = cached
        return cached

    def _reachable_from_main(self, inclusions):
        edges = defaultdict(set)
        for source, include in inclusions:
            edges[self._realpath(source)].add(self._realpath(include))

        reachable = set()
        pending = [self.main_path]
        while pending:
            current = pending.pop()
            for included in edges.get(current, ()):
                if included not in reachable and included != self.main_path:
                    reachable.add(included)
                    pending.append(included)
        return reachable

    def is_main(self, path):
        return path is not None and self._realpath(path) == self.main_path

    def is_textual_header(self, path):
        return path is not None and self._realpath(path) in self.textual_files

    def _module_map_name(self, directory):
        if directory in self._module_map_cache:
            return self._module_map_cache[directory]

        name = None
        for map_name in MODULE_MAP_NAMES:
            candidate = os.path.join(directory, map_name)
            if not os.path.isfile(candidate):
                continue
            try:
                with open(candidate, encoding="utf-8", errors="replace") as fh:
                    match = _MODULE_DECL_RE.search(fh.read())
            except OSError as exc:
                logger.debug("Could not read module map %s: %s", candidate, exc)
                continue
            if match:
                name = match.group(1)
                break

        self._module_map_cache[directory] = name
        return name

    def module_for_file(self, path):
        if path is None:
            return None
        real = self._realpath(path)
        if real in self._module_cache:
            return self._module_cache[real]

        name = framework_module_name(real)
        if name is None:
            directory = os.path.dirname(real)
            while directory:
                name = self._module_map_name(directory)
                if name is not None:
                    break
                parent = os.path.dirname(directory)
                if parent == directory:
                    break
                directory = parent

        self._module_cache[real] = name
        return name

    def resolve(self, path):
        if not path:
            return None
        if self.is_main(path):
            return ResolvedScope(MAIN, self.main_path)
        if self.is_textual_header(path):
            return ResolvedScope(HEADER, self._realpath(path))
        module = self.module_for_file(path)
        if module is not None:
            return ResolvedScope(MODULE, module)
        return None

    def resolve_import(self, included_path):
        """
        Scope named by an import directive in the main file. A header that
        was not entered textually was imported as part of its module.
        """
        if not included_path:
            return None
        if self.is_textual_header(included_path):
            return ResolvedScope(HEADER, self._realpath(included_path))
        module = self.module_for_file(included_path)
        if module is not None:
            return ResolvedScope(MODULE, module)
        return ResolvedScope(HEADER, self._realpath(included_path))
