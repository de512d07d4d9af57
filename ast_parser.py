import os
import sys
import subprocess
from clang import cindex


_LIBRARY_NAMES = ("libclang.dylib", "libclang.so", "libclang.dll")


def _find_libclang():
    env_path = os.environ.get("LIBCLANG_FILE") or os.environ.get("LIBCLANG_PATH")
    if env_path:
        if os.path.isdir(env_path):
            for name in _LIBRARY_NAMES:
                candidate = os.path.join(env_path, name)
                if os.path.exists(candidate):
                    return candidate
        if os.path.exists(env_path):
            return env_path

    if getattr(sys, "frozen", False):
        base = getattr(sys, "_MEIPASS", None)
        if base:
            for name in _LIBRARY_NAMES:
                for rel in (name, os.path.join("lib", name)):
                    candidate = os.path.join(base, rel)
                    if os.path.exists(candidate):
                        return candidate

    for candidate in (
        "/opt/homebrew/opt/llvm/lib/libclang.dylib",
        "/usr/local/opt/llvm/lib/libclang.dylib",
        "/Library/Developer/CommandLineTools/usr/lib/libclang.dylib",
    ):
        if os.path.exists(candidate):
            return candidate

    # Otherwise the copy bundled with the libclang wheel is used.
    return None


libclang_path = _find_libclang()
if libclang_path and not cindex.Config.loaded:
    cindex.Config.set_library_file(libclang_path)


class ParseObjCError(RuntimeError):
    pass


def _translation_unit_failure_hint(filename):
    base = os.path.basename(filename)
    return (
        f"Could not parse '{base}'. "
        "This usually means missing SDK/framework search paths or a broken compile command. "
        "Try: clang -fsyntax-only -fmodules <file> to see compiler diagnostics."
    )


def _language_args(filename):
    if filename.endswith(".mm"):
        return ["-x", "objective-c++"]
    return ["-x", "objective-c"]


def _sdk_args():
    try:
        sdk_path = subprocess.check_output(
            ["xcrun", "--show-sdk-path"],
            stderr=subprocess.DEVNULL,
            text=True,
        ).strip()
    except (OSError, subprocess.CalledProcessError):
        return []
    if not sdk_path:
        return []
    return ["-isysroot", sdk_path]


def _strip_compile_command(arguments, filename):
    """
    Drop the compiler, the input file and output-only flags from a
    compilation database command so libclang can reuse the rest.
    """
    args = list(arguments)[1:]
    target = os.path.realpath(filename)
    stripped = []
    skip_next = False
    for arg in args:
        if skip_next:
            skip_next = False
            continue
        if arg in ("-c", "-MD", "-MMD"):
            continue
        if arg in ("-o", "-MF", "-MT", "-MQ"):
            skip_next = True
            continue
        if not arg.startswith("-") and os.path.realpath(arg) == target:
            continue
        stripped.append(arg)
    return stripped


def compile_args_from_database(build_dir, filename):
    try:
        database = cindex.CompilationDatabase.fromDirectory(build_dir)
    except cindex.CompilationDatabaseError as exc:
        raise ParseObjCError(f"Could not load compilation database from '{build_dir}'.") from exc

    commands = database.getCompileCommands(os.path.realpath(filename))
    if commands is None:
        return None
    for command in commands:
        args = _strip_compile_command(command.arguments, filename)
        if command.directory:
            args.append("-working-directory=" + command.directory)
        return args
    return None


def parse_objc_file(filename, extra_args=None, build_dir=None):
    if not os.path.exists(filename):
        raise ParseObjCError(f"Input file does not exist: {filename}")
    if not os.path.isfile(filename):
        raise ParseObjCError(f"Input path is not a file: {filename}")

    database_args = None
    if build_dir:
        database_args = compile_args_from_database(build_dir, filename)

    if database_args is not None:
        args = database_args + (extra_args or [])
    else:
        default_args = _language_args(filename) + ["-fmodules"] + _sdk_args()
        args = default_args + (extra_args or [])

    index = cindex.Index.create()
    options = cindex.TranslationUnit.PARSE_DETAILED_PROCESSING_RECORD

    try:
        return index.parse(filename, args=args, options=options)
    except cindex.TranslationUnitLoadError as exc:
        raise ParseObjCError(_translation_unit_failure_hint(filename)) from exc


def error_diagnostics(translation_unit):
    errors = []
    for diag in translation_unit.diagnostics:
        if diag.severity < cindex.Diagnostic.Error:
            continue
        loc = diag.location
        file_name = loc.file.name if loc and loc.file else None
        errors.append(
            {
                "file": file_name,
                "line": loc.line if loc else None,
                "column": loc.column if loc else None,
                "severity": "fatal" if diag.severity >= cindex.Diagnostic.Fatal else "error",
                "message": diag.spelling,
            }
        )
    return errors
