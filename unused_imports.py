import logging
import os
import sys

from analysis_context import AnalysisContext
from ast_parser import ParseObjCError, error_diagnostics, parse_objc_file
from ast_walker import walk_ast
from engine_factory import build_engine
from scope_resolver import ScopeResolver
from unused_import_reporter import UnusedImportReporter

logger = logging.getLogger(__name__)

USAGE = (
    "Usage: objc-unused-imports [--debug-print] [--verbose] [-p <build-dir>] "
    "<file> [<file> ...] [-- <compiler args>]"
)


class UsageError(ValueError):
    pass


def analyze_translation_unit(translation_unit, main_file):
    """
    Walks one translation unit and returns the frozen analysis context for
    its main file.
    """
    resolver = ScopeResolver.from_translation_unit(translation_unit, main_file)
    nodes = []
    walk_ast(translation_unit.cursor, nodes)

    engine = build_engine(resolver)
    context = AnalysisContext(resolver.main_path)
    context.apply_all(engine.run(nodes))
    return context.freeze()


def report(context, main_file, debug_print=False, out=None):
    out = out or sys.stdout
    reporter = UnusedImportReporter(context, main_file)
    if debug_print:
        for line in reporter.dump():
            print(line, file=out)
    warnings = reporter.warnings()
    for warning in warnings:
        print(warning, file=out)
    return warnings


def run_file(filename, extra_args=None, build_dir=None, debug_print=False, out=None, err=None):
    err = err or sys.stderr
    try:
        translation_unit = parse_objc_file(filename, extra_args=extra_args, build_dir=build_dir)
    except ParseObjCError as exc:
        print(f"Failed to parse {filename}: {exc}", file=err)
        return 1

    errors = error_diagnostics(translation_unit)
    for item in errors:
        location = item.get("file") or filename
        print(
            f"{location}:{item.get('line')}:{item.get('column')}: {item.get('severity')}: {item.get('message')}",
            file=err,
        )

    context = analyze_translation_unit(translation_unit, filename)
    report(context, filename, debug_print=debug_print, out=out)
    return 1 if errors else 0


def parse_args(argv):
    options = {
        "debug_print": False,
        "verbose": False,
        "build_dir": None,
        "files": [],
        "extra_args": [],
    }

    args = list(argv)
    if "--" in args:
        idx = args.index("--")
        options["extra_args"] = args[idx + 1 :]
        args = args[:idx]

    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("--debug-print", "-debug-print"):
            options["debug_print"] = True
        elif arg in ("--verbose", "-v"):
            options["verbose"] = True
        elif arg == "-p":
            if i + 1 >= len(args):
                raise UsageError("Missing value after -p (expected a build directory).")
            options["build_dir"] = args[i + 1]
            i += 1
        elif arg.startswith("-p="):
            options["build_dir"] = arg[len("-p=") :]
        elif arg.startswith("-"):
            raise UsageError(f"Unknown option: {arg}")
        else:
            options["files"].append(arg)
        i += 1

    if not options["files"]:
        raise UsageError("No input file provided.")
    if options["build_dir"] is not None and not os.path.isdir(options["build_dir"]):
        raise UsageError(f"Build directory does not exist: {options['build_dir']}")
    return options


def main(argv=None):
    try:
        options = parse_args(sys.argv[1:] if argv is None else argv)
    except UsageError as exc:
        print(str(exc), file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if options["verbose"] else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )

    status = 0
    for filename in options["files"]:
        result = run_file(
            filename,
            extra_args=options["extra_args"],
            build_dir=options["build_dir"],
            debug_print=options["debug_print"],
        )
        status = status or result
    return status


if __name__ == "__main__":
    sys.exit(main())
