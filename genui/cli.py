"""Command-line entry point for genui: inspect, grade and export JSONL streams."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from genui import __version__
from genui.config import settings
from genui.kernel.graders import GradeReport, grade_composition, grade_tree
from genui.kernel.jsx import tree_to_jsx
from genui.kernel.normalizer import normalize_tree
from genui.kernel.validator import repair_tree
from genui.services.session import build_tree

logger = logging.getLogger(__name__)


def read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def print_report(title: str, report: GradeReport) -> None:
    print(f"{title}: {'PASS' if report.all_pass else 'FAIL'}")
    for r in report.results:
        mark = "✓" if r.passed else "✗"
        print(f"  {mark} {r.rule}")
        for violation in r.violations:
            print(f"      - {violation}")


def cmd_tree(args: argparse.Namespace, tree: dict) -> int:
    if args.repair:
        tree = repair_tree(tree)
    if args.normalize:
        tree = normalize_tree(tree)
    print(json.dumps(tree, indent=2, ensure_ascii=False))
    return 0


def cmd_grade(args: argparse.Namespace, tree: dict) -> int:
    structural = grade_tree(tree, custom_types=args.custom_type or None)
    composition = grade_composition(tree)
    if args.json:
        print(json.dumps({"structural": structural.to_dict(), "composition": composition.to_dict()}, indent=2))
    else:
        print_report("Structural", structural)
        print_report("Composition", composition)
    return 0 if structural.all_pass and composition.all_pass else 1


def cmd_jsx(args: argparse.Namespace, tree: dict) -> int:
    print(tree_to_jsx(tree, component_name=args.name, skip_normalization=args.raw))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="genui", description="Streaming generative-UI tree tools")
    p.add_argument("--version", action="version", version=f"genui {__version__}")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    t = sub.add_parser("tree", help="print the tree built from a JSONL stream")
    t.add_argument("source", help="JSONL file, or - for stdin")
    t.add_argument("--normalize", action="store_true")
    t.add_argument("--repair", action="store_true", help="coerce and strip invalid props")
    t.set_defaults(func=cmd_tree)

    g = sub.add_parser("grade", help="run structural and composition graders")
    g.add_argument("source", help="JSONL file, or - for stdin")
    g.add_argument("--json", action="store_true")
    g.add_argument("--custom-type", action="append", help="extra component type to accept")
    g.set_defaults(func=cmd_grade)

    j = sub.add_parser("jsx", help="export the tree as JSX source")
    j.add_argument("source", help="JSONL file, or - for stdin")
    j.add_argument("--name", default=settings.JSX_COMPONENT_NAME)
    j.add_argument("--raw", action="store_true", help="skip normalization")
    j.set_defaults(func=cmd_jsx)
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        source = read_source(args.source)
    except OSError as e:
        print(f"ERROR: cannot read {args.source}: {e}", file=sys.stderr)
        return 2
    tree = build_tree(source)
    logger.debug("Built tree with %d elements", len(tree["elements"]))
    return args.func(args, tree)


if __name__ == "__main__":
    sys.exit(main())
