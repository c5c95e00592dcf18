# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Infer a schema from a sample document on disk and print it,
#   optionally saving it to the schema store or applying it to a
#   MongoDB collection.
#
# COMMANDS:
# ---------
# 1. Infer from a sample (JSON or MongoDB extended JSON):
#    python -m docschema.cli infer sample.json
#    python -m docschema.cli infer sample.json --strongly-type-arrays \
#        --decimal-rule IntegerToDecimal --optional nickname
#    python -m docschema.cli infer sample.json --format jsonschema
#    python -m docschema.cli infer sample.json --save users
#    python -m docschema.cli infer sample.json --apply users
#
# 2. Show a saved schema:
#    python -m docschema.cli show users [--format jsonschema]
#
# 3. List saved schemas:
#    python -m docschema.cli list
#
# IMPLEMENTATION:
# ---------------
# - argparse for CLI parsing
# - bson.json_util to read samples ($oid, $date, $numberDecimal, ...)
# - Options default from docschema.config (env / .env)
# - Errors print a message and exit with status 1
#
# ==============================================

import argparse
import logging
import sys
from typing import List, Optional

from bson import json_util

from docschema.config import get_config
from docschema.errors import InferenceError
from docschema.infer import infer_schema
from docschema.inference import InferenceOptions, SchemaTree, tree_to_dict
from docschema.persistence import SchemaStore
from docschema.schema import to_json_schema
from docschema.storage import MongoClient

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docschema",
        description="Infer a document schema from a single sample."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    infer = subparsers.add_parser("infer", help="Infer a schema from a sample file")
    infer.add_argument("sample", help="Path to a JSON / extended JSON sample document")
    infer.add_argument("--optional", action="append", default=[], metavar="NAME",
                       help="Top-level attribute to mark as not required (repeatable)")
    infer.add_argument("--defaults", metavar="FILE",
                       help="JSON file mapping attribute names to default values")
    infer.add_argument("--strongly-type-arrays", action="store_true", default=None,
                       help="Type non-empty arrays by their element kind")
    infer.add_argument("--decimal-rule", action="append", default=None, metavar="TAG",
                       help="Enable a Decimal128 conversion rule, e.g. IntegerToDecimal (repeatable)")
    infer.add_argument("--max-depth", type=int, default=None,
                       help="Fail if the sample nests deeper than this")
    infer.add_argument("--format", choices=("tree", "jsonschema"), default="tree")
    infer.add_argument("--save", metavar="NAME", help="Save the inferred schema under NAME")
    infer.add_argument("--apply", metavar="COLLECTION",
                       help="Apply the schema as a validator on a MongoDB collection")

    show = subparsers.add_parser("show", help="Print a saved schema")
    show.add_argument("name")
    show.add_argument("--format", choices=("tree", "jsonschema"), default="tree")

    subparsers.add_parser("list", help="List saved schemas")

    return parser


def _read_json(path: str):
    with open(path, 'r') as f:
        return json_util.loads(f.read())


def _render(tree: SchemaTree, output_format: str) -> str:
    data = to_json_schema(tree) if output_format == "jsonschema" else tree_to_dict(tree)
    return json_util.dumps(data, indent=2)


def _options_from_args(args: argparse.Namespace) -> InferenceOptions:
    overrides = {"optional_attributes": args.optional}
    if args.defaults:
        overrides["default_values"] = _read_json(args.defaults)
    if args.strongly_type_arrays is not None:
        overrides["strongly_type_arrays"] = args.strongly_type_arrays
    if args.decimal_rule is not None:
        overrides["decimal128_conversion_rules"] = args.decimal_rule
    if args.max_depth is not None:
        overrides["max_depth"] = args.max_depth
    return InferenceOptions.from_config(**overrides)


def _run_infer(args: argparse.Namespace) -> int:
    config = get_config()
    sample = _read_json(args.sample)
    tree = infer_schema(sample, _options_from_args(args))

    print(_render(tree, args.format))

    if args.save:
        path = SchemaStore(config.metadata_dir).save(args.save, tree)
        print(f"Saved schema '{args.save}' to {path}", file=sys.stderr)

    if args.apply:
        with MongoClient.from_config(config.mongo) as db:
            db.apply_schema(args.apply, tree)
        print(f"Applied schema to collection '{args.apply}'", file=sys.stderr)

    return 0


def _run_show(args: argparse.Namespace) -> int:
    store = SchemaStore(get_config().metadata_dir)
    print(_render(store.load(args.name), args.format))
    return 0


def _run_list(args: argparse.Namespace) -> int:
    for name in SchemaStore(get_config().metadata_dir).list_schemas():
        print(name)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    config = get_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    handlers = {"infer": _run_infer, "show": _run_show, "list": _run_list}
    try:
        return handlers[args.command](args)
    except (InferenceError, OSError, ValueError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
