"""Command line front end: ``lineyaml fmt|flatten|check``."""
from __future__ import annotations

import argparse
import logging
import shlex
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from lineyaml.config import SerializeConfig
from lineyaml.document import parse_file, serialize
from lineyaml.errors import YamlError
from lineyaml.log import setup_logging
from lineyaml.node import Node


def flatten_node(node: Node, parent_key: str = "", sep: str = "_") -> dict[str, str]:
  """Flatten nested maps into ``parent_sub`` keys; sequences are skipped."""
  items: dict[str, str] = {}
  if not node.is_map():
    return items
  for key, value in node:
    new_key = f"{parent_key}{sep}{key}" if parent_key else key
    if value.is_map():
      items.update(flatten_node(value, new_key, sep=sep))
    elif value.is_scalar():
      items[new_key] = value.as_string()
  return items


def _shell_assignments(node: Node, prefix: str) -> list[str]:
  out = []
  for key, value in flatten_node(node).items():
    # Sanitize key (alphanumeric + underscore)
    safe_key = "".join(c if c.isalnum() or c == "_" else "_" for c in key)
    out.append(f"{prefix}{safe_key}={shlex.quote(value)}")
  return out


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
  parser = argparse.ArgumentParser(prog="lineyaml", description="Parse and reformat block-style YAML")
  parser.add_argument("--verbose", "-v", action="store_true", help="Log parser activity to stderr")
  sub = parser.add_subparsers(dest="command", required=True)

  fmt = sub.add_parser("fmt", help="Reformat a document")
  fmt.add_argument("path", help="YAML file to read")
  fmt.add_argument("--output", "-o", help="Write here instead of stdout")
  fmt.add_argument("--indent", type=int, default=None, help="Spaces per nesting level (>= 2)")
  fmt.add_argument("--max-length", type=int, default=None, help="Fold scalars longer than this, 0 disables")
  fmt.add_argument(
    "--sequence-map-newline",
    action="store_true",
    default=None,
    help="Start maps nested in sequence entries on their own line",
  )
  fmt.add_argument(
    "--map-scalar-newline",
    action="store_true",
    default=None,
    help="Start scalar map values on their own line",
  )

  flatten = sub.add_parser("flatten", help="Print nested keys as shell assignments")
  flatten.add_argument("path", help="YAML file to read")
  flatten.add_argument("prefix", help="Prefix for every variable name")

  check = sub.add_parser("check", help="Only parse the document")
  check.add_argument("path", help="YAML file to read")
  return parser.parse_args(argv)


def _run(args: argparse.Namespace) -> int:
  root = parse_file(Path(args.path))
  if args.command == "check":
    print(f"OK: {args.path}")
    return 0
  if args.command == "flatten":
    for line in _shell_assignments(root, args.prefix):
      print(line)
    return 0

  config = SerializeConfig.from_env(
    indent_width=args.indent,
    max_scalar_length=args.max_length,
    sequence_map_newline=args.sequence_map_newline,
    map_scalar_newline=args.map_scalar_newline,
  )
  if args.output:
    serialize(root, args.output, config)
  else:
    serialize(root, sys.stdout, config)
  return 0


def main(argv: Sequence[str] | None = None) -> int:
  """Entry point for the ``lineyaml`` console script."""
  args = _parse_args(argv)
  if args.verbose:
    setup_logging(logging.DEBUG)
  try:
    return _run(args)
  except YamlError as e:
    sys.stderr.write(f"Error processing YAML ({e.kind}): {e}\n")
    return 1
  except ValidationError as e:
    sys.stderr.write(f"Invalid configuration: {e}\n")
    return 1


if __name__ == "__main__":
  raise SystemExit(main())
