"""Public parse/serialize entry points."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from lineyaml.builder import build
from lineyaml.config import SerializeConfig
from lineyaml.convert import from_python, to_python
from lineyaml.errors import ERROR_CANNOT_OPEN_FILE, OperationError, YamlError
from lineyaml.lines import classify
from lineyaml.log import log
from lineyaml.node import Node
from lineyaml.reader import read_lines
from lineyaml.writer import serialize as render


def _decode(data: bytes | bytearray | memoryview) -> str:
  # one character per byte keeps reported columns equal to byte positions
  return bytes(data).decode("latin-1")


def _read_file(path: str | os.PathLike[str]) -> str:
  try:
    with Path(path).open("rb") as handle:
      return _decode(handle.read())
  except OSError as exc:
    log(f"Cannot open {path}: {exc}")
    raise OperationError(ERROR_CANNOT_OPEN_FILE) from exc


def _read_source(source: Any) -> str:
  if isinstance(source, str):
    return source
  if isinstance(source, (bytes, bytearray, memoryview)):
    return _decode(source)
  if isinstance(source, os.PathLike):
    return _read_file(source)
  if hasattr(source, "read"):
    data = source.read()
    return data if isinstance(data, str) else _decode(data)
  raise TypeError(f"cannot parse from {type(source).__name__}")


def parse(source: Any, root: Node | None = None) -> Node:
  """Parse YAML text into ``root`` (a new node when omitted).

  Args:
    source: YAML text, bytes, a path object or a readable stream
    root: Node to populate in place

  Returns:
    The populated root node

  Raises:
    ParsingError: malformed input
    InternalError: the builder met an unexpected line structure
    OperationError: the source file could not be opened

  The root is cleared before parsing and left cleared when parsing fails.
  """
  root = root if root is not None else Node()
  root.clear()
  try:
    lines = read_lines(_read_source(source))
    classify(lines)
    build(root, lines)
  except YamlError as exc:
    root.clear()
    log(f"Parsing failed ({exc.kind}): {exc}")
    raise
  log(f"Parsed {len(lines)} logical lines into a {root.type.value} root")
  return root


def parse_file(filename: str | os.PathLike[str], root: Node | None = None) -> Node:
  """Parse the file at ``filename``."""
  return parse(Path(filename), root)


def serialize(
  root: Node,
  destination: Any = None,
  config: SerializeConfig | None = None,
) -> str:
  """Serialize ``root`` and optionally write it out.

  Args:
    root: Tree to render
    destination: None, a writable stream, or a file path (str or path object)
    config: Formatting options, defaults to ``SerializeConfig()``

  Returns:
    The rendered text

  Raises:
    OperationError: invalid indentation or the destination cannot be opened
  """
  config = config or SerializeConfig()
  text = render(root, config)
  log(f"Serialized {root.type.value} root with indent={config.indent_width} max_length={config.max_scalar_length}")
  if destination is None:
    return text
  if hasattr(destination, "write"):
    destination.write(text)
    return text
  try:
    with Path(destination).open("w", encoding="utf-8", newline="\n") as handle:
      handle.write(text)
  except OSError as exc:
    log(f"Cannot open {destination}: {exc}")
    raise OperationError(ERROR_CANNOT_OPEN_FILE) from exc
  return text


def load(source: Any) -> Any:
  """Parse ``source`` into plain dicts, lists and strings."""
  return to_python(parse(source))


def dump(data: Any, config: SerializeConfig | None = None) -> str:
  """Serialize plain Python data."""
  return serialize(from_python(data), config=config)
