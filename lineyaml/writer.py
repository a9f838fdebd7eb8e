"""Serialize a document tree to block-style text."""
from __future__ import annotations

from collections.abc import Iterable

from lineyaml.config import MIN_INDENT_WIDTH, SerializeConfig
from lineyaml.errors import ERROR_INDENTATION, OperationError
from lineyaml.lines import BLOCK_INDICATORS
from lineyaml.node import Node
from lineyaml.reader import DOCUMENT_END, DOCUMENT_START, WHITESPACE, add_escapes, is_sequence_start

RESERVED_KEY_CHARACTERS = frozenset('":{}[],&*#?|-<>=!%@')


def key_should_be_quoted(key: str) -> bool:
  if not key or key[0] in WHITESPACE or key[-1] in WHITESPACE:
    return True
  return any(char in RESERVED_KEY_CHARACTERS for char in key)


def value_should_be_quoted(value: str, in_map: bool) -> bool:
  """Return True if an inline scalar would not read back verbatim."""
  if value[0] in WHITESPACE or value[-1] in WHITESPACE:
    return True
  if value.startswith('"') or "#" in value:
    return True
  if value in BLOCK_INDICATORS or value in (DOCUMENT_START, DOCUMENT_END):
    return True
  if is_sequence_start(value):
    return True
  return not in_map and ":" in value


def fold_line(text: str, max_length: int) -> list[str]:
  """Greedy word wrap used for folded block scalars.

  Every cut happens at the first space found at or after ``max_length``
  characters from the start of the current segment; the space itself is
  dropped.
  """
  folded: list[str] = []
  if not text:
    return folded
  last = 0
  while True:
    current = last + max_length
    space = text.find(" ", current) if current < len(text) else -1
    if space == -1:
      rest = text[last:]
      if rest:
        folded.append(rest)
      return folded
    folded.append(text[last:space])
    last = space + 1


def serialize(root: Node, config: SerializeConfig | None = None) -> str:
  """Render ``root`` as text.

  Raises:
    OperationError: ``config.indent_width`` is below 2
  """
  config = config or SerializeConfig()
  if config.indent_width < MIN_INDENT_WIDTH:
    raise OperationError(ERROR_INDENTATION)
  return "".join(_emit(root, False, 0, config, in_map=False))


def _emit(node: Node, use_level: bool, level: int, config: SerializeConfig, in_map: bool) -> Iterable[str]:
  if node.is_sequence():
    yield from _emit_sequence(node, level, config)
  elif node.is_map():
    yield from _emit_map(node, use_level, level, config)
  elif node.is_scalar():
    yield from _emit_scalar(node.as_string(), use_level, level, config, in_map)


def _is_blank(node: Node) -> bool:
  """A collection with nothing to write reads back as an empty scalar."""
  return (node.is_sequence() or node.is_map()) and all(child.is_none() for _, child in node)


def _emit_sequence(node: Node, level: int, config: SerializeConfig) -> Iterable[str]:
  prefix = " " * level
  for _, value in node:
    if value.is_none():
      continue
    yield f"{prefix}- "
    if _is_blank(value):
      yield "\n"
      continue
    use_level = False
    if value.is_sequence() or (value.is_map() and config.sequence_map_newline):
      use_level = True
      yield "\n"
    yield from _emit(value, use_level, level + 2, config, in_map=False)


def _emit_map(node: Node, use_level: bool, level: int, config: SerializeConfig) -> Iterable[str]:
  prefix = " " * level
  count = 0
  for key, value in node:
    if value.is_none():
      continue
    if use_level or count > 0:
      yield prefix

    key = add_escapes(key)
    if key_should_be_quoted(key):
      yield f'"{key}": '
    else:
      yield f"{key}: "

    use_level = False
    if not value.is_scalar():
      use_level = True
    elif config.map_scalar_newline and value.as_string():
      # block indicators must stay on the key line
      indicator, _ = scalar_layout(value.as_string(), config, in_map=False)
      use_level = indicator is None
    if use_level:
      yield "\n"
    # a scalar moved to its own line is read back as a whole line
    yield from _emit(value, use_level, level + config.indent_width, config, in_map=not use_level)
    use_level = True
    count += 1


def scalar_layout(value: str, config: SerializeConfig, in_map: bool) -> tuple[str | None, list[str]]:
  """Decide how a scalar is written.

  Returns:
    ``(indicator, lines)``; indicator is None for an inline value, else the
    block header such as ``"|"`` or ``">-"``.
  """
  lines = value.split("\n")
  ends_with_newline = lines[-1] == "" and len(lines) > 1
  if ends_with_newline:
    lines.pop()

  if len(lines) > 1 or ends_with_newline:
    indicator = "|"
  else:
    line = lines[0]
    max_length = config.max_scalar_length
    if not max_length or len(line) <= max_length or value_should_be_quoted(line, in_map):
      return None, lines
    folded = fold_line(line, max_length)
    # body lines are trimmed and blank ones dropped when read back
    if len(folded) <= 1 or any(not part or part[0] in WHITESPACE or part[-1] in WHITESPACE for part in folded):
      return None, lines
    indicator = ">"
    lines = folded

  if not ends_with_newline:
    indicator += "-"
  return indicator, lines


def _emit_scalar(value: str, use_level: bool, level: int, config: SerializeConfig, in_map: bool) -> Iterable[str]:
  if not value:
    yield "\n"
    return

  prefix = " " * level
  indicator, lines = scalar_layout(value, config, in_map)
  if indicator is None:
    line = lines[0]
    if use_level:
      yield prefix
    if value_should_be_quoted(line, in_map):
      yield f'"{add_escapes(line)}"\n'
    else:
      yield f"{line}\n"
    return

  yield f"{indicator}\n"
  for line in lines:
    yield f"{prefix}{line}\n"
