"""Classify reader lines as sequence entries, map entries or scalars.

Composite lines are split so that every logical line carries one thing: a
dash line becomes an empty sequence line plus its inline content, a map line
becomes the key plus a scalar value line. Block scalar continuations are
merged into the first line of the block.
"""
from __future__ import annotations

from lineyaml.errors import (
  ERROR_BLOCK_SEQUENCE_NOT_ALLOWED,
  ERROR_INCORRECT_OFFSET,
  ERROR_KEY_INCORRECT,
  ERROR_KEY_MISSING,
  ERROR_UNEXPECTED_DOCUMENT_END,
  ERROR_VALUE_INCORRECT,
  ParsingError,
)
from lineyaml.node import NodeType
from lineyaml.reader import (
  BLOCK_FLAGS,
  WHITESPACE,
  LineFlag,
  ReaderLine,
  find_unquoted,
  is_sequence_start,
  quote_spans,
  remove_escapes,
)

BLOCK_INDICATORS = {
  "|": LineFlag.LITERAL | LineFlag.NEWLINE,
  ">": LineFlag.FOLDED | LineFlag.NEWLINE,
  "|-": LineFlag.LITERAL,
  ">-": LineFlag.FOLDED,
}


def classify(lines: list[ReaderLine]) -> None:
  """Type every line in place, inserting and removing lines as needed.

  Raises:
    ParsingError: malformed keys, values, offsets or a truncated document
  """
  index = 0
  while index < len(lines):
    line = lines[index]
    if is_sequence_start(line.data):
      index = _split_sequence(lines, index)
      continue
    colon, quotes_before = find_unquoted(line.data, ":")
    if colon != -1:
      index = _split_mapping(lines, index, colon, quotes_before)
      continue
    index = _collect_scalar(lines, index)

  if lines and lines[-1].type is not NodeType.SCALAR:
    raise lines[-1].error(ParsingError, ERROR_UNEXPECTED_DOCUMENT_END)


def _more_indented(lines: list[ReaderLine], index: int, than: ReaderLine) -> bool:
  return index < len(lines) and lines[index].offset > than.offset


def _insert_empty_scalar(lines: list[ReaderLine], index: int, owner: ReaderLine, offset: int) -> int:
  lines.insert(index, ReaderLine("", owner.no, offset, type=NodeType.SCALAR))
  return index + 1


def _split_sequence(lines: list[ReaderLine], index: int) -> int:
  line = lines[index]
  line.type = NodeType.SEQUENCE
  content = line.data[1:].lstrip(WHITESPACE)
  if not content:
    line.data = ""
    if _more_indented(lines, index + 1, line):
      return index + 1
    return _insert_empty_scalar(lines, index + 1, line, line.offset + 2)

  start = len(line.data) - len(content)
  line.data = ""
  if content in BLOCK_INDICATORS:
    line.flags |= BLOCK_INDICATORS[content]
    return _open_block(lines, index)

  # the inline content is classified on the next pass of the loop
  lines.insert(index + 1, ReaderLine(content, line.no, line.offset + start))
  return index + 1


def _split_mapping(lines: list[ReaderLine], index: int, colon: int, quotes_before: int) -> int:
  line = lines[index]
  if quotes_before > 1:
    raise line.error(ParsingError, ERROR_KEY_INCORRECT)
  line.type = NodeType.MAP

  key = line.data[:colon].rstrip(WHITESPACE)
  if not key:
    raise line.error(ParsingError, ERROR_KEY_MISSING)
  if quotes_before == 1:
    if key[0] != '"' or key[-1] != '"':
      raise line.error(ParsingError, ERROR_KEY_INCORRECT)
    key = key[1:-1]
  key = remove_escapes(key)

  rest = line.data[colon + 1:]
  value = rest.lstrip(WHITESPACE)
  value_start = colon + 1 + len(rest) - len(value)
  if is_sequence_start(value):
    raise line.error(ParsingError, ERROR_BLOCK_SEQUENCE_NOT_ALLOWED, column=value_start + 1)

  line.data = key
  if not value:
    if _more_indented(lines, index + 1, line):
      return index + 1
    return _insert_empty_scalar(lines, index + 1, line, line.offset + colon + 1)

  if value in BLOCK_INDICATORS:
    line.flags |= BLOCK_INDICATORS[value]
    return _open_block(lines, index)

  if _more_indented(lines, index + 1, line):
    raise line.error(ParsingError, ERROR_INCORRECT_OFFSET)
  lines.insert(index + 1, ReaderLine(value, line.no, line.offset + value_start))
  return _collect_scalar(lines, index + 1)


def _open_block(lines: list[ReaderLine], index: int) -> int:
  header = lines[index]
  if _more_indented(lines, index + 1, header):
    # the first body line is a scalar whatever it looks like
    return _collect_scalar(lines, index + 1)
  return _insert_empty_scalar(lines, index + 1, header, header.offset + 2)


def _collect_scalar(lines: list[ReaderLine], index: int) -> int:
  line = lines[index]
  line.type = NodeType.SCALAR
  if index > 0:
    line.flags |= lines[index - 1].flags & BLOCK_FLAGS

  if not line.is_block():
    line.data = _unquote(line)
    return index + 1

  separator = "\n" if line.flags & LineFlag.LITERAL else " "
  parts = [line.data]
  following = index + 1
  while following < len(lines) and lines[following].offset >= line.offset:
    continuation = lines.pop(following)
    parts.append(separator + " " * (continuation.offset - line.offset) + continuation.data)
  if line.flags & LineFlag.NEWLINE:
    parts.append("\n")
  line.data = "".join(parts)
  return index + 1


def _unquote(line: ReaderLine) -> str:
  value = line.data
  if not value.startswith('"'):
    return value
  spans = quote_spans(value)
  if not spans or spans[0] != (0, len(value) - 1):
    raise line.error(ParsingError, ERROR_VALUE_INCORRECT)
  return remove_escapes(value[1:-1])
