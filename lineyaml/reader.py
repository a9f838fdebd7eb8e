"""Line-oriented lexer: raw text to trimmed, position-tagged lines."""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Flag, auto

from lineyaml.errors import ERROR_INVALID_CHARACTER, ERROR_TAB_IN_OFFSET, ParsingError
from lineyaml.node import NodeType

DOCUMENT_START = "---"
DOCUMENT_END = "..."
WHITESPACE = " \t"

_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


class LineFlag(Flag):
  NONE = 0
  LITERAL = auto()
  FOLDED = auto()
  NEWLINE = auto()


BLOCK_FLAGS = LineFlag.LITERAL | LineFlag.FOLDED | LineFlag.NEWLINE


@dataclass
class ReaderLine:
  data: str
  no: int
  offset: int = 0
  type: NodeType = NodeType.NONE
  flags: LineFlag = LineFlag.NONE

  def is_block(self) -> bool:
    return bool(self.flags & (LineFlag.LITERAL | LineFlag.FOLDED))

  def error(self, cls: type[ParsingError], message: str, column: int | None = None) -> ParsingError:
    return cls(message, line=self.no, column=column, data=self.data)


def quote_spans(text: str) -> list[tuple[int, int]]:
  """Return ``(start, end)`` positions of paired, unescaped double quotes."""
  spans: list[tuple[int, int]] = []
  start = -1
  escaped = False
  for pos, char in enumerate(text):
    if escaped:
      escaped = False
    elif char == "\\":
      escaped = True
    elif char == '"':
      if start < 0:
        start = pos
      else:
        spans.append((start, pos))
        start = -1
  return spans


def find_unquoted(text: str, token: str) -> tuple[int, int]:
  """Find the first ``token`` outside every quoted span.

  Returns:
    ``(position, spans_before)``; position is -1 when there is no such token.
  """
  spans = quote_spans(text)
  pos = text.find(token)
  while pos != -1:
    if not any(start <= pos <= end for start, end in spans):
      return pos, sum(1 for start, _ in spans if start < pos)
    pos = text.find(token, pos + 1)
  return -1, 0


def remove_escapes(text: str) -> str:
  return _ESCAPE_RE.sub(r"\1", text)


def add_escapes(text: str) -> str:
  return text.replace("\\", "\\\\").replace('"', '\\"')


def is_sequence_start(text: str) -> bool:
  return text[:1] == "-" and (len(text) == 1 or text[1] == " ")


def _strip_comment(line: str) -> str:
  pos, _ = find_unquoted(line, "#")
  return line[:pos] if pos != -1 else line


def _check_characters(line: str, no: int) -> None:
  for pos, char in enumerate(line):
    code = ord(char)
    if char != "\t" and (code < 32 or code > 125):
      raise ParsingError(ERROR_INVALID_CHARACTER, line=no, column=pos + 1)


def read_lines(text: str) -> list[ReaderLine]:
  """Split ``text`` into content lines.

  Comments, blank lines and document markers are dropped. The first ``---``
  discards everything read before it and ``...`` ends the document.

  Raises:
    ParsingError: invalid character or tab in indentation
  """
  lines: list[ReaderLine] = []
  document_start_found = False
  for no, raw in enumerate(text.split("\n"), start=1):
    line = _strip_comment(raw)
    if line.endswith("\r"):
      line = line[:-1]
    if not document_start_found and line == DOCUMENT_START:
      lines.clear()
      document_start_found = True
      continue
    if line == DOCUMENT_END:
      break
    if not line:
      continue
    _check_characters(line, no)
    lines.append(ReaderLine(line, no))

  content: list[ReaderLine] = []
  for line in lines:
    stripped = line.data.lstrip(WHITESPACE)
    if not stripped:
      continue
    start = len(line.data) - len(stripped)
    tab = line.data.find("\t")
    if -1 < tab < start:
      raise line.error(ParsingError, ERROR_TAB_IN_OFFSET, column=tab + 1)
    line.data = stripped.rstrip(WHITESPACE)
    line.offset = start
    content.append(line)
  return content
