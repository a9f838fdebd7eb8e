"""Recursive-descent tree builder over classified lines."""
from __future__ import annotations

from dataclasses import dataclass

from lineyaml.errors import (
  ERROR_DIFF_ENTRY_NOT_ALLOWED,
  ERROR_INCORRECT_OFFSET,
  ERROR_UNEXPECTED_DOCUMENT_END,
  InternalError,
  ParsingError,
)
from lineyaml.node import Node, NodeType
from lineyaml.reader import ReaderLine


@dataclass
class _BuilderState:
  lines: list[ReaderLine]
  index: int = 0

  def peek(self) -> ReaderLine | None:
    if self.index < len(self.lines):
      return self.lines[self.index]
    return None

  def pop(self) -> ReaderLine:
    line = self.lines[self.index]
    self.index += 1
    return line


def build(root: Node, lines: list[ReaderLine]) -> None:
  """Populate ``root`` from lines produced by :func:`lineyaml.lines.classify`.

  The column offset is the only nesting signal: an equal offset is a
  sibling, a smaller one closes the current collection and a larger one is
  malformed.
  """
  state = _BuilderState(lines)
  first = state.peek()
  if first is None:
    return
  _process(root, state)
  if state.peek() is not None:
    raise InternalError(ERROR_UNEXPECTED_DOCUMENT_END, line=first.no, data=first.data)


def _process(node: Node, state: _BuilderState) -> None:
  line = state.peek()
  if line.type is NodeType.SCALAR:
    node.set(state.pop().data)
  elif line.type in (NodeType.SEQUENCE, NodeType.MAP):
    _process_collection(node, state)
  else:
    raise InternalError(ERROR_UNEXPECTED_DOCUMENT_END, line=line.no, data=line.data)


def _process_collection(node: Node, state: _BuilderState) -> None:
  while state.peek() is not None:
    line = state.pop()
    if line.type is NodeType.SEQUENCE:
      child = node.push_back()
    else:
      child = node[line.data]
      child.clear()

    if state.peek() is None:
      raise InternalError(ERROR_UNEXPECTED_DOCUMENT_END, line=line.no, data=line.data)
    _process(child, state)

    following = state.peek()
    if following is None or following.offset < line.offset:
      break
    if following.offset > line.offset:
      raise ParsingError(ERROR_INCORRECT_OFFSET, line=following.no, data=following.data)
    if following.type is not line.type:
      raise InternalError(ERROR_DIFF_ENTRY_NOT_ALLOWED, line=following.no, data=following.data)
