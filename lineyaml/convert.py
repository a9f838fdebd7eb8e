"""Conversion between document trees and plain Python values."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from lineyaml.node import Node, NodeType


def from_python(value: Any, node: Node | None = None) -> Node:
  """Build a tree from dicts, lists/tuples, scalars and None.

  Map keys are converted with ``str``; scalars are formatted the way
  :meth:`Node.set` formats them.
  """
  root = node if node is not None else Node()
  root.clear()
  pending: list[tuple[Any, Node]] = [(value, root)]
  while pending:
    current, target = pending.pop()
    if isinstance(current, Mapping):
      target.coerce(NodeType.MAP)
      for key, item in current.items():
        pending.append((item, target[str(key)]))
    elif isinstance(current, (list, tuple)):
      target.coerce(NodeType.SEQUENCE)
      for item in current:
        pending.append((item, target.push_back()))
    else:
      target.set(current)
  return root


def to_python(node: Node) -> Any:
  """Return nested dicts/lists/strings; None nodes become ``None``."""
  if node.is_scalar():
    return node.as_string()
  if node.is_sequence():
    return [to_python(child) for _, child in node]
  if node.is_map():
    return {key: to_python(child) for key, child in node}
  return None
