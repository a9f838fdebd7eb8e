"""Owned document tree: one ``Node`` per value, exactly one active type."""
from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import Any


class NodeType(Enum):
  NONE = "none"
  SCALAR = "scalar"
  SEQUENCE = "sequence"
  MAP = "map"


_TRUE_STRINGS = {"true", "yes", "y", "on", "1"}
_FALSE_STRINGS = {"false", "no", "n", "off", "0"}


def _format_scalar(value: Any) -> str:
  if isinstance(value, bool):
    return "true" if value else "false"
  return str(value)


def _convert(text: str, typ: type) -> Any:
  if typ is bool:
    lowered = text.strip().lower()
    if lowered in _TRUE_STRINGS:
      return True
    if lowered in _FALSE_STRINGS:
      return False
    raise ValueError(text)
  return typ(text.strip()) if typ in (int, float) else typ(text)


class Node:
  """A value in the document tree.

  Indexing has a documented side effect: ``node[0]`` coerces the node into a
  sequence and ``node["key"]`` into a map, discarding any previous content of
  another type. Use :meth:`get` for a lookup that never changes the node.
  """

  __slots__ = ("_type", "_value")

  def __init__(self, value: Any = None) -> None:
    self._type = NodeType.NONE
    self._value: Any = None
    if value is not None:
      self.set(value)

  # -- type queries -------------------------------------------------------

  @property
  def type(self) -> NodeType:
    return self._type

  def is_none(self) -> bool:
    return self._type is NodeType.NONE

  def is_scalar(self) -> bool:
    return self._type is NodeType.SCALAR

  def is_sequence(self) -> bool:
    return self._type is NodeType.SEQUENCE

  def is_map(self) -> bool:
    return self._type is NodeType.MAP

  def size(self) -> int:
    if self._type in (NodeType.SEQUENCE, NodeType.MAP):
      return len(self._value)
    return 0

  def __len__(self) -> int:
    return self.size()

  def __bool__(self) -> bool:
    return self._type is not NodeType.NONE

  def clear(self) -> None:
    self._type = NodeType.NONE
    self._value = None

  # -- coercion -----------------------------------------------------------

  def coerce(self, node_type: NodeType) -> Node:
    """Turn this node into an empty ``node_type`` unless it already is one."""
    if node_type is NodeType.SEQUENCE:
      self._init_sequence()
    elif node_type is NodeType.MAP:
      self._init_map()
    elif node_type is NodeType.SCALAR:
      if self._type is not NodeType.SCALAR:
        self.set("")
    else:
      self.clear()
    return self

  def _init_sequence(self) -> list[Node]:
    if self._type is not NodeType.SEQUENCE:
      self._type = NodeType.SEQUENCE
      self._value = []
    return self._value

  def _init_map(self) -> dict[str, Node]:
    if self._type is not NodeType.MAP:
      self._type = NodeType.MAP
      self._value = {}
    return self._value

  # -- access -------------------------------------------------------------

  def __getitem__(self, key: int | str) -> Node:
    if isinstance(key, int):
      child = self.at(key)
      if child is None:
        raise IndexError(f"sequence position {key} out of range")
      return child
    items = self._init_map()
    child = items.get(key)
    if child is None:
      child = items[key] = Node()
    return child

  def __setitem__(self, key: int | str, value: Any) -> None:
    self[key].set(value)

  def __delitem__(self, key: int | str) -> None:
    self.erase(key)

  def at(self, index: int) -> Node | None:
    """Coerce to a sequence and return the element at ``index``, or ``None``."""
    items = self._init_sequence()
    if 0 <= index < len(items):
      return items[index]
    return None

  def get(self, key: int | str) -> Node | None:
    """Lookup without coercion; ``None`` when absent or of another type."""
    if isinstance(key, int):
      if self._type is NodeType.SEQUENCE and 0 <= key < len(self._value):
        return self._value[key]
      return None
    if self._type is NodeType.MAP:
      return self._value.get(key)
    return None

  def __contains__(self, key: object) -> bool:
    return self._type is NodeType.MAP and key in self._value

  # -- sequence mutation --------------------------------------------------

  def insert(self, index: int) -> Node:
    """Insert a new element at ``index``, shifting later elements up by one.

    An index at or past the end appends.
    """
    items = self._init_sequence()
    child = Node()
    if index < 0:
      index = 0
    items.insert(min(index, len(items)), child)
    return child

  def push_front(self) -> Node:
    return self.insert(0)

  def push_back(self) -> Node:
    items = self._init_sequence()
    child = Node()
    items.append(child)
    return child

  def erase(self, key: int | str) -> None:
    if isinstance(key, int):
      if self._type is NodeType.SEQUENCE and 0 <= key < len(self._value):
        del self._value[key]
    elif self._type is NodeType.MAP:
      self._value.pop(key, None)

  # -- assignment ---------------------------------------------------------

  def set(self, value: Any) -> Node:
    """Replace the content of this node.

    ``str`` (and bool/int/float) values become a scalar; a ``Node`` or
    ``NodeView`` is deep copied; ``None`` clears.
    """
    if isinstance(value, NodeView):
      value = value._node
    if isinstance(value, Node):
      if value is not self:
        # copy first: value may be an ancestor or descendant of self
        duplicate = value.copy()
        self._type, self._value = duplicate._type, duplicate._value
      return self
    if value is None:
      self.clear()
      return self
    if isinstance(value, (list, tuple, dict)):
      raise TypeError("use lineyaml.convert.from_python for plain containers")
    self._type = NodeType.SCALAR
    self._value = value if isinstance(value, str) else _format_scalar(value)
    return self

  def copy(self) -> Node:
    duplicate = Node()
    _copy_into(self, duplicate)
    return duplicate

  # -- values -------------------------------------------------------------

  def as_string(self) -> str:
    if self._type is NodeType.SCALAR:
      return self._value
    return ""

  def as_(self, typ: type = str, default: Any = None) -> Any:
    """Convert the scalar text to ``typ``; ``default`` if that is impossible."""
    if self._type is not NodeType.SCALAR:
      return default
    try:
      return _convert(self._value, typ)
    except (TypeError, ValueError):
      return default

  # -- iteration ----------------------------------------------------------

  def _keys(self) -> list[int | str]:
    if self._type is NodeType.SEQUENCE:
      return list(range(len(self._value)))
    if self._type is NodeType.MAP:
      return sorted(self._value)
    return []

  def _child(self, key: int | str) -> Node:
    return self._value[key]

  def __iter__(self) -> Iterator[tuple[str, Node]]:
    cursor, end = self.begin(), self.end()
    while cursor != end:
      yield cursor.item()
      cursor.next()

  def keys(self) -> list[str]:
    if self._type is NodeType.MAP:
      return sorted(self._value)
    return []

  def begin(self, readonly: bool = False) -> Cursor:
    cls = ConstCursor if readonly else Cursor
    return cls(self, 0)

  def end(self, readonly: bool = False) -> Cursor:
    cls = ConstCursor if readonly else Cursor
    cursor = cls(self, 0)
    cursor.position = len(cursor._keys)
    return cursor

  # -- comparison ---------------------------------------------------------

  def __eq__(self, other: object) -> bool:
    if isinstance(other, NodeView):
      other = other._node
    if not isinstance(other, Node):
      return NotImplemented
    return _deep_equal(self, other)

  __hash__ = None  # type: ignore[assignment]

  def __repr__(self) -> str:
    if self._type is NodeType.SCALAR:
      return f"Node(scalar={self._value!r})"
    if self._type is NodeType.NONE:
      return "Node(none)"
    return f"Node({self._type.value}, size={self.size()})"


class NodeView:
  """Read-only window on a ``Node``; children are returned as views too."""

  __slots__ = ("_node",)

  def __init__(self, node: Node) -> None:
    self._node = node

  @property
  def type(self) -> NodeType:
    return self._node.type

  def is_none(self) -> bool:
    return self._node.is_none()

  def is_scalar(self) -> bool:
    return self._node.is_scalar()

  def is_sequence(self) -> bool:
    return self._node.is_sequence()

  def is_map(self) -> bool:
    return self._node.is_map()

  def size(self) -> int:
    return self._node.size()

  def __len__(self) -> int:
    return self._node.size()

  def __bool__(self) -> bool:
    return bool(self._node)

  def as_string(self) -> str:
    return self._node.as_string()

  def as_(self, typ: type = str, default: Any = None) -> Any:
    return self._node.as_(typ, default)

  def get(self, key: int | str) -> NodeView | None:
    child = self._node.get(key)
    return NodeView(child) if child is not None else None

  def keys(self) -> list[str]:
    return self._node.keys()

  def __iter__(self) -> Iterator[tuple[str, NodeView]]:
    cursor, end = self.begin(), self.end()
    while cursor != end:
      yield cursor.item()
      cursor.next()

  def begin(self) -> ConstCursor:
    return self._node.begin(readonly=True)

  def end(self) -> ConstCursor:
    return self._node.end(readonly=True)

  def copy(self) -> Node:
    return self._node.copy()

  def __eq__(self, other: object) -> bool:
    if isinstance(other, NodeView):
      other = other._node
    if not isinstance(other, Node):
      return NotImplemented
    return _deep_equal(self._node, other)

  __hash__ = None  # type: ignore[assignment]

  def __repr__(self) -> str:
    return f"NodeView({self._node!r})"


class Cursor:
  """Bidirectional cursor over a sequence (index order) or map (key order).

  The key list is captured when the cursor is created.
  """

  def __init__(self, node: Node, position: int = 0) -> None:
    self._node = node
    self._type = node.type if node.type in (NodeType.SEQUENCE, NodeType.MAP) else NodeType.NONE
    self._keys = node._keys()
    self.position = position

  @property
  def key(self) -> str:
    if self._type is NodeType.MAP:
      return self._keys[self.position]
    return ""

  @property
  def value(self) -> Node:
    if not 0 <= self.position < len(self._keys):
      raise IndexError("cursor is not dereferenceable")
    return self._node._child(self._keys[self.position])

  def item(self) -> tuple[str, Node]:
    return self.key, self.value

  def next(self) -> Cursor:
    self.position += 1
    return self

  def prev(self) -> Cursor:
    self.position -= 1
    return self

  def __eq__(self, other: object) -> bool:
    if not isinstance(other, Cursor):
      return NotImplemented
    return (
      self._type is other._type
      and self._node is other._node
      and self.position == other.position
    )

  __hash__ = None  # type: ignore[assignment]


class ConstCursor(Cursor):
  @property
  def value(self) -> NodeView:  # type: ignore[override]
    return NodeView(super().value)

  def item(self) -> tuple[str, NodeView]:  # type: ignore[override]
    return self.key, self.value


def _copy_into(source: Node, target: Node) -> None:
  pending = [(source, target)]
  while pending:
    src, dst = pending.pop()
    dst.clear()
    if src.is_scalar():
      dst.set(src.as_string())
    elif src.is_sequence():
      items = dst._init_sequence()
      for child in src._value:
        duplicate = Node()
        items.append(duplicate)
        pending.append((child, duplicate))
    elif src.is_map():
      mapping = dst._init_map()
      for key, child in src._value.items():
        duplicate = mapping[key] = Node()
        pending.append((child, duplicate))


def _deep_equal(left: Node, right: Node) -> bool:
  pending = [(left, right)]
  while pending:
    a, b = pending.pop()
    if a is b:
      continue
    if a.type is not b.type:
      return False
    if a.is_scalar():
      if a._value != b._value:
        return False
    elif a.is_sequence():
      if len(a._value) != len(b._value):
        return False
      pending.extend(zip(a._value, b._value))
    elif a.is_map():
      if a._value.keys() != b._value.keys():
        return False
      pending.extend((a._value[key], b._value[key]) for key in a._value)
  return True
