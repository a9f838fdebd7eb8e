"""Error kinds raised by the parser and the serializer."""
from __future__ import annotations

ERROR_INVALID_CHARACTER = "Invalid character found."
ERROR_KEY_MISSING = "Missing key."
ERROR_KEY_INCORRECT = "Incorrect key."
ERROR_VALUE_INCORRECT = "Incorrect value."
ERROR_TAB_IN_OFFSET = "Tab found in offset."
ERROR_BLOCK_SEQUENCE_NOT_ALLOWED = "Block sequence entries are not allowed in this context."
ERROR_UNEXPECTED_DOCUMENT_END = "Unexpected document end."
ERROR_DIFF_ENTRY_NOT_ALLOWED = "Different entry is not allowed in this context."
ERROR_INCORRECT_OFFSET = "Incorrect offset."
ERROR_CANNOT_OPEN_FILE = "Cannot open file."
ERROR_INDENTATION = "Space indentation is less than 2."


class YamlError(Exception):
  """Base exception for all lineyaml failures.

  ``kind`` is one of ``"parsing"``, ``"internal"`` or ``"operation"``.
  ``line`` and ``column`` are 1-based and ``None`` when not applicable.
  """

  kind = "error"

  def __init__(
    self,
    message: str,
    line: int | None = None,
    column: int | None = None,
    data: str | None = None,
  ):
    self.message = message
    self.line = line
    self.column = column
    self.data = data
    super().__init__(self._render())

  def _render(self) -> str:
    text = self.message
    if self.line is not None:
      text += f" Line {self.line}"
      if self.column is not None:
        text += f" column {self.column}"
      if self.data is not None:
        text += f": {self.data}"
    return text

  def as_dict(self) -> dict[str, str | int | None]:
    return {"kind": self.kind, "message": self.message, "line": self.line, "column": self.column}


class ParsingError(YamlError):
  """Malformed input text."""

  kind = "parsing"


class InternalError(YamlError):
  """A structural invariant expected by the tree builder was violated."""

  kind = "internal"


class OperationError(YamlError):
  """Environment or configuration failure unrelated to document content."""

  kind = "operation"
