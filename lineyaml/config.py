"""Serializer configuration and its environment defaults."""
from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, Field

from lineyaml.log import log

ENV_PREFIX = "LINEYAML_"

# Default values
DEFAULT_INDENT_WIDTH = 2
DEFAULT_MAX_SCALAR_LENGTH = 64
MIN_INDENT_WIDTH = 2

_TRUE_VALUES = {"true", "1", "yes", "y", "on"}
_FALSE_VALUES = {"false", "0", "no", "n", "off"}


def bool_with_default(value: Any, default: bool) -> bool:
  """Interpret a loosely typed flag, falling back to ``default``.

  Args:
    value: Raw value (bool, None or string)
    default: Value used for None and unrecognised strings

  Returns:
    Parsed boolean
  """
  if value is None:
    return default
  if isinstance(value, bool):
    return value
  lowered = str(value).strip().lower()
  if lowered in _TRUE_VALUES:
    return True
  if lowered in _FALSE_VALUES:
    return False
  log(f"Unknown boolean value {value!r}, Default={default}")
  return default


def _int_from_env(name: str, default: int) -> int:
  raw = os.environ.get(name)
  if raw is None or not raw.strip():
    return default
  try:
    return int(raw)
  except ValueError:
    log(f"{name}={raw!r} is not a number, Default={default}")
    return default


class SerializeConfig(BaseModel):
  """Formatting options for :func:`lineyaml.writer.serialize`.

  ``indent_width`` is checked when serializing, so an invalid width surfaces
  as an ``OperationError`` rather than a validation error.
  """

  indent_width: int = DEFAULT_INDENT_WIDTH
  max_scalar_length: int = Field(default=DEFAULT_MAX_SCALAR_LENGTH, ge=0)
  sequence_map_newline: bool = False
  map_scalar_newline: bool = False

  @classmethod
  def from_env(cls, **overrides: Any) -> SerializeConfig:
    """Build a config from ``LINEYAML_*`` environment variables.

    Keyword overrides that are not None win over the environment.
    """
    values: dict[str, Any] = {
      "indent_width": _int_from_env(f"{ENV_PREFIX}INDENT_WIDTH", DEFAULT_INDENT_WIDTH),
      "max_scalar_length": _int_from_env(f"{ENV_PREFIX}MAX_SCALAR_LENGTH", DEFAULT_MAX_SCALAR_LENGTH),
      "sequence_map_newline": bool_with_default(os.environ.get(f"{ENV_PREFIX}SEQUENCE_MAP_NEWLINE"), False),
      "map_scalar_newline": bool_with_default(os.environ.get(f"{ENV_PREFIX}MAP_SCALAR_NEWLINE"), False),
    }
    values.update({key: value for key, value in overrides.items() if value is not None})
    return cls(**values)
