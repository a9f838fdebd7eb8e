"""Logging helpers shared by the parser, the writer and the CLI."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

LOGGER_NAME = "lineyaml"

logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())


def log(line: str) -> None:
  """Log a timestamped debug message.

  Args:
    line: Log message
  """
  timestamp = datetime.now(timezone.utc).isoformat()
  logger.debug(f"[{timestamp}] {line}")


def setup_logging(level: int = logging.INFO) -> logging.Logger:
  """Attach a stream handler to the lineyaml logger once.

  Args:
    level: Logging level for the lineyaml logger

  Returns:
    The configured logger
  """
  if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
  logger.setLevel(level)
  return logger
