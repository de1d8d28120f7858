"""
Shared helpers for the videotaxi client: logging setup and log value formatting.
"""

from videotaxi.common.format import Bytes, Milliseconds, Pretty, Range, Seconds, Unit
from videotaxi.common.logs import get_logger, setup_logging, setup_logging_from_env

__all__ = [
  "get_logger",
  "setup_logging",
  "setup_logging_from_env",
  "Bytes",
  "Milliseconds",
  "Pretty",
  "Range",
  "Seconds",
  "Unit",
]
