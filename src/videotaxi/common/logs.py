"""Logging configuration for videotaxi using structlog."""

import logging
import os
import time
from typing import Any

import numpy as np
import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

_PROGRAM_START_TIME = time.time()


class FloatPrecisionProcessor:
  """
  A structlog processor that rounds floats, including those nested in lists, dicts and numpy
  arrays. Latencies and time ranges arrive with more digits than anyone wants to read.

  :param digits: The number of digits to round to
  :param not_fields: Fields that are left untouched
  """

  def __init__(self, digits: int = 3, not_fields: frozenset[str] = frozenset()):
    self.digits = digits
    self.not_fields = not_fields

  def _round(self, value: Any) -> Any:
    if isinstance(value, bool):
      return value
    if isinstance(value, float):
      return round(value, self.digits)
    if isinstance(value, np.ndarray):
      return [self._round(item) for item in value.tolist()]
    if isinstance(value, list):
      return [self._round(item) for item in value]
    if isinstance(value, dict):
      return {k: self._round(v) for k, v in value.items()}
    return value

  def __call__(self, _: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    for key, value in event_dict.items():
      if key in self.not_fields:
        continue
      event_dict[key] = self._round(value)
    return event_dict


def _relative_time_processor(
  _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
  """Stamp each event with the time elapsed since program start, as +[H:][M:]S.mmm."""
  elapsed = time.time() - _PROGRAM_START_TIME

  hours = int(elapsed // 3600)
  minutes = int((elapsed % 3600) // 60)
  seconds = elapsed % 60

  hours_str = f"{hours:02d}:" if hours else ""
  minutes_str = f"{minutes:02d}:" if minutes or hours else ""
  event_dict["timestamp"] = f"+{hours_str}{minutes_str}{seconds:06.3f}"
  return event_dict


def setup_logging(
  level: str = "INFO", json_output: bool = False, correlation_id: str | None = None
) -> None:
  """Configure structured logging for an application using the client."""

  shared_processors: list[Processor] = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.stdlib.ExtraAdder(),
    FloatPrecisionProcessor(digits=3),
    _relative_time_processor,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
  ]

  if correlation_id:
    shared_processors.insert(0, structlog.contextvars.merge_contextvars)
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)

  if json_output:
    log_renderer: Processor = structlog.processors.JSONRenderer()
  else:
    log_renderer = structlog.dev.ConsoleRenderer(colors=True)

  structlog.configure(
    processors=[structlog.stdlib.filter_by_level]
    + shared_processors
    + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
  )

  formatter = structlog.stdlib.ProcessorFormatter(
    foreign_pre_chain=shared_processors,
    processors=[
      structlog.stdlib.ProcessorFormatter.remove_processors_meta,
      log_renderer,
    ],
  )

  handler = logging.StreamHandler()
  handler.setFormatter(formatter)
  root_logger = logging.getLogger()
  root_logger.addHandler(handler)
  root_logger.setLevel(level)

  # The websockets and httpx loggers are chatty at INFO
  for liblog in [logging.getLogger(_liblog) for _liblog in ["websockets", "httpx", "httpcore"]]:
    liblog.handlers.clear()
    liblog.setLevel(logging.WARNING)
    liblog.propagate = True


def get_logger(name: str | None = None, **initial_values: Any) -> structlog.stdlib.BoundLogger:
  """Get a structured logger instance."""
  return structlog.get_logger(name, **initial_values)


def setup_logging_from_env() -> None:
  """Setup logging using environment variables."""
  log_level = os.getenv("LOG_LEVEL", "INFO").upper()
  json_output = os.getenv("JSON_LOGS", "false").lower() in ("true", "1", "yes", "on")
  correlation_id = os.getenv("CORRELATION_ID")

  setup_logging(level=log_level, json_output=json_output, correlation_id=correlation_id)
