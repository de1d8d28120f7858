"""
Codec for viewer socket frames.

Converts between JSON text frames and event model instances, hiding the Pydantic details and
turning validation failures into EventDecodeError.
"""

from collections.abc import Iterable

from pydantic import TypeAdapter, ValidationError

from videotaxi.errors import EventDecodeError
from videotaxi.wire.events import Event, EventEnvelope

_event_adapter: TypeAdapter[Event] = TypeAdapter(Event)


def deserialize_events(json_str: str | bytes) -> list[Event]:
  """
  Decode a viewer socket text frame into its events.

  Args:
      json_str: The frame body, an object of the form ``{"events": [...]}``

  Returns:
      The events in the order they appear in the frame

  Raises:
      EventDecodeError: If the text is not JSON, does not match the envelope, or any entry
          carries an unknown ``kind`` or a payload that does not match its kind
  """
  try:
    envelope = EventEnvelope.model_validate_json(json_str)
  except ValidationError as e:
    raw = json_str.decode("utf-8", errors="replace") if isinstance(json_str, bytes) else json_str
    raise EventDecodeError(f"Failed to parse event envelope: {e}", raw=raw) from e
  return envelope.events


def deserialize_event(data: dict) -> Event:
  """
  Validate a single ``{"kind": ..., "payload": ...}`` mapping.

  Public counterpart of ``deserialize_events`` for callers holding one already-parsed entry,
  such as events stored with ``model_dump()`` and replayed later.

  Raises:
      EventDecodeError: If the kind is unknown or the payload does not match it
  """
  try:
    return _event_adapter.validate_python(data)
  except ValidationError as e:
    raise EventDecodeError(f"Failed to parse event: {e}") from e


def serialize_events(events: Iterable[Event]) -> str:
  """Encode events as a viewer socket text frame."""
  envelope = EventEnvelope(events=list(events))
  return envelope.model_dump_json()
