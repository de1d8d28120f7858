"""
Wire protocol for the viewer socket.

Contains the event models delivered by the service and the codec that reads them from text
frames.
"""

from .codec import deserialize_event, deserialize_events, serialize_events
from .events import (
  EndOfStreamEvent,
  EndOfStreamPayload,
  Event,
  EventEnvelope,
  EventKind,
  PartialEvent,
  PartialPayload,
  StartOfStreamEvent,
  StartOfStreamPayload,
  TranscriptEvent,
  TranscriptPayload,
  TranslationEvent,
  TranslationPayload,
  VoiceEvent,
  VoiceoverEvent,
  VoiceoverPayload,
  VoicePayload,
)

__all__ = [
  "EndOfStreamEvent",
  "EndOfStreamPayload",
  "Event",
  "EventEnvelope",
  "EventKind",
  "PartialEvent",
  "PartialPayload",
  "StartOfStreamEvent",
  "StartOfStreamPayload",
  "TranscriptEvent",
  "TranscriptPayload",
  "TranslationEvent",
  "TranslationPayload",
  "VoiceEvent",
  "VoiceoverEvent",
  "VoiceoverPayload",
  "VoicePayload",
  "deserialize_event",
  "deserialize_events",
  "serialize_events",
]
