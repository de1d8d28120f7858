"""
Pydantic models for the events delivered on the viewer socket.

Each event on the wire is an object with a ``kind`` tag and a ``payload`` body. The tag selects
one of seven variants; any other tag is rejected during validation.
"""

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, Field


class EventKind(StrEnum):
  """Wire tags for the event variants."""

  PARTIAL = "partial"
  TRANSCRIPT = "transcript"
  TRANSLATION = "translation"
  VOICEOVER = "voiceover"
  VOICE = "voice"
  START_OF_STREAM = "start_of_stream"
  END_OF_STREAM = "end_of_stream"


class PartialPayload(BaseModel):
  """An interim transcript that may still change."""

  id: str | None = None
  text: str
  latency: float
  """Seconds between the audio being spoken and this result."""


class TranscriptPayload(BaseModel):
  """A finalized sentence in the master language."""

  sentence_id: str
  text: str
  latency: float
  speaker: str
  created_at: int
  """Creation time in epoch milliseconds."""

  from_ms: float
  """Start of the sentence within the stream, in milliseconds."""

  to_ms: float
  """End of the sentence within the stream (exclusive), in milliseconds."""


class TranslationPayload(BaseModel):
  """A finalized sentence translated into the viewer language."""

  id: str
  sentence_id: str
  text: str
  original: str
  """The transcript text this translation was produced from."""

  latency: float
  speaker: str
  created_at: int
  from_ms: float
  to_ms: float


class VoiceoverPayload(BaseModel):
  """Synthesized speech for a translation, delivered by reference."""

  id: str
  text: str
  original: str
  latency: float
  speaker: str
  created_at: int
  playback_uri: str
  from_ms: float
  to_ms: float


class VoicePayload(BaseModel):
  """A chunk of synthesized speech delivered inline as base64 16-bit PCM."""

  id: str
  sentence_id: str
  text: str
  latency: float
  speaker: str
  created_at: int
  audio: str
  """Base64 encoded little-endian signed 16-bit PCM."""

  seq: int = Field(ge=0)
  """Increasing sequence number. Events are not reordered on this; consumers may."""

  from_ms: float
  to_ms: float


class StartOfStreamPayload(BaseModel):
  pass


class EndOfStreamPayload(BaseModel):
  reason: str


class PartialEvent(BaseModel):
  kind: Literal["partial"] = "partial"
  payload: PartialPayload


class TranscriptEvent(BaseModel):
  kind: Literal["transcript"] = "transcript"
  payload: TranscriptPayload


class TranslationEvent(BaseModel):
  kind: Literal["translation"] = "translation"
  payload: TranslationPayload


class VoiceoverEvent(BaseModel):
  kind: Literal["voiceover"] = "voiceover"
  payload: VoiceoverPayload


class VoiceEvent(BaseModel):
  kind: Literal["voice"] = "voice"
  payload: VoicePayload


class StartOfStreamEvent(BaseModel):
  kind: Literal["start_of_stream"] = "start_of_stream"
  payload: StartOfStreamPayload = Field(default_factory=StartOfStreamPayload)


class EndOfStreamEvent(BaseModel):
  kind: Literal["end_of_stream"] = "end_of_stream"
  payload: EndOfStreamPayload


# Discriminated union of every event variant
Event = Annotated[
  PartialEvent
  | TranscriptEvent
  | TranslationEvent
  | VoiceoverEvent
  | VoiceEvent
  | StartOfStreamEvent
  | EndOfStreamEvent,
  Field(discriminator="kind"),
]


class EventEnvelope(BaseModel):
  """Body of a single viewer socket text frame."""

  events: list[Event]
