"""
Audio helpers for the videotaxi client.

Converts the inline PCM carried by voice events to samples and back, and wraps outbound audio
chunks with an informational container tag. No transcoding happens here.
"""

import base64
import binascii
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

import numpy as np

from videotaxi.errors import InvalidAudioFormat
from videotaxi.wire import VoicePayload

# Signed 16-bit little-endian, the PCM layout of voice events
PCM_DTYPE = np.dtype("<i2")


class AudioFormat(StrEnum):
  """Container or codec of an outbound audio chunk."""

  WEBM = "webm"
  MPEG_TS = "mpegts"
  RAW = "raw"


@dataclass(frozen=True)
class AudioFrame:
  """Raw audio bytes plus a format tag that the transport never inspects."""

  data: bytes
  format: AudioFormat


def decode_voice_audio(voice_payload: VoicePayload) -> np.ndarray:
  """
  Decode the base64 PCM carried by a voice event.

  A trailing odd byte is dropped without error; only whole 2-byte samples are returned.

  :param voice_payload: Payload of a voice event
  :returns: 1-D int16 array of samples
  :raises InvalidAudioFormat: If the audio field is not valid base64
  """
  try:
    decoded = base64.b64decode(voice_payload.audio, validate=True)
  except (binascii.Error, ValueError) as e:
    raise InvalidAudioFormat(f"Invalid base64 audio in voice event {voice_payload.id}") from e

  whole = len(decoded) - len(decoded) % PCM_DTYPE.itemsize
  return np.frombuffer(decoded[:whole], dtype=PCM_DTYPE).astype(np.int16)


def samples_to_bytes(samples: Sequence[int] | np.ndarray) -> bytes:
  """
  Pack samples as little-endian signed 16-bit PCM.

  :raises InvalidAudioFormat: If the samples are not integers or do not fit in int16
  """
  values = np.asarray(samples)
  if values.size == 0:
    return b""
  if values.dtype.kind not in "iu":
    raise InvalidAudioFormat(f"PCM samples must be integers, got dtype {values.dtype}")

  limits = np.iinfo(np.int16)
  low, high = int(values.min()), int(values.max())
  if low < limits.min or high > limits.max:
    raise InvalidAudioFormat(
      f"PCM samples must lie in [{limits.min}, {limits.max}], got [{low}, {high}]"
    )
  return values.astype(PCM_DTYPE).tobytes()


def create_audio_frame(data: bytes, format: AudioFormat) -> AudioFrame:
  return AudioFrame(data=bytes(data), format=format)
