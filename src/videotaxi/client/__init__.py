"""
videotaxi client library.

Provisions realtime sessions, uploads audio over the master socket and reads events from the
viewer socket.
"""

from videotaxi.client.audio import (
  AudioFormat,
  AudioFrame,
  create_audio_frame,
  decode_voice_audio,
  samples_to_bytes,
)
from videotaxi.client.receiver import EventReceiver, ReceiverState
from videotaxi.client.resolver import SessionEndpoints, SessionResolver
from videotaxi.client.sender import AudioSender
from videotaxi.client.session import Connector, Session, VideoTaxiClient

__all__ = [
  "AudioFormat",
  "AudioFrame",
  "AudioSender",
  "Connector",
  "EventReceiver",
  "ReceiverState",
  "Session",
  "SessionEndpoints",
  "SessionResolver",
  "VideoTaxiClient",
  "create_audio_frame",
  "decode_voice_audio",
  "samples_to_bytes",
]
