"""
videotaxi: realtime captioning and translation streaming client for VIDEO.TAXI.
"""

from videotaxi.client import (
  AudioFormat,
  AudioFrame,
  AudioSender,
  EventReceiver,
  ReceiverState,
  Session,
  VideoTaxiClient,
  create_audio_frame,
  decode_voice_audio,
  samples_to_bytes,
)
from videotaxi.config import ClientConfig, SessionConfig
from videotaxi.constants import DEFAULT_API_URL
from videotaxi.errors import (
  AuthenticationFailed,
  ConnectionClosed,
  EventDecodeError,
  HttpError,
  InvalidAudioFormat,
  InvalidConfig,
  SessionNotFound,
  SpeechApiError,
  Timeout,
  WebSocketError,
)

__version__ = "0.1.0"

__all__ = [
  "DEFAULT_API_URL",
  "AudioFormat",
  "AudioFrame",
  "AudioSender",
  "AuthenticationFailed",
  "ClientConfig",
  "ConnectionClosed",
  "EventDecodeError",
  "EventReceiver",
  "HttpError",
  "InvalidAudioFormat",
  "InvalidConfig",
  "ReceiverState",
  "Session",
  "SessionConfig",
  "SessionNotFound",
  "SpeechApiError",
  "Timeout",
  "VideoTaxiClient",
  "WebSocketError",
  "create_audio_frame",
  "decode_voice_audio",
  "samples_to_bytes",
]
