"""
Error types raised by the videotaxi client.

Every error derives from SpeechApiError so callers can catch the whole family at once.
Underlying library exceptions are chained via ``raise ... from``.
"""


class SpeechApiError(Exception):
  """Base class for all client errors."""


class WebSocketError(SpeechApiError):
  """WebSocket handshake, write or close failure."""

  def __init__(self, message: str = "WebSocket connection error"):
    super().__init__(message)


class EventDecodeError(SpeechApiError, ValueError):
  """An inbound text frame is not a valid event envelope."""

  def __init__(self, message: str, raw: str | None = None):
    super().__init__(message)
    self.raw = raw


class HttpError(SpeechApiError):
  """Control-plane request failed at the HTTP layer."""

  def __init__(self, message: str, status_code: int | None = None):
    super().__init__(message)
    self.status_code = status_code


class Timeout(SpeechApiError):
  def __init__(self, message: str = "Connection timeout"):
    super().__init__(message)


class InvalidAudioFormat(SpeechApiError, ValueError):
  def __init__(self, message: str = "Invalid audio format"):
    super().__init__(message)


class SessionNotFound(SpeechApiError):
  def __init__(self, session_id: str):
    super().__init__(f"Session not found: {session_id}")
    self.session_id = session_id


class AuthenticationFailed(SpeechApiError):
  def __init__(self, message: str = "Authentication failed"):
    super().__init__(message)


class InvalidConfig(SpeechApiError):
  """Configuration is missing, malformed, or a response lacks an expected field."""


class ConnectionClosed(SpeechApiError):
  """The event stream closed abnormally."""

  def __init__(self, message: str = "Connection closed unexpectedly"):
    super().__init__(message)
