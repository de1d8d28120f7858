"""
VideoTaxiClient: provisions realtime sessions and opens their sockets.

Provisioning and the master socket are single-shot; only the viewer socket connection is
retried, with a fixed number of attempts and a fixed delay between them.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeAlias

import httpx
from pydantic import BaseModel, ConfigDict
from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import WebSocketException

from videotaxi.client.receiver import EventReceiver
from videotaxi.client.resolver import SessionResolver
from videotaxi.client.sender import AudioSender
from videotaxi.common import Seconds, get_logger
from videotaxi.config import ClientConfig, SessionConfig
from videotaxi.errors import InvalidConfig, WebSocketError

Connector: TypeAlias = Callable[[str], Awaitable[ClientConnection]]

# Failures a WebSocket opening handshake can produce
_CONNECT_ERRORS = (OSError, TimeoutError, WebSocketException)


class Session(BaseModel):
  """A provisioned realtime session. Its sockets are opened and closed independently."""

  model_config = ConfigDict(frozen=True)

  session_id: str
  """Opaque identifier assigned by the service."""

  master_socket_url: str
  """Endpoint audio is uploaded to."""

  viewer_socket_url: str
  """Endpoint events are read from."""

  config: SessionConfig
  """The configuration the session was created with."""

  name: str | None = None
  """Session name as reported back by the service."""

  translation_languages: tuple[str, ...] | None = None
  """Translation languages as reported back by the service."""

  viewer_web_url: str | None = None
  """Browser URL for watching the session, when the service provides one."""


class VideoTaxiClient:
  """
  Session manager for the VIDEO.TAXI realtime API.

  Holds nothing but its configuration between calls. Each Session, AudioSender and
  EventReceiver it produces is independent of the others.
  """

  def __init__(
    self,
    config: ClientConfig,
    *,
    connector: Connector | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
  ):
    """
    Initialize the client.

    Args:
        config: Credential, endpoint and connection policy
        connector: Coroutine function opening a WebSocket for a URL. Defaults to
            ``websockets.asyncio.client.connect`` with the configured limits.
        transport: Optional httpx transport for the control-plane calls
    """
    self.config = config
    self._connector = connector or self._connect
    self._resolver = SessionResolver(config, transport=transport)
    self.logger = get_logger("vt/session")

  @classmethod
  def from_env(cls) -> "VideoTaxiClient":
    """Create a client from ``VIDEOTAXI_TOKEN`` and the optional ``VIDEOTAXI_URL``."""
    return cls(ClientConfig.from_env())

  async def _connect(self, url: str) -> ClientConnection:
    return await connect(
      url,
      open_timeout=self.config.open_timeout,
      max_size=self.config.max_message_size,
    )

  async def create_session(self, config: SessionConfig) -> Session:
    """
    Provision a session and look up its socket endpoints.

    Raises:
        InvalidConfig: A response lacked an expected field
        HttpError: The control plane could not be reached or answered with an error status
        AuthenticationFailed: The credential was rejected
        SessionNotFound: The freshly created session could not be described
    """
    endpoints = await self._resolver.resolve(config)
    return Session(
      session_id=endpoints.session_id,
      master_socket_url=endpoints.master_socket_url,
      viewer_socket_url=endpoints.viewer_socket_url,
      config=config,
      name=endpoints.name,
      translation_languages=endpoints.translation_languages,
      viewer_web_url=endpoints.viewer_web_url,
    )

  async def connect_audio_sender(self, session: Session) -> AudioSender:
    """Open the master socket. A single attempt; failures raise WebSocketError."""
    self.logger.info("Connecting to master socket", url=session.master_socket_url)
    try:
      websocket = await self._connector(session.master_socket_url)
    except _CONNECT_ERRORS as e:
      self.logger.error("Failed to connect to master socket", error=str(e))
      raise WebSocketError(f"WebSocket connection error: {e}") from e

    self.logger.info("Connected to master socket")
    return AudioSender(websocket)

  async def connect_event_receiver(self, session: Session) -> EventReceiver:
    """Open the viewer socket using the configured retry policy."""
    return await self.connect_event_receiver_with_retry(
      session,
      max_attempts=self.config.viewer_connect_attempts,
      delay=self.config.viewer_connect_delay,
    )

  async def connect_event_receiver_with_retry(
    self, session: Session, max_attempts: int, delay: float
  ) -> EventReceiver:
    """
    Open the viewer socket, retrying on failure.

    The delay is fixed, so the worst case wait is bounded by ``max_attempts * delay`` plus
    the handshake time of each attempt.

    Args:
        session: Session whose viewer socket to open
        max_attempts: Total number of attempts, at least 1
        delay: Seconds to sleep between failed attempts

    Raises:
        WebSocketError: Every attempt failed; chained from the last failure
    """
    if max_attempts < 1:
      raise InvalidConfig(f"max_attempts must be at least 1, got {max_attempts}")

    url = session.viewer_socket_url
    attempt = 0
    while True:
      attempt += 1
      self.logger.info(
        "Attempting to connect to viewer socket",
        attempt=attempt,
        max_attempts=max_attempts,
        url=url,
      )

      try:
        websocket = await self._connector(url)
      except _CONNECT_ERRORS as e:
        if attempt >= max_attempts:
          self.logger.error(
            "Failed to connect to viewer socket", attempts=max_attempts, last_error=str(e)
          )
          raise WebSocketError(f"WebSocket connection error: {e}") from e

        self.logger.warning(
          "Failed to connect to viewer socket, retrying",
          attempt=attempt,
          error=str(e),
          delay=Seconds(delay),
        )
        await asyncio.sleep(delay)
        continue

      self.logger.info("Connected to viewer socket", attempt=attempt)
      return EventReceiver(websocket, name=session.session_id)
