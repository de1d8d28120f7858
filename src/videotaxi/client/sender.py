"""
Outbound audio over the master socket.
"""

from types import TracebackType

from websockets.asyncio.client import ClientConnection
from websockets.exceptions import WebSocketException

from videotaxi.client.audio import AudioFrame
from videotaxi.common import Bytes, get_logger
from videotaxi.errors import WebSocketError


class AudioSender:
  """
  Owns one master socket connection and writes each audio chunk as a single binary frame.

  There is no buffering, chunking or pacing. Frames go out in call order; the caller is
  responsible for feeding audio at roughly real-time rate.
  """

  def __init__(self, websocket: ClientConnection):
    self._ws = websocket
    self._closed = False
    self.logger = get_logger("vt/send")

  @property
  def closed(self) -> bool:
    return self._closed

  async def send_audio(self, audio_data: bytes | bytearray | memoryview) -> None:
    """Send the given bytes unchanged as one binary frame."""
    try:
      await self._ws.send(bytes(audio_data))
    except WebSocketException as e:
      raise WebSocketError(f"WebSocket connection error: {e}") from e
    self.logger.debug("Sent audio chunk", size=Bytes(len(audio_data)))

  async def send_frame(self, frame: AudioFrame) -> None:
    """Send an AudioFrame's bytes. The format tag is not transmitted."""
    await self.send_audio(frame.data)

  async def close(self) -> None:
    """Send a close frame. Calling it again is a no-op."""
    if self._closed:
      return
    self._closed = True

    try:
      await self._ws.close()
    except (WebSocketException, OSError) as e:
      self.logger.error("Failed to close audio sender connection", error=str(e))
      raise WebSocketError(f"WebSocket connection error: {e}") from e
    self.logger.info("Audio sender connection closed")

  async def __aenter__(self) -> "AudioSender":
    return self

  async def __aexit__(
    self,
    exc_type: type[BaseException] | None,
    exc_val: BaseException | None,
    exc_tb: TracebackType | None,
  ) -> None:
    await self.close()
