"""
Inbound events over the viewer socket.

A single background task reads frames, decodes them into events and forwards them, in arrival
order, onto a queue that the consumer drains with ``next_event`` or ``async for``.
"""

import asyncio
from collections.abc import AsyncIterator
from enum import StrEnum
from types import TracebackType
from typing import Final

from websockets.asyncio.client import ClientConnection
from websockets.exceptions import ConnectionClosedError, WebSocketException

from videotaxi.common import Bytes, get_logger
from videotaxi.errors import ConnectionClosed, EventDecodeError, Timeout
from videotaxi.wire import Event, deserialize_events


class ReceiverState(StrEnum):
  RUNNING = "running"
  CLOSED = "closed"


class _EndOfQueue:
  """Marker queued behind the last event once the read loop has stopped."""


_END: Final = _EndOfQueue()


class EventReceiver:
  """
  Owns one viewer socket connection and the task reading it.

  The receiver moves from RUNNING to CLOSED exactly once: when the remote closes the
  connection, when a read fails, or when the consumer calls ``close()``. Events received
  before that point are still delivered; afterwards ``next_event`` returns None.

  A transport failure is not raised from ``next_event``. It is recorded on ``error`` so a
  consumer that sees the stream end can tell a failure from a graceful close.
  """

  def __init__(self, websocket: ClientConnection, name: str = "viewer"):
    """
    Start reading immediately. Must be called from within a running event loop.

    :param websocket: An open viewer socket connection
    :param name: Label used for the task and in log output
    """
    self._ws = websocket
    self._queue: asyncio.Queue[Event | _EndOfQueue] = asyncio.Queue()
    self._state = ReceiverState.RUNNING
    self.close_reason: str | None = None
    self.error: ConnectionClosed | None = None
    self._closing = False
    self.logger = get_logger("vt/recv", receiver=name)
    self._task = asyncio.create_task(self._read_loop(), name=f"event-receiver:{name}")

  @property
  def state(self) -> ReceiverState:
    return self._state

  async def _read_loop(self) -> None:
    """Decode-and-forward until the connection ends or the task is cancelled."""
    try:
      async for message in self._ws:
        if isinstance(message, str):
          self._dispatch_text(message)
        else:
          self.logger.debug("Received binary data", size=Bytes(len(message)))

      self.logger.info("Viewer WebSocket connection closed")
      self._finish("remote closed the connection")

    except ConnectionClosedError as e:
      self.logger.error("Viewer WebSocket closed abnormally", error=str(e))
      self._finish("connection closed abnormally", ConnectionClosed(f"Connection closed: {e}"))

    except (WebSocketException, OSError) as e:
      self.logger.error("WebSocket error", error=str(e))
      self._finish("transport error", ConnectionClosed(f"WebSocket error: {e}"))

    except asyncio.CancelledError:
      self._finish("closed by consumer")
      raise

    except Exception as e:
      self.logger.exception("Viewer read loop failed")
      self._finish("read loop failed", ConnectionClosed(f"Read loop failed: {e}"))

  def _dispatch_text(self, text: str) -> None:
    try:
      events = deserialize_events(text)
    except EventDecodeError as e:
      self.logger.error("Failed to parse WebSocket message", error=str(e))
      self.logger.error("Raw message", raw=text)
      return

    for event in events:
      self._queue.put_nowait(event)
    self.logger.debug("Forwarded events", count=len(events))

  def _finish(self, reason: str, error: ConnectionClosed | None = None) -> None:
    if self._state is ReceiverState.CLOSED:
      return
    self._state = ReceiverState.CLOSED
    self.close_reason = reason
    self.error = error
    self._queue.put_nowait(_END)

  async def next_event(self, timeout: float | None = None) -> Event | None:
    """
    Wait for the next event.

    :param timeout: Seconds to wait before giving up, or None to wait indefinitely
    :returns: The next event in arrival order, or None once the stream has ended
    :raises Timeout: If ``timeout`` elapses first. The receiver keeps running.
    """
    try:
      item = await asyncio.wait_for(self._queue.get(), timeout=timeout)
    except TimeoutError as e:
      raise Timeout(f"No event received within {timeout}s") from e

    if isinstance(item, _EndOfQueue):
      # Leave the marker in place so later calls also see the end
      self._queue.put_nowait(item)
      return None
    return item

  async def close(self) -> None:
    """Stop forwarding events and close the connection. Calling it again is a no-op."""
    if self._closing:
      return
    self._closing = True

    try:
      if not self._task.done():
        self._task.cancel()
        try:
          await self._task
        except asyncio.CancelledError:
          # Only swallow the cancellation of the read task, not one aimed at the caller
          current = asyncio.current_task()
          if current is not None and current.cancelling():
            raise
    finally:
      self._finish("closed by consumer")
      try:
        await self._ws.close()
      except (WebSocketException, OSError) as e:
        self.logger.warning("Error closing viewer connection", error=str(e))

  def __aiter__(self) -> AsyncIterator[Event]:
    return self

  async def __anext__(self) -> Event:
    event = await self.next_event()
    if event is None:
      raise StopAsyncIteration
    return event

  async def __aenter__(self) -> "EventReceiver":
    return self

  async def __aexit__(
    self,
    exc_type: type[BaseException] | None,
    exc_val: BaseException | None,
    exc_tb: TracebackType | None,
  ) -> None:
    await self.close()
