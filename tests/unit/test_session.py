"""Tests for VideoTaxiClient: session creation and socket connection policy."""

import httpx
import pytest
from fakes import FakeWebSocket, FlakyConnector

from videotaxi.client import AudioSender, EventReceiver, ReceiverState, Session, VideoTaxiClient
from videotaxi.config import ClientConfig, SessionConfig
from videotaxi.errors import InvalidConfig, WebSocketError


def _session() -> Session:
  return Session(
    session_id="sess-1",
    master_socket_url="wss://media.example/master",
    viewer_socket_url="wss://media.example/viewer",
    config=SessionConfig(),
  )


def _client(connector, **config) -> VideoTaxiClient:
  return VideoTaxiClient(ClientConfig(api_key="tok", **config), connector=connector)


@pytest.fixture
def recorded_sleeps(monkeypatch):
  """Replace the retry sleep so tests run instantly; returns the requested delays."""
  sleeps: list[float] = []

  async def fake_sleep(delay: float) -> None:
    sleeps.append(delay)

  monkeypatch.setattr("videotaxi.client.session.asyncio.sleep", fake_sleep)
  return sleeps


class TestViewerRetry:
  """Test connect_event_receiver_with_retry."""

  @pytest.mark.asyncio
  async def test_succeeds_on_last_allowed_attempt(self, recorded_sleeps):
    connector = FlakyConnector(failures=4)
    client = _client(connector)

    receiver = await client.connect_event_receiver_with_retry(_session(), max_attempts=5, delay=2)

    assert isinstance(receiver, EventReceiver)
    assert receiver.state is ReceiverState.RUNNING
    assert connector.calls == 5
    assert connector.urls == ["wss://media.example/viewer"] * 5
    assert recorded_sleeps == [2, 2, 2, 2]
    await receiver.close()

  @pytest.mark.asyncio
  async def test_first_attempt_success_does_not_sleep(self, recorded_sleeps):
    connector = FlakyConnector(failures=0)

    receiver = await _client(connector).connect_event_receiver_with_retry(
      _session(), max_attempts=3, delay=1.5
    )

    assert connector.calls == 1
    assert recorded_sleeps == []
    await receiver.close()

  @pytest.mark.asyncio
  async def test_exhaustion_wraps_last_error(self, recorded_sleeps):
    connector = FlakyConnector(failures=100)

    with pytest.raises(WebSocketError) as exc_info:
      await _client(connector).connect_event_receiver_with_retry(
        _session(), max_attempts=4, delay=0.5
      )

    assert connector.calls == 4
    assert recorded_sleeps == [0.5, 0.5, 0.5]
    assert isinstance(exc_info.value.__cause__, OSError)
    assert "attempt 4" in str(exc_info.value.__cause__)

  @pytest.mark.asyncio
  async def test_single_attempt_policy(self, recorded_sleeps):
    connector = FlakyConnector(failures=1)

    with pytest.raises(WebSocketError):
      await _client(connector).connect_event_receiver_with_retry(
        _session(), max_attempts=1, delay=5
      )

    assert connector.calls == 1
    assert recorded_sleeps == []

  @pytest.mark.asyncio
  async def test_zero_attempts_rejected(self):
    connector = FlakyConnector(failures=0)

    with pytest.raises(InvalidConfig):
      await _client(connector).connect_event_receiver_with_retry(
        _session(), max_attempts=0, delay=0
      )
    assert connector.calls == 0

  @pytest.mark.asyncio
  async def test_timeout_is_retried(self, recorded_sleeps):
    calls = 0

    async def slow_then_ok(url: str) -> FakeWebSocket:
      nonlocal calls
      calls += 1
      if calls == 1:
        raise TimeoutError("timed out during opening handshake")
      return FakeWebSocket()

    receiver = await _client(slow_then_ok).connect_event_receiver_with_retry(
      _session(), max_attempts=2, delay=0
    )
    assert calls == 2
    await receiver.close()

  @pytest.mark.asyncio
  async def test_default_policy_comes_from_config(self, recorded_sleeps):
    connector = FlakyConnector(failures=100)
    client = _client(connector, viewer_connect_attempts=3, viewer_connect_delay=0.25)

    with pytest.raises(WebSocketError):
      await client.connect_event_receiver(_session())

    assert connector.calls == 3
    assert recorded_sleeps == [0.25, 0.25]


class TestAudioSenderConnection:
  """Test connect_audio_sender."""

  @pytest.mark.asyncio
  async def test_connects_to_master_socket(self):
    connector = FlakyConnector(failures=0)

    sender = await _client(connector).connect_audio_sender(_session())

    assert isinstance(sender, AudioSender)
    assert connector.urls == ["wss://media.example/master"]

  @pytest.mark.asyncio
  async def test_failure_is_not_retried(self, recorded_sleeps):
    connector = FlakyConnector(failures=1)

    with pytest.raises(WebSocketError) as exc_info:
      await _client(connector).connect_audio_sender(_session())

    assert connector.calls == 1
    assert recorded_sleeps == []
    assert isinstance(exc_info.value.__cause__, OSError)


class TestCreateSession:
  """Test create_session against a mocked control plane."""

  @pytest.mark.asyncio
  async def test_create_session_builds_session(self):
    responses = iter(
      [
        httpx.Response(200, json={"data": {"createRealtimeSession": {"id": "abc"}}}),
        httpx.Response(
          200,
          json={
            "data": {
              "realtimeSession": {
                "id": "abc",
                "masterSocketUrl": "wss://m/abc",
                "viewerSocketUrl": "wss://v/abc",
                "name": "Demo",
                "translationLanguages": ["nb"],
                "viewerWebUrl": None,
              }
            }
          },
        ),
      ]
    )
    client = VideoTaxiClient(
      ClientConfig(api_key="tok"),
      transport=httpx.MockTransport(lambda request: next(responses)),
    )
    config = SessionConfig(session_name="Demo", translation_languages=("nb",))

    session = await client.create_session(config)

    assert session.session_id == "abc"
    assert session.master_socket_url == "wss://m/abc"
    assert session.viewer_socket_url == "wss://v/abc"
    assert session.config == config
    assert session.name == "Demo"
    assert session.translation_languages == ("nb",)
    assert session.viewer_web_url is None

  def test_sessions_are_immutable(self):
    session = _session()
    with pytest.raises(ValueError):
      session.session_id = "other"


def test_from_env(monkeypatch):
  monkeypatch.setenv("VIDEOTAXI_TOKEN", "tok")
  monkeypatch.setenv("VIDEOTAXI_URL", "https://staging.example/graphql")

  client = VideoTaxiClient.from_env()

  assert client.config.api_key == "tok"
  assert client.config.api_url == "https://staging.example/graphql"
