"""Basic tests for videotaxi."""

import videotaxi


def test_import():
  """Test that the module can be imported."""
  assert videotaxi is not None


def test_version():
  """Test that version is defined."""
  assert hasattr(videotaxi, "__version__")


def test_public_api():
  """Test that the session manager and error base are exported."""
  assert issubclass(videotaxi.WebSocketError, videotaxi.SpeechApiError)
  assert videotaxi.VideoTaxiClient is not None
