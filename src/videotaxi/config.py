"""
Client and session configuration.

The client configuration carries the control-plane credential and base URL along with the
connection policy. The session configuration describes a single realtime session and is
immutable once created.
"""

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from videotaxi.constants import (
  DEFAULT_API_URL,
  ENV_TOKEN,
  ENV_URL,
  MAX_MESSAGE_SIZE,
  OPEN_TIMEOUT,
  REQUEST_TIMEOUT,
  VIEWER_CONNECT_ATTEMPTS,
  VIEWER_CONNECT_DELAY,
)
from videotaxi.errors import InvalidConfig


class ClientConfig(BaseModel):
  """Credentials, endpoint and connection policy for a VideoTaxiClient."""

  model_config = ConfigDict(frozen=True)

  api_key: str = Field(min_length=1, repr=False)
  """Bearer token sent to the control plane."""

  api_url: str = DEFAULT_API_URL
  """Control-plane GraphQL endpoint."""

  request_timeout: float = Field(default=REQUEST_TIMEOUT, gt=0.0)
  """Timeout in seconds for each control-plane request."""

  open_timeout: float = Field(default=OPEN_TIMEOUT, gt=0.0)
  """Timeout in seconds for a single WebSocket opening handshake."""

  max_message_size: int = Field(default=MAX_MESSAGE_SIZE, gt=0)
  """Largest inbound WebSocket message accepted, in bytes."""

  viewer_connect_attempts: int = Field(default=VIEWER_CONNECT_ATTEMPTS, ge=1)
  """Number of attempts made when connecting the viewer socket."""

  viewer_connect_delay: float = Field(default=VIEWER_CONNECT_DELAY, ge=0.0)
  """Fixed delay in seconds between viewer socket connection attempts."""

  @classmethod
  def from_env(cls, environ: Mapping[str, str] | None = None) -> "ClientConfig":
    """
    Build a configuration from environment variables.

    :param environ: Mapping to read from, defaults to ``os.environ``
    :returns: Configuration using ``VIDEOTAXI_TOKEN`` and, when set, ``VIDEOTAXI_URL``
    :raises InvalidConfig: If the token variable is unset or empty
    """
    env = os.environ if environ is None else environ

    api_key = env.get(ENV_TOKEN)
    if not api_key:
      raise InvalidConfig(f"{ENV_TOKEN} environment variable not set")

    api_url = env.get(ENV_URL) or DEFAULT_API_URL
    return cls(api_key=api_key, api_url=api_url)


class SessionConfig(BaseModel):
  """Caller-supplied options for one realtime session."""

  model_config = ConfigDict(frozen=True)

  session_name: str = "Python SDK Session"
  """Display name of the session."""

  translation_languages: tuple[str, ...] = ("en-US", "nb")
  """Requested translation language codes, in order, without duplicates."""

  master_language: str = "de"
  """Language spoken in the uploaded audio."""

  viewer_language: str = "en-US"
  """Language of the events delivered on the viewer socket."""

  enable_voiceover: bool = True
  """Whether the viewer socket should carry synthesized voiceover."""

  @field_validator("translation_languages")
  @classmethod
  def dedupe_translation_languages(cls, value: tuple[str, ...]) -> tuple[str, ...]:
    """Drop repeated language codes, keeping the first occurrence."""
    if not value:
      raise ValueError("translation_languages must contain at least one language code")
    return tuple(dict.fromkeys(value))
