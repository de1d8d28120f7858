"""
Control-plane calls that provision a realtime session and look up its socket endpoints.
"""

from typing import Any

import httpx
from pydantic import BaseModel

from videotaxi.common import Pretty, get_logger
from videotaxi.config import ClientConfig, SessionConfig
from videotaxi.errors import AuthenticationFailed, HttpError, InvalidConfig, SessionNotFound

CREATE_SESSION_MUTATION = """
mutation CreateRealtimeSession($name: String!, $translationLanguages: [String!]!) {
  createRealtimeSession(name: $name, translationLanguages: $translationLanguages) {
    id
  }
}
"""

DESCRIBE_SESSION_QUERY = """
query RealtimeSession(
  $id: ID!
  $masterLanguage: String!
  $viewerLanguage: String!
  $enableVoiceover: Boolean!
) {
  realtimeSession(id: $id) {
    id
    masterSocketUrl(languageCode: $masterLanguage)
    name
    translationLanguages
    viewerSocketUrl(enableVoiceover: $enableVoiceover, languageCode: $viewerLanguage)
    viewerWebUrl
  }
}
"""


class SessionEndpoints(BaseModel):
  """What the describe call reports about a provisioned session."""

  session_id: str
  master_socket_url: str
  viewer_socket_url: str
  name: str | None = None
  translation_languages: tuple[str, ...] | None = None
  viewer_web_url: str | None = None


class SessionResolver:
  """
  Runs the two sequential GraphQL calls that turn a SessionConfig into socket endpoints.

  Caller-supplied names and language codes are sent as GraphQL variables, never spliced into
  the query text.
  """

  def __init__(self, config: ClientConfig, transport: httpx.AsyncBaseTransport | None = None):
    """
    :param config: Client configuration with the credential and endpoint
    :param transport: Optional httpx transport, mainly for tests
    """
    self._config = config
    self._transport = transport
    self.logger = get_logger("vt/resolve")

  async def resolve(self, session_config: SessionConfig) -> SessionEndpoints:
    """Create a session and fetch its endpoints. No retry."""
    async with httpx.AsyncClient(
      headers={"Authorization": f"Bearer {self._config.api_key}"},
      timeout=self._config.request_timeout,
      transport=self._transport,
    ) as http:
      session_id = await self._create(http, session_config)
      return await self._describe(http, session_id, session_config)

  async def _create(self, http: httpx.AsyncClient, session_config: SessionConfig) -> str:
    self.logger.info("Creating new VIDEO.TAXI session", name=session_config.session_name)

    result = await self._post(
      http,
      CREATE_SESSION_MUTATION,
      {
        "name": session_config.session_name,
        "translationLanguages": list(session_config.translation_languages),
      },
    )

    session_id = _dig(result, "data", "createRealtimeSession", "id")
    if not isinstance(session_id, str):
      raise InvalidConfig(_missing("Failed to get session ID from response", result))

    self.logger.info("Created session", session_id=session_id)
    return session_id

  async def _describe(
    self, http: httpx.AsyncClient, session_id: str, session_config: SessionConfig
  ) -> SessionEndpoints:
    result = await self._post(
      http,
      DESCRIBE_SESSION_QUERY,
      {
        "id": session_id,
        "masterLanguage": session_config.master_language,
        "viewerLanguage": session_config.viewer_language,
        "enableVoiceover": session_config.enable_voiceover,
      },
    )

    details = _dig(result, "data", "realtimeSession")
    if details is None and not result.get("errors"):
      raise SessionNotFound(session_id)
    if not isinstance(details, dict):
      raise InvalidConfig(_missing("Failed to get session details", result))

    master_socket_url = details.get("masterSocketUrl")
    if not isinstance(master_socket_url, str):
      raise InvalidConfig(_missing("Failed to get master socket URL", result))

    viewer_socket_url = details.get("viewerSocketUrl")
    if not isinstance(viewer_socket_url, str):
      raise InvalidConfig(_missing("Failed to get viewer socket URL", result))

    languages = details.get("translationLanguages")
    endpoints = SessionEndpoints(
      session_id=session_id,
      master_socket_url=master_socket_url,
      viewer_socket_url=viewer_socket_url,
      name=details.get("name"),
      translation_languages=tuple(languages) if isinstance(languages, list) else None,
      viewer_web_url=details.get("viewerWebUrl"),
    )

    self.logger.info("Session details retrieved", session_id=session_id)
    return endpoints

  async def _post(
    self, http: httpx.AsyncClient, query: str, variables: dict[str, Any]
  ) -> dict[str, Any]:
    try:
      response = await http.post(
        self._config.api_url, json={"query": query, "variables": variables}
      )
    except httpx.HTTPError as e:
      self.logger.error("Control-plane request failed", url=self._config.api_url, error=str(e))
      raise HttpError(f"HTTP request error: {e}") from e

    if response.status_code in (401, 403):
      raise AuthenticationFailed(f"Authentication failed (HTTP {response.status_code})")
    if response.is_error:
      raise HttpError(
        f"HTTP request error: status {response.status_code}", status_code=response.status_code
      )

    try:
      result = response.json()
    except ValueError as e:
      raise HttpError(
        f"HTTP request error: response is not JSON: {e}", status_code=response.status_code
      ) from e

    if not isinstance(result, dict):
      raise HttpError("HTTP request error: response is not a JSON object")

    if result.get("errors"):
      self.logger.warning("Control plane reported errors", errors=Pretty(result["errors"]))
    return result


def _dig(value: Any, *keys: str) -> Any:
  for key in keys:
    if not isinstance(value, dict):
      return None
    value = value.get(key)
  return value


def _missing(message: str, result: dict[str, Any]) -> str:
  errors = result.get("errors")
  if errors:
    return f"{message}: {errors}"
  return message
