DEFAULT_API_URL = "https://service.video.taxi/graphiql"

VIEWER_CONNECT_ATTEMPTS = 30
VIEWER_CONNECT_DELAY = 2.0

REQUEST_TIMEOUT = 30.0
OPEN_TIMEOUT = 10.0
MAX_MESSAGE_SIZE = 64 * 1024 * 1024

ENV_TOKEN = "VIDEOTAXI_TOKEN"
ENV_URL = "VIDEOTAXI_URL"
