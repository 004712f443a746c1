import os
from pathlib import Path

DEFAULT_BASE = os.environ.get("CLARIFAI_API_BASE", "https://api.clarifai.com")
API_VERSION = "v1"

HOME_PATH = Path.home()
DEFAULT_CONFIG = HOME_PATH / '.config/clarifai/v1'

# Seconds to wait for the API before giving up on a single request.
DEFAULT_TIMEOUT = 30
# Connection-level retries handled by the requests adapter.
RETRIES = 2
CONNECTIONS = 20

# Used when a 429 response does not say how long to back off.
DEFAULT_THROTTLE_WAIT_SECONDS = 10

STATUS_OK = "OK"
