"""Internal constants shared across the library."""

BASE_URL = "https://eoappi.eocharging.com"

TOKEN_ENDPOINT = "token"
MINI_LIST_ENDPOINT = "api/mini/list"
MINI_STATUS_ENDPOINT = "api/mini/status"
MINI_COMMAND_ENDPOINT = "api/mini/{command}"
SESSION_ENDPOINT = "api/session"
SESSION_ALIVE_ENDPOINT = "api/session/alive"
SESSION_COMMAND_ENDPOINT = "api/session/{command}"
VEHICLE_ENDPOINT = "api/vehicle"
USER_ENDPOINT = "api/user"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"

DEFAULT_HEADERS: dict[str, str] = {
    "Accept": JSON_CONTENT_TYPE,
    "Content-Type": JSON_CONTENT_TYPE,
}

MANUFACTURER = "EO"

# ------------------------------------------------------------------
# Default timings (seconds)
# ------------------------------------------------------------------

DEFAULT_REFRESH_RATE = 60.0
DEFAULT_POLL_INTERVAL = 1.0
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_REVERT_DEBOUNCE = 0.15
