import os

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"

REQUEST_TIMEOUT_SECONDS = float(os.environ.get("OGAUDIO_REQUEST_TIMEOUT", "15"))
DOWNLOAD_TIMEOUT_SECONDS = float(os.environ.get("OGAUDIO_DOWNLOAD_TIMEOUT", "120"))
MAX_HTML_SIZE = int(os.environ.get("OGAUDIO_MAX_HTML_SIZE", str(2 * 1024 * 1024)))

CACHE_TTL_SECONDS = float(os.environ.get("OGAUDIO_CACHE_TTL", "300"))
CACHE_MAX_ENTRIES = int(os.environ.get("OGAUDIO_CACHE_MAX_ENTRIES", "200"))

RATE_LIMIT_WINDOW_SECONDS = float(os.environ.get("OGAUDIO_RATE_LIMIT_WINDOW", "60"))
RATE_LIMIT_MAX = int(os.environ.get("OGAUDIO_RATE_LIMIT_MAX", "15"))
# Set by the fronting proxy; without it every caller shares one bucket.
CLIENT_IP_HEADER = os.environ.get("OGAUDIO_CLIENT_IP_HEADER", "CF-Connecting-IP")
UNKNOWN_CLIENT_ID = "unknown"

LYRICS_MAX_LENGTH = 20000
