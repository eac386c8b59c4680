import logging
from http.client import HTTPException
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from . import config
from .errors import UpstreamError

logger = logging.getLogger(__name__)

PAGE_TOO_LARGE = "Page too large to process"


def _declared_length(headers) -> int:
    try:
        return int(headers.get("Content-Length") or 0)
    except ValueError:
        return 0


def read_html(
    url: str,
    timeout: float = config.REQUEST_TIMEOUT_SECONDS,
    max_bytes: int = config.MAX_HTML_SIZE,
) -> str:
    """Download ``url`` as text, following redirects.

    Pages above ``max_bytes`` are refused, first by their declared
    Content-Length and then by what was actually read.
    """
    request = Request(
        url,
        headers={"User-Agent": config.USER_AGENT, "Accept": config.HTML_ACCEPT},
    )
    try:
        with urlopen(request, timeout=timeout) as response:
            if _declared_length(response.headers) > max_bytes:
                raise UpstreamError(PAGE_TOO_LARGE)
            body = response.read(max_bytes + 1)
            charset = response.headers.get_content_charset() or "utf-8"
    except HTTPError as error:
        raise UpstreamError(f"Failed to fetch page: HTTP {error.code}") from error
    except URLError as error:
        raise UpstreamError(f"Failed to fetch page: {error.reason}") from error
    except (HTTPException, OSError) as error:
        raise UpstreamError(f"Failed to fetch page: {error}") from error

    if len(body) > max_bytes:
        raise UpstreamError(PAGE_TOO_LARGE)
    logger.debug(f"Fetched {len(body)} bytes from {url}")
    try:
        return body.decode(charset, errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")


def read_bytes(
    url: str, timeout: float = config.DOWNLOAD_TIMEOUT_SECONDS
) -> tuple[bytes, str]:
    """Download ``url`` and return its body with the declared content type."""
    request = Request(url, headers={"User-Agent": config.USER_AGENT})
    try:
        with urlopen(request, timeout=timeout) as response:
            return response.read(), response.headers.get_content_type()
    except HTTPError as error:
        raise UpstreamError(f"Download failed: HTTP {error.code}") from error
    except URLError as error:
        raise UpstreamError(f"Download failed: {error.reason}") from error
    except (HTTPException, OSError) as error:
        raise UpstreamError(f"Download failed: {error}") from error
