import logging
from collections.abc import Callable

from .cache import ResponseCache
from .errors import NotFoundError, ValidationError
from .fetch import read_html
from .models import AudioInfo
from .suno_lyrics import fetch_suno_lyrics
from .tags import extract_tag_metadata
from .url_safety import normalize_target_url, validate_url

logger = logging.getLogger(__name__)

NO_AUDIO_TAG_MESSAGE = "No og:audio or twitter:player:stream meta tag found on this page"


class AudioInfoExtractor:
    """Fetch a page and describe the audio it declares.

    Raises ValidationError for unsafe targets, NotFoundError for pages
    without an audio meta tag and UpstreamError when the page cannot be
    fetched. Lyrics lookups never fail the call.
    """

    def __init__(
        self,
        cache: ResponseCache | None = None,
        read_page: Callable[[str], str] = read_html,
        find_lyrics: Callable[[str], str | None] = fetch_suno_lyrics,
    ) -> None:
        self.cache = cache if cache is not None else ResponseCache()
        self.read_page = read_page
        self.find_lyrics = find_lyrics

    def get_audio_info(self, page_url: str) -> AudioInfo:
        target_url = normalize_target_url(page_url)
        rejection = validate_url(target_url)
        if rejection:
            raise ValidationError(rejection)

        cached = self.cache.get(target_url)
        if cached is not None:
            logger.debug(f"Cache hit for {target_url}")
            return cached

        html = self.read_page(target_url)
        tag_metadata = extract_tag_metadata(html)
        if tag_metadata is None:
            raise NotFoundError(NO_AUDIO_TAG_MESSAGE)

        lyrics = self.find_lyrics(target_url)
        info = AudioInfo.from_tag_metadata(tag_metadata, page_url=target_url, lyrics=lyrics)
        self.cache.set(target_url, info)
        logger.info(f"Found {info.source_tag} audio on {target_url}")
        return info
