import re

from .models import SourceTag, TagMetadata

AUDIO_TAGS: tuple[SourceTag, ...] = (
    "og:audio",
    "og:audio:url",
    "og:audio:secure_url",
    "twitter:player:stream",
)
TITLE_TAGS = ("og:title", "twitter:title")
IMAGE_TAG = "og:image"
DESCRIPTION_TAG = "description"
DEFAULT_TITLE = "audio"

AUDIO_EXTENSIONS = {"mp3", "mp4", "m4a", "wav", "ogg", "flac", "aac", "opus", "wma", "webm"}
DEFAULT_EXTENSION = "mp3"

TITLE_ELEMENT_PATTERN = re.compile(r"<title[^>]*>([^<]+)</title>", re.IGNORECASE)
# Tuned to Suno-style descriptions: "Song by Artist (@handle). Listen ..."
ARTIST_PATTERN = re.compile(
    r"\bby\s+([^(@]+?)(?:\s*\(@[^)]+\))?[.\s]+(Listen|on\s)", re.IGNORECASE
)
UNSAFE_FILENAME_CHARS = re.compile(r'[/\\:*?"<>|]')
FILENAME_EDGE_PATTERN = re.compile(r"^[.\s]+|[.\s]+$")
ENTITIES = (
    ("&#x27;", "'"),
    ("&#39;", "'"),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
)


def _meta_patterns(tag: str) -> tuple[re.Pattern[str], re.Pattern[str]]:
    name = re.escape(tag)
    return (
        re.compile(
            rf"""<meta[^>]+(?:property|name)=["']{name}["'][^>]+content=["']([^"']+)["']""",
            re.IGNORECASE,
        ),
        re.compile(
            rf"""<meta[^>]+content=["']([^"']+)["'][^>]+(?:property|name)=["']{name}["']""",
            re.IGNORECASE,
        ),
    )


def extract_meta(html: str, tag: str) -> str | None:
    for pattern in _meta_patterns(tag):
        match = pattern.search(html)
        if match:
            return match.group(1)
    return None


def extract_title_element(html: str) -> str | None:
    match = TITLE_ELEMENT_PATTERN.search(html)
    return match.group(1).strip() if match else None


def decode_entities(value: str | None) -> str | None:
    if value is None:
        return None
    for entity, replacement in ENTITIES:
        value = value.replace(entity, replacement)
    return value.strip()


def extract_title(html: str) -> str:
    title: str | None = None
    for tag in TITLE_TAGS:
        title = extract_meta(html, tag)
        if title:
            break
    if not title:
        title = extract_title_element(html)
    return decode_entities(title) or DEFAULT_TITLE


def extract_artist(html: str) -> str | None:
    description = extract_meta(html, DESCRIPTION_TAG)
    if not description:
        return None
    match = ARTIST_PATTERN.search(description)
    if not match:
        return None
    return decode_entities(match.group(1).strip()) or None


def guess_extension(audio_url: str) -> str:
    path = audio_url.split("?", 1)[0]
    extension = path.rsplit(".", 1)[-1].lower()
    return extension if extension in AUDIO_EXTENSIONS else DEFAULT_EXTENSION


def sanitize_filename(value: str) -> str:
    cleaned = UNSAFE_FILENAME_CHARS.sub("_", value)
    return FILENAME_EDGE_PATTERN.sub("", cleaned)


def build_filename(title: str, artist: str | None, extension: str) -> str:
    base = sanitize_filename(title) or DEFAULT_TITLE
    artist_part = sanitize_filename(artist) if artist else ""
    if artist_part:
        base = f"{artist_part} - {base}"
    return f"{base}.{extension}"


def find_audio_url(html: str) -> tuple[str, SourceTag] | None:
    for tag in AUDIO_TAGS:
        audio_url = extract_meta(html, tag)
        if audio_url:
            return audio_url, tag
    return None


def extract_tag_metadata(html: str) -> TagMetadata | None:
    """Read the audio link and its descriptive tags from a page.

    Returns None when the page declares none of ``AUDIO_TAGS``.
    """
    found = find_audio_url(html)
    if found is None:
        return None
    audio_url, source_tag = found

    title = extract_title(html)
    artist = extract_artist(html)
    return TagMetadata(
        audio_url=audio_url,
        source_tag=source_tag,
        title=title,
        artist=artist,
        image=extract_meta(html, IMAGE_TAG),
        filename=build_filename(title, artist, guess_extension(audio_url)),
    )
