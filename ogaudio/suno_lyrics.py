import json
import logging
import re
from collections.abc import Callable
from typing import Any
from urllib.parse import urlsplit

from . import config
from .fetch import read_html

logger = logging.getLogger(__name__)

SUNO_HOSTS = {"suno.com", "www.suno.com"}
SUNO_EMBED_URL = "https://suno.com/embed/{track_id}"
TRACK_ID_RE = re.compile(r"^[0-9a-fA-F-]{36}$")

PUSH_RE = re.compile(
    r'self\.__next_f\.push\(\[1,\s*"((?:\\.|[^"\\])*)"\]\)</script>',
    re.DOTALL,
)
# Inline scripts ship the flight payload as a JS string literal.
FLIGHT_ESCAPES = (
    ('\\"', '"'),
    ("\\u003c", "<"),
    ("\\u003e", ">"),
    ("\\u0026", "&"),
    ("\\n", "\n"),
)
CLIP_MARKER = '"clip":{'
TEXT_REF_TOKEN_RE = re.compile(r"^\$\d+$")
INSTRUMENTAL_RE = re.compile(r"^\[instrumental\]$", re.IGNORECASE)
ROW_ID_PREFIX_RE = re.compile(r"^[a-z0-9]+:", re.IGNORECASE)
WORD_RE = re.compile(r"[A-Za-z]{2,}")
NON_LYRIC_FRAGMENTS = ('{"', ':["$', '"$L')
TOKEN_LOOKAHEAD_CHUNKS = 7


def normalize_flight_escapes(text: str) -> str:
    for escaped, replacement in FLIGHT_ESCAPES:
        text = text.replace(escaped, replacement)
    return text


def extract_flight_chunks(html: str) -> list[str]:
    return [normalize_flight_escapes(match.group(1)) for match in PUSH_RE.finditer(html)]


def looks_like_lyrics(text: str) -> bool:
    """Guess whether a flight chunk is plain lyric text.

    Chunks carry no type marker, so JSON rows, component references and
    prose all look alike. Lyrics are long, multi-line, wordy and free of
    JSON punctuation.
    """
    stripped = text.strip()
    if len(stripped) < 80:
        return False
    if any(fragment in stripped for fragment in NON_LYRIC_FRAGMENTS):
        return False
    if ROW_ID_PREFIX_RE.match(stripped):
        return False
    lines = [line.strip() for line in stripped.split("\n") if line.strip()]
    if len(lines) < 4:
        return False
    return len(WORD_RE.findall(stripped)) >= 20


def extract_json_object(source: str, start: int) -> str | None:
    if start < 0 or start >= len(source) or source[start] != "{":
        return None
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(source)):
        char = source[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return source[start : index + 1]
    return None


def _is_text_ref_token(value: str | None) -> bool:
    return bool(value) and TEXT_REF_TOKEN_RE.match(value) is not None


def resolve_prompt_token(html: str, token: str) -> str | None:
    """Find the text a ``$<id>`` prompt reference points at.

    The order of attempts matters: the chunks following the one that
    declares ``<id>:``, then the chunk right before the clip row, then the
    first lyric-looking chunk anywhere.
    """
    if not _is_text_ref_token(token):
        return None
    chunks = extract_flight_chunks(html)
    ref_id = token[1:]

    token_index = next(
        (index for index, chunk in enumerate(chunks) if f"{ref_id}:" in chunk), None
    )
    if token_index is not None:
        lookahead_end = min(len(chunks), token_index + 1 + TOKEN_LOOKAHEAD_CHUNKS)
        for chunk in chunks[token_index + 1 : lookahead_end]:
            if looks_like_lyrics(chunk):
                return chunk.strip()

    clip_index = next(
        (index for index, chunk in enumerate(chunks) if CLIP_MARKER in chunk), None
    )
    if clip_index and looks_like_lyrics(chunks[clip_index - 1]):
        return chunks[clip_index - 1].strip()

    for chunk in chunks:
        if looks_like_lyrics(chunk):
            return chunk.strip()
    return None


def _clean_text(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _parse_clip(html: str) -> dict[str, Any] | None:
    normalized = normalize_flight_escapes(html)
    clip_index = normalized.find(CLIP_MARKER)
    if clip_index == -1:
        logger.debug("No clip row in embed page")
        return None
    clip_json = extract_json_object(normalized, clip_index + len(CLIP_MARKER) - 1)
    if clip_json is None:
        logger.debug("Clip row never closes")
        return None
    try:
        clip = json.loads(clip_json, strict=False)
    except json.JSONDecodeError as error:
        logger.debug(f"Clip row is not valid JSON: {error}")
        return None
    return clip if isinstance(clip, dict) else None


def extract_suno_lyrics(html: str) -> str | None:
    clip = _parse_clip(html)
    if clip is None:
        return None
    metadata = clip.get("metadata")
    metadata_node = metadata if isinstance(metadata, dict) else {}

    displayed = _clean_text(clip.get("displayed_lyrics")) or _clean_text(
        metadata_node.get("displayed_lyrics")
    )
    if (
        displayed
        and not _is_text_ref_token(displayed)
        and not INSTRUMENTAL_RE.match(displayed)
    ):
        return displayed[: config.LYRICS_MAX_LENGTH]

    prompt = _clean_text(metadata_node.get("prompt"))
    if not prompt or INSTRUMENTAL_RE.match(prompt):
        return None
    resolved = resolve_prompt_token(html, prompt) if _is_text_ref_token(prompt) else prompt
    if not resolved or _is_text_ref_token(resolved):
        return None
    return resolved[: config.LYRICS_MAX_LENGTH]


def suno_track_id(page_url: str) -> str | None:
    parsed = urlsplit(page_url)
    if (parsed.hostname or "").lower() not in SUNO_HOSTS:
        return None
    parts = [part for part in parsed.path.split("/") if part]
    if len(parts) < 2 or parts[0] != "song":
        return None
    track_id = parts[1]
    return track_id if TRACK_ID_RE.match(track_id) else None


def fetch_suno_lyrics(
    page_url: str, read_page: Callable[[str], str] = read_html
) -> str | None:
    """Fetch the embed page of a Suno song and pull its lyrics out.

    Other hosts return None without touching the network. Lyrics are an
    extra, so every failure here ends up as None.
    """
    try:
        track_id = suno_track_id(page_url)
    except ValueError:
        return None
    if track_id is None:
        return None

    embed_url = SUNO_EMBED_URL.format(track_id=track_id)
    try:
        html = read_page(embed_url)
    except Exception as error:
        logger.warning(f"Failed to fetch Suno embed page {embed_url}: {error}")
        return None
    try:
        return extract_suno_lyrics(html)
    except Exception:
        logger.exception(f"Unexpected error parsing Suno embed page {embed_url}")
        return None
