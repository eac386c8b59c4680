from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from mutagen import MutagenError

from .errors import UpstreamError
from .extractor import AudioInfoExtractor
from .fetch import read_bytes
from .models import AudioInfo
from .tagging import write_id3_tags

logger = logging.getLogger(__name__)

MIN_AUDIO_BYTES = 1000
BATCH_COMMENT_RE = re.compile(r"#.*$")


@dataclass(frozen=True)
class DownloadResult:
    info: AudioInfo
    path: Path
    size: int

    @property
    def suspiciously_small(self) -> bool:
        return self.size < MIN_AUDIO_BYTES


def read_batch_file(batch_file: Path) -> list[str]:
    """Return the URLs listed in ``batch_file``, skipping blanks and comments."""
    urls: list[str] = []
    for line in batch_file.read_text(encoding="utf-8").splitlines():
        url = BATCH_COMMENT_RE.sub("", line).strip()
        if url:
            urls.append(url)
    return urls


def unique_output_path(output_dir: Path, filename: str) -> Path:
    destination = output_dir / filename
    stem = destination.stem
    suffix = destination.suffix
    counter = 1
    while destination.exists():
        destination = output_dir / f"{stem} ({counter}){suffix}"
        counter += 1
    return destination


def _fetch_cover(
    image_url: str | None, read_url: Callable[[str], tuple[bytes, str]]
) -> tuple[bytes, str] | None:
    if not image_url:
        return None
    try:
        data, content_type = read_url(image_url)
    except UpstreamError as error:
        logger.warning(f"Skipping cover art {image_url}: {error}")
        return None
    if not data:
        return None
    mime = content_type if content_type.startswith("image/") else "image/jpeg"
    return data, mime


def download_audio(
    extractor: AudioInfoExtractor,
    page_url: str,
    output_dir: Path,
    write_tags: bool = True,
    read_url: Callable[[str], tuple[bytes, str]] = read_bytes,
) -> DownloadResult:
    """Resolve ``page_url`` and save its audio under ``output_dir``.

    Existing files are never overwritten. MP3 downloads get ID3 tags from
    the page metadata unless ``write_tags`` is off.
    """
    info = extractor.get_audio_info(page_url)
    data, _ = read_url(info.audio_url)

    output_dir.mkdir(parents=True, exist_ok=True)
    destination = unique_output_path(output_dir, info.filename)
    destination.write_bytes(data)

    if write_tags and destination.suffix.lower() == ".mp3":
        try:
            write_id3_tags(destination, info, cover=_fetch_cover(info.image, read_url))
        except MutagenError as error:
            logger.warning(f"Saved {destination} without tags: {error}")

    return DownloadResult(info=info, path=destination, size=len(data))
