from __future__ import annotations

from pathlib import Path

from mutagen.id3 import APIC, ID3, TIT2, TPE1, USLT, WOAS, ID3NoHeaderError

from .models import AudioInfo

COVER_PICTURE_TYPE = 3
UTF8 = 3


def write_id3_tags(
    file_path: Path, info: AudioInfo, cover: tuple[bytes, str] | None = None
) -> None:
    """Embed title, artist, lyrics, cover and source page into an MP3."""
    try:
        tags = ID3(file_path)
    except ID3NoHeaderError:
        tags = ID3()

    tags.add(TIT2(encoding=UTF8, text=[info.title]))
    if info.artist:
        tags.add(TPE1(encoding=UTF8, text=[info.artist]))
    if info.lyrics:
        tags.add(USLT(encoding=UTF8, lang="eng", desc="", text=info.lyrics))
    if cover is not None:
        data, mime = cover
        tags.add(
            APIC(encoding=UTF8, mime=mime, type=COVER_PICTURE_TYPE, desc="Cover", data=data)
        )
    tags.add(WOAS(url=info.page_url))
    tags.save(file_path)
