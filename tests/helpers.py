from pathlib import Path

from mutagen.id3 import ID3, ID3NoHeaderError

from ogaudio.models import AudioInfo


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_audio_info(page_url: str = "https://example.com/song") -> AudioInfo:
    return AudioInfo(
        audio_url="https://cdn.example.com/song.mp3",
        title="Song",
        artist=None,
        lyrics=None,
        filename="Song.mp3",
        image=None,
        source_tag="og:audio",
        page_url=page_url,
    )


def _stringify_tag_value(value: object) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(map(str, value))
    return str(value)


def read_id3_tags(file_path: Path) -> dict[str, str | bool | None]:
    try:
        tags = ID3(file_path)
    except ID3NoHeaderError:
        return {"title": None, "artist": None, "lyrics": None, "url": None, "has_cover": False}

    result: dict[str, str | bool | None] = {
        "title": None,
        "artist": None,
        "lyrics": None,
        "url": None,
        "has_cover": False,
    }
    for key, value in tags.items():
        key_str = str(key)
        if key_str == "TIT2":
            result["title"] = _stringify_tag_value(value).strip() or None
        elif key_str == "TPE1":
            result["artist"] = _stringify_tag_value(value).strip() or None
        elif key_str.startswith("USLT"):
            result["lyrics"] = str(value.text) or None
        elif key_str.startswith("WOAS"):
            result["url"] = str(value.url) or None
        elif key_str.startswith("APIC"):
            result["has_cover"] = True
    return result
