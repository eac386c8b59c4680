from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

SourceTag = Literal[
    "og:audio",
    "og:audio:url",
    "og:audio:secure_url",
    "twitter:player:stream",
]


@dataclass(frozen=True)
class TagMetadata:
    audio_url: str
    source_tag: SourceTag
    title: str
    artist: str | None
    image: str | None
    filename: str


@dataclass(frozen=True)
class AudioInfo:
    audio_url: str
    title: str
    artist: str | None
    lyrics: str | None
    filename: str
    image: str | None
    source_tag: SourceTag
    page_url: str

    def to_dict(self) -> dict[str, str | None]:
        return {
            "audioUrl": self.audio_url,
            "title": self.title,
            "artist": self.artist,
            "lyrics": self.lyrics,
            "filename": self.filename,
            "image": self.image,
            "sourceTag": self.source_tag,
            "pageUrl": self.page_url,
        }

    @classmethod
    def from_tag_metadata(
        cls, metadata: TagMetadata, page_url: str, lyrics: str | None = None
    ) -> AudioInfo:
        return cls(
            audio_url=metadata.audio_url,
            title=metadata.title,
            artist=metadata.artist,
            lyrics=lyrics,
            filename=metadata.filename,
            image=metadata.image,
            source_tag=metadata.source_tag,
            page_url=page_url,
        )
