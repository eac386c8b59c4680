import unittest

from ogaudio.tags import (
    build_filename,
    decode_entities,
    extract_artist,
    extract_meta,
    extract_tag_metadata,
    extract_title,
    guess_extension,
    sanitize_filename,
)

SUNO_STYLE_PAGE = """<!DOCTYPE html>
<html><head>
<title>Midnight Drive | Suno</title>
<meta name="description" content="Midnight Drive by Luna Ray (@lunaray). Listen and make your own on Suno.">
<meta property="og:title" content="Midnight Drive">
<meta property="og:image" content="https://cdn.example.com/cover.jpg">
<meta property="og:audio" content="https://cdn.example.com/track.mp3">
</head><body></body></html>"""


class ExtractMetaTests(unittest.TestCase):
    def test_matches_both_attribute_orders(self):
        pages = (
            '<meta property="og:audio" content="https://cdn.x.com/a.mp3">',
            '<meta content="https://cdn.x.com/a.mp3" property="og:audio">',
            "<meta name='og:audio' content='https://cdn.x.com/a.mp3' />",
            '<META CONTENT="https://cdn.x.com/a.mp3" NAME="og:audio">',
        )
        for html in pages:
            with self.subTest(html=html):
                self.assertEqual(extract_meta(html, "og:audio"), "https://cdn.x.com/a.mp3")

    def test_does_not_match_longer_tag_names(self):
        html = '<meta property="og:audio:secure_url" content="https://cdn.x.com/a.mp3">'
        self.assertIsNone(extract_meta(html, "og:audio"))
        self.assertEqual(extract_meta(html, "og:audio:secure_url"), "https://cdn.x.com/a.mp3")

    def test_missing_tag_returns_none(self):
        self.assertIsNone(extract_meta("<html><head></head></html>", "og:audio"))


class ExtractTagMetadataTests(unittest.TestCase):
    def test_og_audio_with_encoded_title(self):
        html = (
            '<meta property="og:audio" content="https://cdn.x.com/a.mp3">'
            '<meta property="og:title" content="Song &amp; Dance">'
        )
        metadata = extract_tag_metadata(html)
        self.assertEqual(metadata.audio_url, "https://cdn.x.com/a.mp3")
        self.assertEqual(metadata.title, "Song & Dance")
        self.assertEqual(metadata.filename, "Song & Dance.mp3")
        self.assertEqual(metadata.source_tag, "og:audio")
        self.assertIsNone(metadata.artist)
        self.assertIsNone(metadata.image)

    def test_each_audio_tag_is_recognised(self):
        for tag in ("og:audio", "og:audio:url", "og:audio:secure_url", "twitter:player:stream"):
            with self.subTest(tag=tag):
                html = f'<meta content="https://cdn.x.com/{tag}.ogg" name="{tag}">'
                metadata = extract_tag_metadata(html)
                self.assertEqual(metadata.source_tag, tag)
                self.assertEqual(metadata.audio_url, f"https://cdn.x.com/{tag}.ogg")

    def test_highest_priority_tag_wins(self):
        html = (
            '<meta name="twitter:player:stream" content="https://cdn.x.com/stream.m4a">'
            '<meta property="og:audio:secure_url" content="https://cdn.x.com/secure.mp3">'
            '<meta property="og:audio:url" content="https://cdn.x.com/url.mp3">'
        )
        metadata = extract_tag_metadata(html)
        self.assertEqual(metadata.source_tag, "og:audio:url")
        self.assertEqual(metadata.audio_url, "https://cdn.x.com/url.mp3")

        html = html.replace('og:audio:url" content="https://cdn.x.com/url.mp3"', "")
        self.assertEqual(extract_tag_metadata(html).source_tag, "og:audio:secure_url")

    def test_page_without_audio_tag(self):
        html = '<title>Nothing here</title><meta property="og:video" content="https://x.com/v.mp4">'
        self.assertIsNone(extract_tag_metadata(html))

    def test_suno_style_page(self):
        metadata = extract_tag_metadata(SUNO_STYLE_PAGE)
        self.assertEqual(metadata.title, "Midnight Drive")
        self.assertEqual(metadata.artist, "Luna Ray")
        self.assertEqual(metadata.image, "https://cdn.example.com/cover.jpg")
        self.assertEqual(metadata.filename, "Luna Ray - Midnight Drive.mp3")


class TitleAndArtistTests(unittest.TestCase):
    def test_title_fallback_order(self):
        self.assertEqual(
            extract_title('<meta name="twitter:title" content="Tweeted"><title>Page</title>'),
            "Tweeted",
        )
        self.assertEqual(extract_title("<title>\n  Page title  \n</title>"), "Page title")
        self.assertEqual(extract_title("<html></html>"), "audio")

    def test_decodes_entities(self):
        self.assertEqual(
            decode_entities(" Don&#x27;t &lt;Stop&gt; &quot;Go&quot; &amp; Rock&#39;n "),
            "Don't <Stop> \"Go\" & Rock'n",
        )
        self.assertIsNone(decode_entities(None))

    def test_artist_from_description(self):
        cases = {
            "Night Swim by Coral Tide (@coral). Listen now.": "Coral Tide",
            "Slow Burn by The Embers on SoundCloud": "The Embers",
            "Tom &amp; Jerry by Hanna &amp; Barbera. Listen on Suno": "Hanna & Barbera",
        }
        for description, artist in cases.items():
            with self.subTest(description=description):
                html = f'<meta name="description" content="{description}">'
                self.assertEqual(extract_artist(html), artist)

    def test_artist_is_absent_for_other_descriptions(self):
        for html in (
            '<meta name="description" content="A podcast about gardening">',
            '<meta name="description" content="Produced by someone">',
            "<html></html>",
        ):
            with self.subTest(html=html):
                self.assertIsNone(extract_artist(html))


class FilenameTests(unittest.TestCase):
    def test_guess_extension(self):
        cases = {
            "https://cdn.x.com/a.mp3": "mp3",
            "https://cdn.x.com/a.M4A?sig=abc.wav": "m4a",
            "https://cdn.x.com/a.flac?x=1": "flac",
            "https://cdn.x.com/a.exe": "mp3",
            "https://cdn.x.com/stream": "mp3",
        }
        for url, extension in cases.items():
            with self.subTest(url=url):
                self.assertEqual(guess_extension(url), extension)

    def test_sanitize_filename(self):
        self.assertEqual(sanitize_filename("AC/DC: Live"), "AC_DC_ Live")
        self.assertEqual(sanitize_filename("  ..Hidden track..  "), "Hidden track")

    def test_sanitize_filename_is_idempotent(self):
        for value in ('a/b\\c:d*e?f"g<h>i|j', " .. leading and trailing .. ", "plain", "..."):
            with self.subTest(value=value):
                once = sanitize_filename(value)
                self.assertEqual(sanitize_filename(once), once)
                self.assertFalse(set('/\\:*?"<>|') & set(once))

    def test_build_filename(self):
        self.assertEqual(build_filename("Song", "Band", "ogg"), "Band - Song.ogg")
        self.assertEqual(build_filename("Song", None, "mp3"), "Song.mp3")
        self.assertEqual(build_filename("...", None, "mp3"), "audio.mp3")


if __name__ == "__main__":
    unittest.main()
