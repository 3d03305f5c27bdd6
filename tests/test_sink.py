# tests/test_sink.py
"""Test writing lyrics and favourites"""

from tube_lyrics.lyrics.classifier import package
from tube_lyrics.lyrics.models import LyricsSource
from tube_lyrics.media.sink import add_to_favourites, safe_filename, save_lyrics


class TestSafeFilename:
    """Test filename sanitization"""

    def test_removes_invalid_characters(self):
        """Test Windows-invalid characters are dropped"""
        assert safe_filename('AC/DC: "Thunderstruck"') == "ACDC Thunderstruck"
        assert safe_filename("What? <Live> | *") == "What Live"
        assert safe_filename("back\\slash") == "backslash"

    def test_removes_control_characters(self):
        """Test control characters are dropped"""
        assert safe_filename("  a\x07b\tc  ") == "abc"

    def test_fallback(self):
        """Test names that end up empty"""
        assert safe_filename("???") == "untitled"
        assert safe_filename("") == "untitled"
        assert safe_filename(None) == "untitled"

    def test_unicode_kept(self):
        """Test non-ASCII titles survive"""
        assert safe_filename("Café del Mar") == "Café del Mar"


class TestSaveLyrics:
    """Test lyrics files"""

    def test_synced_as_lrc(self, temp_dir):
        """Test synced lyrics go to .lrc"""
        result = package("[00:01.00]Hello", LyricsSource.LRCLIB)
        path = save_lyrics(temp_dir / "new" / "dir", "Song: Title", result)

        assert path == temp_dir / "new" / "dir" / "Song Title.lrc"
        assert path.read_text(encoding="utf-8") == "[00:01.00]Hello"

    def test_plain_as_txt(self, temp_dir):
        """Test plain lyrics go to .txt with the marker"""
        result = package("Hello", LyricsSource.GENIUS)
        path = save_lyrics(temp_dir, "Song", result)

        assert path.name == "Song.txt"
        assert path.read_text(encoding="utf-8").startswith("[UNSYNCED LYRICS]")

    def test_overwrites(self, temp_dir):
        """Test a second save replaces the file"""
        save_lyrics(temp_dir, "Song", package("Old", LyricsSource.GENIUS))
        path = save_lyrics(temp_dir, "Song", package("New", LyricsSource.GENIUS))

        assert path.read_text(encoding="utf-8").endswith("New")


class TestFavourites:
    """Test favourites list"""

    def test_appends_lines(self, temp_dir):
        """Test entries accumulate in order"""
        path = temp_dir / "favourites.txt"
        add_to_favourites(path, "First", "https://www.youtube.com/watch?v=1")
        add_to_favourites(path, "Second", "https://www.youtube.com/watch?v=2")

        assert path.read_text(encoding="utf-8") == (
            "First | https://www.youtube.com/watch?v=1\n"
            "Second | https://www.youtube.com/watch?v=2\n"
        )
