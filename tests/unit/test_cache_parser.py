"""Tests for CMakeCache.txt parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from cmakeproj.core.cache_parser import (
    parse_cache,
    parse_cache_text,
    read_cache_file,
)
from cmakeproj.core.exceptions import CacheReadError
from cmakeproj.core.models import CacheEntry, CacheType


@pytest.mark.core
@pytest.mark.tra("Domain.CacheParser")
class TestParseCacheText:
    """Tests for parse_cache_text."""

    def test_documented_string_entry(self) -> None:
        """A documentation line attaches to the following assignment."""
        text = (
            "// Build type\n"
            "CMAKE_BUILD_TYPE:STRING=Release\n"
            "CMAKE_HOME_DIRECTORY:INTERNAL=/home/u/proj\n"
        )

        cache = parse_cache_text(text)

        assert cache.entries == {
            "CMAKE_BUILD_TYPE": CacheEntry(
                name="CMAKE_BUILD_TYPE",
                type=CacheType.STRING,
                value="Release",
                docstring="Build type",
            )
        }
        assert cache.home_directory == "/home/u/proj"

    def test_keeps_all_public_types(self) -> None:
        """BOOL, PATH, FILEPATH and STRING entries are all kept."""
        text = (
            "A:BOOL=ON\n"
            "B:PATH=/usr/include\n"
            "C:FILEPATH=/usr/bin/cc\n"
            "D:STRING=hello\n"
        )

        cache = parse_cache_text(text)

        assert [(e.name, e.type) for e in cache.entries.values()] == [
            ("A", CacheType.BOOL),
            ("B", CacheType.PATH),
            ("C", CacheType.FILEPATH),
            ("D", CacheType.STRING),
        ]

    @pytest.mark.parametrize("kind", ["INTERNAL", "STATIC", "UNINITIALIZED"])
    def test_excluded_types_are_dropped(self, kind: str) -> None:
        """Non-public kinds never reach the entries, even when documented."""
        text = f"//Some docs\nHIDDEN:{kind}=1\n"

        cache = parse_cache_text(text)

        assert cache.entries == {}

    def test_docstring_reset_by_dropped_assignment(self) -> None:
        """Docs before a dropped entry do not leak into the next entry."""
        text = (
            "//Internal docs\n"
            "SECRET:INTERNAL=1\n"
            "VISIBLE:BOOL=OFF\n"
        )

        cache = parse_cache_text(text)

        assert cache.entries["VISIBLE"].docstring == ""

    def test_multiline_docs_concatenate(self) -> None:
        """Consecutive documentation lines join without separators."""
        text = "//First part.\n//Second part.\nOPT:BOOL=ON\n"

        cache = parse_cache_text(text)

        assert cache.entries["OPT"].docstring == "First part.Second part."

    def test_blank_and_comment_lines_keep_pending_docs(self) -> None:
        """Only assignments reset pending documentation."""
        text = "//Docs\n\n# comment\nnot an assignment\nOPT:STRING=x\n"

        cache = parse_cache_text(text)

        assert cache.entries["OPT"].docstring == "Docs"

    def test_later_occurrence_overwrites(self) -> None:
        """Duplicate names keep the last value."""
        text = "OPT:STRING=first\n//Again\nOPT:STRING=second\n"

        cache = parse_cache_text(text)

        assert len(cache.entries) == 1
        assert cache.entries["OPT"].value == "second"
        assert cache.entries["OPT"].docstring == "Again"

    def test_value_keeps_equals_and_spaces(self) -> None:
        """Everything after the first '=' is the value."""
        text = "CMAKE_CXX_FLAGS:STRING=-DX=1 -O2 \n"

        cache = parse_cache_text(text)

        assert cache.entries["CMAKE_CXX_FLAGS"].value == "-DX=1 -O2 "

    def test_empty_value(self) -> None:
        """An empty value is still an entry."""
        cache = parse_cache_text("CMAKE_INSTALL_PREFIX:PATH=\n")

        assert cache.entries["CMAKE_INSTALL_PREFIX"].value == ""

    def test_names_with_dashes(self) -> None:
        """Names may contain dashes."""
        cache = parse_cache_text("my-option:BOOL=ON\n")

        assert "my-option" in cache.entries

    def test_unknown_type_is_ignored(self) -> None:
        """Lines with an unrecognized type are not assignments."""
        cache = parse_cache_text("//Docs\nOPT:NUMBER=3\nNEXT:BOOL=ON\n")

        assert "OPT" not in cache.entries
        assert cache.entries["NEXT"].docstring == "Docs"

    def test_windows_line_endings(self) -> None:
        """CRLF line endings do not end up in values."""
        cache = parse_cache_text("//Docs\r\nOPT:STRING=x\r\n")

        assert cache.entries["OPT"].value == "x"
        assert cache.entries["OPT"].docstring == "Docs"

    @pytest.mark.parametrize("char", ["\x0b", "\x0c", "\x1c", "\x85", "\u2028"])
    def test_other_line_break_characters_stay_in_value(self, char: str) -> None:
        """Only \\n and \\r\\n separate lines; other breaks are value text."""
        text = f"//Docs\nOPT:STRING=a{char}b\nNEXT:BOOL=ON\n"

        cache = parse_cache_text(text)

        assert cache.entries["OPT"].value == f"a{char}b"
        assert cache.entries["OPT"].docstring == "Docs"
        assert cache.entries["NEXT"].docstring == ""

    def test_home_directory_missing(self) -> None:
        """home_directory is None when the cache does not record it."""
        cache = parse_cache_text("OPT:BOOL=ON\n")

        assert cache.home_directory is None

    def test_parsing_is_idempotent(self, render_cache) -> None:
        """Parsing the same text twice gives equal results."""
        text = render_cache("/src")

        assert parse_cache_text(text) == parse_cache_text(text)


@pytest.mark.core
@pytest.mark.tra("Domain.CacheParser")
class TestReadCacheFile:
    """Tests for reading cache files from a build directory."""

    def test_reads_from_build_directory(self, root: Path, render_cache) -> None:
        """read_cache_file() reads CMakeCache.txt in the given directory."""
        (root / "CMakeCache.txt").write_text(render_cache("/home/u/proj"))

        cache = read_cache_file(str(root))

        assert cache.home_directory == "/home/u/proj"
        assert cache.entries["CMAKE_BUILD_TYPE"].value == "Debug"
        assert cache.entries["CMAKE_BUILD_TYPE"].docstring == "Choose the type of build."

    def test_parse_cache_returns_public_entries(
        self, root: Path, render_cache
    ) -> None:
        """parse_cache() returns only the name-to-entry mapping."""
        (root / "CMakeCache.txt").write_text(render_cache("/home/u/proj"))

        entries = parse_cache(str(root))

        assert list(entries) == ["CMAKE_BUILD_TYPE"]

    def test_missing_cache_raises_cache_read_error(self, root: Path) -> None:
        """An absent cache file raises CacheReadError, an OSError."""
        with pytest.raises(CacheReadError) as exc_info:
            read_cache_file(str(root))

        assert isinstance(exc_info.value, OSError)
        assert exc_info.value.path.endswith("CMakeCache.txt")
        assert isinstance(exc_info.value.cause, FileNotFoundError)

    def test_uses_given_filesystem(self, fake_fs, render_cache) -> None:
        """Remote build directories are read through the filesystem port."""
        fake_fs.files["ssh://box/b/CMakeCache.txt"] = render_cache("/s")

        cache = read_cache_file("ssh://box/b", fake_fs)

        assert cache.home_directory == "/s"
