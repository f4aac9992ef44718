"""Tests for public id derivation."""

from __future__ import annotations

from pathlib import Path

import pytest

from cloudinary_uploader import derive_public_id
from cloudinary_uploader.naming import ensure_trailing_slash, is_remote, public_id_from_url


class TestDerivePublicId:
    """Tests for derive_public_id."""

    @pytest.mark.parametrize(
        ("path", "base_path", "prepend", "expected"),
        [
            ("/tmp/css/default.css", "/tmp/", "new", "new/css/default"),
            ("/a/b/c.png", "/a", "", "b/c"),
            ("/a/b/c.png", "/a ", "  ", "b/c"),
            ("/a/b/c.png", "", "/x", "x/a/b/c"),
        ],
    )
    def test_known_names(self, path: str, base_path: str, prepend: str, expected: str) -> None:
        """Test the documented path/base/prepend combinations."""
        assert derive_public_id(path, base_path, prepend) == expected

    def test_without_base_path_uses_parent_and_file_name(self) -> None:
        """Test that no base path keeps the last two path segments."""
        assert derive_public_id("/tmp/css/default.css") == "css/default"

    def test_without_base_path_with_prepend(self) -> None:
        """Test prepend path applied to a parent/file name."""
        assert derive_public_id("/tmp/images/logo.png", None, "v2/") == "v2/images/logo"

    def test_is_deterministic(self) -> None:
        """Test that repeated calls give the same id."""
        first = derive_public_id("/srv/static/js/app.js", "/srv/static", "release")
        second = derive_public_id("/srv/static/js/app.js", "/srv/static", "release")
        assert first == second == "release/js/app"

    def test_relative_path_is_resolved(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that relative paths are resolved against the working directory."""
        (tmp_path / "css").mkdir()
        monkeypatch.chdir(tmp_path.resolve())

        assert derive_public_id("css/site.css", str(tmp_path.resolve())) == "css/site"

    def test_base_path_is_not_a_partial_directory_match(self) -> None:
        """Test that /a does not strip the beginning of /ab."""
        assert derive_public_id("/ab/c.png", "/a") == "ab/c"

    def test_surrounding_whitespace_is_ignored(self) -> None:
        """Test that inputs are trimmed."""
        assert derive_public_id("  /a/b/c.png  ", " /a ", " p ") == "p/b/c"

    def test_nested_file_in_base_path(self) -> None:
        """Test deep paths relative to the base directory."""
        public_id = derive_public_id("/site/assets/img/icons/home.svg", "/site/assets")
        assert public_id == "img/icons/home"


class TestHelpers:
    """Tests for naming helpers."""

    def test_ensure_trailing_slash_adds_slash(self) -> None:
        assert ensure_trailing_slash("assets") == "assets/"

    def test_ensure_trailing_slash_keeps_existing(self) -> None:
        assert ensure_trailing_slash("assets/") == "assets/"

    def test_is_remote(self) -> None:
        assert is_remote("http://example.com/a.png")
        assert is_remote("https://example.com/a.png")
        assert not is_remote("/tmp/a.png")
        assert not is_remote(Path("httpdocs/a.png"))

    def test_public_id_from_url_drops_query(self) -> None:
        assert public_id_from_url("https://example.com/img/logo.png?size=2") == "logo.png"
