"""Unit tests for library filename rules."""

from gst_patcher.services.library_rules import (
    DEFAULT_RULES,
    LibraryRule,
    is_bundled_library,
    match_library_entries,
)
from tests.fixtures.factories import create_installation, expected_bundled_entries


class TestLibraryRule:
    """Tests for a single prefix/suffix rule."""

    def test_prefix_and_suffix_match(self):
        rule = LibraryRule("libgst", ".dylib")

        assert rule.matches("libgstreamer-1.0.0.dylib")
        assert rule.matches("libgstbase-1.0.0.dylib")

    def test_wrong_suffix_rejected(self):
        rule = LibraryRule("libgst", ".dylib")

        assert not rule.matches("libgstreamer-notes.txt")

    def test_prefix_is_case_sensitive(self):
        """Rules follow the filesystem names, which are lowercase."""
        rule = LibraryRule("libgst", ".dylib")

        assert not rule.matches("LIBGSTreamer.dylib")

    def test_empty_suffix_requires_exact_name(self):
        rule = LibraryRule("gstreamer-1.0")

        assert rule.matches("gstreamer-1.0")
        assert not rule.matches("gstreamer-1.0-extra")

    def test_prefix_and_suffix_may_not_overlap(self):
        rule = LibraryRule("libffi.dylib", ".dylib")

        assert rule.matches("libffi.dylib.dylib")
        assert not rule.matches("libffi.dylib")


class TestBundledLibraries:
    """Tests for the default rule set."""

    def test_glib_stack_is_bundled(self):
        for name in ("libglib-2.0.0.dylib", "libgio-2.0.0.dylib", "libintl.8.dylib", "libpcre2-8.0.dylib"):
            assert is_bundled_library(name), name

    def test_unrelated_library_not_bundled(self):
        assert not is_bundled_library("libwine.1.dylib")
        assert not is_bundled_library("libfreetype.6.dylib")

    def test_default_rules_cover_ten_patterns(self):
        assert len(DEFAULT_RULES) == 10


class TestMatchLibraryEntries:
    """Tests for listing matched lib64 entries."""

    def test_matches_files_symlinks_and_plugin_dir(self, temp_dir):
        install = create_installation(temp_dir)

        matched = match_library_entries(install.lib64_dir)

        assert set(matched) == expected_bundled_entries()

    def test_no_duplicates(self, temp_dir):
        install = create_installation(temp_dir)

        matched = match_library_entries(install.lib64_dir)

        assert len(matched) == len(set(matched))

    def test_missing_directory_returns_empty(self, temp_dir):
        assert match_library_entries(temp_dir / "missing") == []

    def test_order_is_stable(self, temp_dir):
        install = create_installation(temp_dir)

        assert match_library_entries(install.lib64_dir) == match_library_entries(install.lib64_dir)

    def test_custom_rules(self, temp_dir):
        install = create_installation(temp_dir)

        matched = match_library_entries(install.lib64_dir, (LibraryRule("libwine", ".dylib"),))

        assert matched == ["libwine.1.dylib"]
