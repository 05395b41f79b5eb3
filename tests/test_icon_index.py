"""Tests for appdrawer.core.icon_index."""

from pathlib import Path

import pytest

from appdrawer.core.icon_index import (
    DEFAULT_ICON_PATHS,
    IconFormat,
    IconIndex,
    IndexedIcon,
    ThemeDirectory,
    merge_by_priority,
    scan_directory,
)


@pytest.fixture
def theme_dirs(tmp_path):
    """Create a raster and a vector theme directory sharing one icon name."""
    pixmaps = tmp_path / "pixmaps"
    scalable = tmp_path / "scalable" / "apps"
    pixmaps.mkdir()
    scalable.mkdir(parents=True)
    (pixmaps / "foo.png").write_bytes(b"png")
    (pixmaps / "bar.png").write_bytes(b"png")
    (pixmaps / "notes.txt").write_bytes(b"text")
    (pixmaps / "baz.svg").write_bytes(b"<svg/>")
    (scalable / "foo.svg").write_bytes(b"<svg/>")
    (scalable / "qux.svg").write_bytes(b"<svg/>")
    return pixmaps, scalable


class TestIconFormat:
    def test_parse_extension(self):
        assert IconFormat.parse("png") is IconFormat.RASTER
        assert IconFormat.parse(".svg") is IconFormat.VECTOR

    def test_parse_name(self):
        assert IconFormat.parse("Raster") is IconFormat.RASTER
        assert IconFormat.parse("vector") is IconFormat.VECTOR

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            IconFormat.parse("xpm")


class TestScanDirectory:
    def test_keeps_only_declared_extension(self, theme_dirs):
        pixmaps, _ = theme_dirs
        found = scan_directory(ThemeDirectory.of(pixmaps, "png"))
        assert set(found) == {"foo", "bar"}
        assert found["foo"] == IndexedIcon(pixmaps / "foo.png", IconFormat.RASTER)

    def test_missing_directory_is_empty(self, tmp_path):
        assert scan_directory(ThemeDirectory.of(tmp_path / "missing", "png")) == {}

    def test_skips_subdirectories(self, tmp_path):
        (tmp_path / "dir.png").mkdir()
        (tmp_path / "real.png").write_bytes(b"png")
        found = scan_directory(ThemeDirectory.of(tmp_path, "png"))
        assert set(found) == {"real"}

    def test_strips_only_last_extension(self, tmp_path):
        (tmp_path / "org.example.App.png").write_bytes(b"png")
        found = scan_directory(ThemeDirectory.of(tmp_path, "png"))
        assert "org.example.App" in found

    def test_extension_match_is_case_sensitive(self, tmp_path):
        (tmp_path / "upper.PNG").write_bytes(b"png")
        assert scan_directory(ThemeDirectory.of(tmp_path, "png")) == {}

    def test_skips_symlinked_icons(self, tmp_path):
        (tmp_path / "real.png").write_bytes(b"png")
        (tmp_path / "alias.png").symlink_to(tmp_path / "real.png")
        index = IconIndex.build([ThemeDirectory.of(tmp_path, "png")])
        assert index.lookup("alias") is None
        assert index.lookup("real") == IndexedIcon(tmp_path / "real.png", IconFormat.RASTER)


class TestMergeByPriority:
    def test_later_layer_wins(self):
        low = {"foo": IndexedIcon(Path("/low/foo.png"), IconFormat.RASTER)}
        high = {"foo": IndexedIcon(Path("/high/foo.svg"), IconFormat.VECTOR)}
        merged = merge_by_priority([low, high])
        assert merged["foo"].path == Path("/high/foo.svg")
        assert merged["foo"].format is IconFormat.VECTOR

    def test_keeps_unique_names(self):
        merged = merge_by_priority([
            {"a": IndexedIcon(Path("/a.png"), IconFormat.RASTER)},
            {"b": IndexedIcon(Path("/b.svg"), IconFormat.VECTOR)},
        ])
        assert set(merged) == {"a", "b"}


class TestIconIndex:
    def test_later_directory_takes_priority(self, theme_dirs):
        pixmaps, scalable = theme_dirs
        index = IconIndex.build([
            ThemeDirectory.of(pixmaps, "png"),
            ThemeDirectory.of(scalable, "svg"),
        ])
        hit = index.lookup("foo")
        assert hit == IndexedIcon(scalable / "foo.svg", IconFormat.VECTOR)

    def test_reversed_order_reverses_priority(self, theme_dirs):
        pixmaps, scalable = theme_dirs
        index = IconIndex.build([
            ThemeDirectory.of(scalable, "svg"),
            ThemeDirectory.of(pixmaps, "png"),
        ])
        assert index.lookup("foo").format is IconFormat.RASTER

    def test_same_directory_two_formats(self, theme_dirs):
        pixmaps, _ = theme_dirs
        (pixmaps / "foo.svg").write_bytes(b"<svg/>")
        index = IconIndex.build([
            ThemeDirectory.of(pixmaps, "svg"),
            ThemeDirectory.of(pixmaps, "png"),
        ])
        assert index.lookup("foo").path == pixmaps / "foo.png"
        assert index.lookup("baz").format is IconFormat.VECTOR

    def test_lookup_missing(self, theme_dirs):
        pixmaps, _ = theme_dirs
        index = IconIndex.build([ThemeDirectory.of(pixmaps, "png")])
        assert index.lookup("nonexistent") is None
        assert "nonexistent" not in index

    def test_missing_directories_are_tolerated(self, theme_dirs, tmp_path):
        pixmaps, _ = theme_dirs
        index = IconIndex.build([
            ThemeDirectory.of(tmp_path / "nope", "svg"),
            ThemeDirectory.of(pixmaps, "png"),
            ThemeDirectory.of(tmp_path / "also-nope", "png"),
        ])
        assert set(index) == {"foo", "bar"}

    def test_parallel_scan_preserves_priority(self, theme_dirs):
        pixmaps, scalable = theme_dirs
        dirs = [ThemeDirectory.of(pixmaps, "png"), ThemeDirectory.of(scalable, "svg")]
        sequential = IconIndex.build(dirs)
        parallel = IconIndex.build(dirs, max_workers=4)
        assert parallel.names() == sequential.names()
        for name in sequential:
            assert parallel.lookup(name) == sequential.lookup(name)

    def test_empty_index(self):
        index = IconIndex.build([])
        assert len(index) == 0
        assert index.lookup("anything") is None

    def test_default_paths_prefer_pixmaps_png(self):
        assert DEFAULT_ICON_PATHS[-1] == ThemeDirectory.of("/usr/share/pixmaps", "png")
        assert DEFAULT_ICON_PATHS[0].format is IconFormat.RASTER
