"""Tests for rush.routing.path: segmentation and normalization."""

import pytest

from rush.routing.path import clean_path, needs_cleaning, split_path


class TestSplitPath:
    def test_root(self) -> None:
        assert split_path("/") == []

    def test_segments(self) -> None:
        assert split_path("/api/v1/users") == ["api", "v1", "users"]

    def test_empty_segments_dropped(self) -> None:
        assert split_path("//api///v1//") == ["api", "v1"]


class TestCleanPath:
    @pytest.mark.parametrize(
        ("raw", "clean"),
        [
            ("", "/"),
            ("/", "/"),
            ("//", "/"),
            ("/a", "/a"),
            ("/a/", "/a"),
            ("/a//b", "/a/b"),
            ("/a/./b", "/a/b"),
            ("/a/b/..", "/a"),
            ("/a/b/../c/", "/a/c"),
            ("/../x", "/x"),
            ("/a/../../b", "/b"),
            ("a/b", "/a/b"),
            ("/a/...", "/a/..."),
        ],
    )
    def test_clean(self, raw: str, clean: str) -> None:
        assert clean_path(raw) == clean

    def test_idempotent(self) -> None:
        once = clean_path("//a/./b/../c//")
        assert clean_path(once) == once


class TestNeedsCleaning:
    @pytest.mark.parametrize("path", ["/", "/a", "/a/b", "/a/b.c", "/a/.hidden", "/a/..b"])
    def test_canonical(self, path: str) -> None:
        assert needs_cleaning(path) is False
        assert clean_path(path) == path

    @pytest.mark.parametrize(
        "path",
        ["", "a", "/a/", "//a", "/a//b", "/a/./b", "/a/../b", "/a/.", "/a/.."],
    )
    def test_dirty(self, path: str) -> None:
        assert needs_cleaning(path) is True
        assert clean_path(path) != path
