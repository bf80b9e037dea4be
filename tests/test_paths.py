"""Tests for core/paths.py storage key resolution."""

import pytest

from core.paths import namespace_root, resolve_storage_key
from util.errors import InvalidPathError


class TestResolveStorageKey:
    """Tests for resolve_storage_key."""

    def test_nested_relative_path(self):
        """Should join a plain relative path under the root."""
        assert resolve_storage_key("~bob/", "notes/todo.txt") == "~bob/notes/todo.txt"

    def test_keeps_leading_slash_of_root(self):
        """Should keep the root's leading-slash convention."""
        assert resolve_storage_key("/~bob/", "index.html") == "/~bob/index.html"

    def test_empty_path_is_root(self):
        """Should resolve an empty path to the root itself."""
        assert resolve_storage_key("~bob/", "") == "~bob/"
        assert resolve_storage_key("/~bob/", "") == "/~bob/"

    def test_dot_segments_collapse(self):
        """Should normalise '.' segments and repeated separators."""
        assert resolve_storage_key("/~bob/", "./a//b/./c.css") == "/~bob/a/b/c.css"

    def test_absolute_path_inside_root(self):
        """Should accept an absolute path that stays under the root."""
        assert resolve_storage_key("/~bob/", "/~bob/site/x.js") == "/~bob/site/x.js"

    def test_idempotent(self):
        """Should return identical results for identical inputs."""
        first = resolve_storage_key("/~bob/", "images/logo.png")
        assert resolve_storage_key("/~bob/", "images/logo.png") == first

    @pytest.mark.parametrize(
        "path",
        [
            "../../../etc/passwd",
            "..\\..\\windows\\system32",
            "folder/../../etc/hosts",
            "folder\\..\\..\\windows\\system32",
            "../~carol/secret.txt",
            "/../~bob2",
            "a..b.html",
            "..",
        ],
    )
    def test_rejects_dot_dot(self, path):
        """Should reject any path containing '..'."""
        with pytest.raises(InvalidPathError):
            resolve_storage_key("~bob/", path)

    @pytest.mark.parametrize("path", ["\\windows\\system32", "\\", "\\x.html"])
    def test_rejects_leading_backslash(self, path):
        """Should reject Windows-style absolute paths."""
        with pytest.raises(InvalidPathError):
            resolve_storage_key("~bob/", path)

    @pytest.mark.parametrize("path", ["/etc/passwd", "/~bob2/x.html", "/~bo/x.html", "/"])
    def test_rejects_absolute_paths_outside_root(self, path):
        """Should reject absolute paths that land outside the root."""
        with pytest.raises(InvalidPathError):
            resolve_storage_key("/~bob/", path)

    def test_sibling_namespace_is_not_a_prefix_match(self):
        """Should compare by segment so ~alice never admits ~alice2."""
        with pytest.raises(InvalidPathError):
            resolve_storage_key("~alice/", "../~alice2/x")
        with pytest.raises(InvalidPathError):
            resolve_storage_key("/~alice/", "/~alice2/x")

    def test_error_is_a_400_with_generic_message(self):
        """Should surface as a client error that names no rule."""
        with pytest.raises(InvalidPathError) as exc:
            resolve_storage_key("~bob/", "../x")
        assert exc.value.status_code == 400
        assert exc.value.detail == "Invalid file path"


class TestNamespaceRoot:
    """Tests for namespace_root."""

    def test_shape(self):
        """Should build /~username/."""
        assert namespace_root("alice") == "/~alice/"
