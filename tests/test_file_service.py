"""Tests for the listing helpers in service/file_service.py."""

import asyncio

import pytest

from config.settings import settings
from core.entities import DirectoryEntry, UserInfo
from service.file_service import file_key, list_tree
from util.errors import AppError, InvalidPathError


class _SlowStorage:
    async def list_directory(self, path):
        await asyncio.sleep(5)
        return []


class _StaticStorage:
    def __init__(self, tree):
        self.tree = tree

    async def list_directory(self, path):
        return self.tree[path]


class TestListTree:
    """Tests for list_tree."""

    @pytest.mark.asyncio
    async def test_sorted_by_name(self):
        storage = _StaticStorage(
            {
                "/~bob/": [
                    DirectoryEntry("z.html", False, 1),
                    DirectoryEntry("a", True),
                    DirectoryEntry("m.css", False, 2),
                ],
                "/~bob/a/": [DirectoryEntry("b.js", False, 3)],
            }
        )
        records = await list_tree(storage, "/~bob/")
        assert [r.object_name for r in records] == ["a/b.js", "m.css", "z.html"]

    @pytest.mark.asyncio
    async def test_deadline_is_504(self, monkeypatch):
        """Should give up on a listing that outlives the deadline."""
        monkeypatch.setattr(settings, "LIST_DEADLINE_SECONDS", 0.05)
        with pytest.raises(AppError) as exc:
            await list_tree(_SlowStorage(), "/~bob/")
        assert exc.value.status_code == 504


class TestFileKey:
    """Tests for file_key."""

    @pytest.mark.parametrize("path", ["", ".", "./", "/~alice/", "/~alice"])
    def test_root_is_not_a_file(self, path):
        with pytest.raises(InvalidPathError):
            file_key(UserInfo("uid-alice", "alice"), path)

    def test_nested_file(self):
        assert file_key(UserInfo("uid-alice", "alice"), "css/a.css") == "/~alice/css/a.css"
