"""Shared fixtures: an in-memory storage backend behind httpx.MockTransport."""

import json
import os
import sys
from pathlib import Path

import httpx
import pytest

# Settings are read at import time; point them at fakes before anything imports them.
os.environ["APP_ENV"] = "test"
os.environ["HANKO_API_URL"] = "https://identity.test"
os.environ["BUNNY_STORAGE_URL"] = "https://storage.test/zone"
os.environ["BUNNY_API_KEY"] = "test-access-key"
os.environ["BUNNY_PULL_ZONE"] = "https://cdn.test"
os.environ["RATE_LIMIT_ENABLED"] = "false"

sys.path.insert(0, str(Path(__file__).parent.parent))

from core.entities import UserInfo  # noqa: E402
from repository.storage_repository import StorageRepository  # noqa: E402

STORAGE_BASE = "https://storage.test/zone"
ACCESS_KEY = "test-access-key"
ZONE_PREFIX = "/zone/"


class FakeStorage:
    """Flat key -> bytes store speaking the storage API's list/GET/PUT/DELETE."""

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.fail_list: set[str] = set()
        self.fail_put: set[str] = set()
        self.fail_delete: set[str] = set()
        self.unreachable: set[str] = set()
        self.raw_paths: list[bytes] = []
        self.calls: list[tuple[str, str]] = []

    def add(self, key: str, data: bytes | str = b"") -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self.objects[key.lstrip("/")] = data

    def _key(self, request: httpx.Request) -> str:
        path = request.url.path
        assert path.startswith(ZONE_PREFIX), path
        return path[len(ZONE_PREFIX):]

    def _listing(self, prefix: str) -> list[dict]:
        files, dirs = [], []
        for key, data in sorted(self.objects.items()):
            if not key.startswith(prefix):
                continue
            rest = key[len(prefix):]
            if "/" in rest:
                name = rest.split("/", 1)[0]
                if name not in dirs:
                    dirs.append(name)
            else:
                files.append(
                    {
                        "ObjectName": rest,
                        "IsDirectory": False,
                        "Length": len(data),
                        "LastChanged": "2024-05-01T12:00:00.000",
                    }
                )
        return [
            {"ObjectName": d, "IsDirectory": True, "Length": 0, "LastChanged": None}
            for d in dirs
        ] + files

    def handler(self, request: httpx.Request) -> httpx.Response:
        assert request.headers.get("AccessKey") == ACCESS_KEY
        key = self._key(request)
        self.calls.append((request.method, key))
        self.raw_paths.append(request.url.raw_path)
        if key in self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)

        if request.method == "GET" and (key == "" or key.endswith("/")):
            if key in self.fail_list:
                return httpx.Response(500)
            return httpx.Response(200, json=self._listing(key))
        if request.method == "GET":
            if key not in self.objects:
                return httpx.Response(404)
            content_type = "text/html" if key.endswith(".html") else "application/octet-stream"
            return httpx.Response(
                200, content=self.objects[key], headers={"content-type": content_type}
            )
        if request.method == "PUT":
            if key in self.fail_put:
                return httpx.Response(500)
            self.objects[key] = request.content
            return httpx.Response(201, json={"HttpCode": 201, "Message": "File uploaded."})
        if request.method == "DELETE":
            if key in self.fail_delete or key not in self.objects:
                return httpx.Response(404, content=json.dumps({"HttpCode": 404}))
            del self.objects[key]
            return httpx.Response(200)
        return httpx.Response(405)


@pytest.fixture
def fake_storage():
    return FakeStorage()


@pytest.fixture
def storage_repo(fake_storage):
    client = httpx.AsyncClient(transport=httpx.MockTransport(fake_storage.handler))
    return StorageRepository(client=client, base_url=STORAGE_BASE, api_key=ACCESS_KEY)


@pytest.fixture
def alice():
    return UserInfo(userid="uid-alice", username="alice")


@pytest.fixture
def app_client(storage_repo, alice):
    """TestClient with the storage backend faked and the caller signed in as alice."""
    from fastapi.testclient import TestClient

    from controller.controller_dependencies import get_current_user, get_storage_repository
    from main import app

    app.dependency_overrides[get_storage_repository] = lambda: storage_repo
    app.dependency_overrides[get_current_user] = lambda: alice
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
