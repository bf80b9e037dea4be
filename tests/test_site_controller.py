"""HTTP tests for starter page, zip export and username migration."""

import datetime
import io
import zipfile


class TestCreateStarter:
    """Tests for POST /api/create-starter."""

    def test_writes_personalised_index(self, app_client, fake_storage):
        res = app_client.post("/api/create-starter")

        assert res.status_code == 200
        html = fake_storage.objects["~alice/index.html"].decode("utf-8")
        assert "Welcome to ~alice!" in html
        assert str(datetime.date.today().year) in html
        assert "PLACEHOLDER" not in html
        assert "!uid-alice/etag" in fake_storage.objects

    def test_backend_failure(self, app_client, fake_storage):
        fake_storage.fail_put.add("~alice/index.html")
        res = app_client.post("/api/create-starter")
        assert res.status_code == 500
        assert res.json() == {"detail": "Failed to create starter page"}


class TestDownloadZip:
    """Tests for GET /api/files/zip."""

    def test_zip_contains_every_file(self, app_client, fake_storage):
        fake_storage.add("~alice/index.html", "<p>home</p>")
        fake_storage.add("~alice/css/site.css", "body{}")

        res = app_client.get("/api/files/zip")

        assert res.status_code == 200
        assert res.headers["content-type"] == "application/zip"
        assert 'filename="alice.zip"' in res.headers["content-disposition"]
        with zipfile.ZipFile(io.BytesIO(res.content)) as zf:
            assert sorted(zf.namelist()) == ["alice/css/site.css", "alice/index.html"]
            assert zf.read("alice/css/site.css") == b"body{}"

    def test_empty_namespace_gives_empty_zip(self, app_client):
        res = app_client.get("/api/files/zip")
        assert res.status_code == 200
        with zipfile.ZipFile(io.BytesIO(res.content)) as zf:
            assert zf.namelist() == []


class TestMigration:
    """Tests for prepare-migration and migrate-username."""

    def test_prepare_writes_token(self, app_client, fake_storage):
        res = app_client.get("/api/prepare-migration")
        assert res.status_code == 200
        assert fake_storage.objects["~alice/.migration_token"] == b"uid-alice"

    def test_migrate_moves_files(self, app_client, fake_storage):
        fake_storage.add("~alicia/index.html", "<p>old</p>")
        fake_storage.add("~alicia/img/a.png", b"png")
        fake_storage.add("~alicia/.migration_token", "uid-alice")

        res = app_client.post("/api/migrate-username", json={"old": "alicia"})

        assert res.status_code == 200
        assert res.json() == {"ok": True, "moved": 2}
        assert fake_storage.objects["~alice/index.html"] == b"<p>old</p>"
        assert fake_storage.objects["~alice/img/a.png"] == b"png"
        assert not any(k.startswith("~alicia/") for k in fake_storage.objects)
        assert "~alice/.migration_token" not in fake_storage.objects

    def test_missing_token_is_409(self, app_client, fake_storage):
        fake_storage.add("~alicia/index.html", "x")
        res = app_client.post("/api/migrate-username", json={"old": "alicia"})
        assert res.status_code == 409
        assert "~alicia/index.html" in fake_storage.objects

    def test_foreign_token_is_403(self, app_client, fake_storage):
        fake_storage.add("~carol/index.html", "x")
        fake_storage.add("~carol/.migration_token", "uid-carol")
        res = app_client.post("/api/migrate-username", json={"old": "carol"})
        assert res.status_code == 403
        assert "~alice/index.html" not in fake_storage.objects

    def test_invalid_old_username_is_400(self, app_client):
        res = app_client.post("/api/migrate-username", json={"old": "../bob"})
        assert res.status_code == 400
        assert res.json() == {"detail": "Invalid file path"}

    def test_missing_old_username_is_400(self, app_client):
        res = app_client.post("/api/migrate-username", json={})
        assert res.status_code == 400

    def test_same_name_is_noop(self, app_client, fake_storage):
        fake_storage.add("~alice/index.html", "x")
        fake_storage.add("~alice/.migration_token", "uid-alice")
        res = app_client.post("/api/migrate-username", json={"old": "alice"})
        assert res.json() == {"ok": True, "moved": 0}
        assert fake_storage.objects["~alice/index.html"] == b"x"
        assert "~alice/.migration_token" not in fake_storage.objects
