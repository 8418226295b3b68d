"""
Tests for the notification endpoints and the quota refresh
"""
import cloudinary.exceptions

from storefront.dependencies import get_usage_client
from storefront.services.cloudinary_client import CloudinaryUsageClient

from main import app

GIB = 1024 * 1024 * 1024


def create(client, title, type="info"):
    response = client.post("/api/notifications", json={"title": title, "type": type, "link_path": "/dashboard"})
    assert response.status_code == 201
    return response.json()


class TestNotificationManagement:

    def test_create_and_get(self, client):
        created = create(client, "Welcome")

        response = client.get(f"/api/notifications/{created['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Welcome"
        assert data["is_read"] is False
        assert data["link_path"] == "/dashboard"

    def test_list_newest_first_with_unread_count(self, client):
        first = create(client, "First")
        second = create(client, "Second", type="success")

        data = client.get("/api/notifications").json()

        assert [n["id"] for n in data["notifications"]] == [second["id"], first["id"]]
        assert data["total"] == 2
        assert data["unread_count"] == 2

    def test_read_and_unread(self, client):
        notif = create(client, "Toggle")

        assert client.post(f"/api/notifications/{notif['id']}/read").json()["is_read"] is True
        assert client.get("/api/notifications", params={"unread_only": True}).json()["total"] == 0

        assert client.post(f"/api/notifications/{notif['id']}/unread").json()["is_read"] is False
        assert client.get(f"/api/notifications/{notif['id']}").json()["is_read"] is False

    def test_read_all(self, client):
        create(client, "One")
        create(client, "Two")

        assert client.post("/api/notifications/read-all").json()["marked_count"] == 2
        assert client.get("/api/notifications").json()["unread_count"] == 0

    def test_filter_by_type(self, client):
        create(client, "Info")
        create(client, "Oops", type="error")

        data = client.get("/api/notifications", params={"type": "error"}).json()

        assert [n["title"] for n in data["notifications"]] == ["Oops"]

    def test_delete_one_and_all(self, client):
        keep = create(client, "Keep")
        drop = create(client, "Drop")

        assert client.delete(f"/api/notifications/{drop['id']}").status_code == 200
        assert client.get("/api/notifications").json()["total"] == 1
        assert client.get(f"/api/notifications/{keep['id']}").status_code == 200

        assert client.delete("/api/notifications").json()["deleted_count"] == 1
        assert client.get("/api/notifications").json()["total"] == 0

    def test_unknown_id(self, client):
        assert client.get("/api/notifications/missing").status_code == 404
        assert client.post("/api/notifications/missing/read").status_code == 404
        assert client.post("/api/notifications/missing/unread").status_code == 404
        assert client.delete("/api/notifications/missing").status_code == 404


class TestQuotaRefresh:

    def test_near_full_disk_notifies_once(self, client, usage_report):
        usage_report["storage"]["usage"] = int(1.9 * GIB)

        first = client.post("/api/notifications/refresh").json()
        second = client.post("/api/notifications/refresh").json()

        assert first["ok"] is True
        assert first["percent"] == 95.0
        assert first["tier"] == "critical"
        assert first["notification"]["title"] == "Disk nearly full (95%)"
        assert second["notification"] is None

        listing = client.get("/api/notifications").json()
        assert listing["total"] == 1
        assert listing["notifications"][0]["type"] == "critical"
        assert listing["notifications"][0]["link_path"] == "/dashboard/static"

    def test_healthy_disk(self, client, usage_report):
        usage_report["storage"]["usage"] = GIB

        data = client.post("/api/notifications/refresh").json()

        assert data["tier"] == "ok"
        assert data["percent"] == 50.0
        assert data["notification"] is None

    def test_no_storage_info(self, client, usage_report):
        usage_report["storage"].pop("usage")

        assert client.post("/api/notifications/refresh").json() == {"ok": True, "note": "no storage info"}

    def test_upstream_error(self, client, settings, failing_usage_api):
        usage_api = failing_usage_api(cloudinary.exceptions.RateLimited("Rate Limit Exceeded"))
        failing = CloudinaryUsageClient.from_settings(settings, usage_api=usage_api)
        app.dependency_overrides[get_usage_client] = lambda: failing

        response = client.post("/api/notifications/refresh")

        assert response.status_code == 502
        assert response.json() == {"ok": False, "error": "Rate Limit Exceeded"}
