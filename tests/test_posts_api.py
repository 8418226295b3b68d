"""
Tests for posts
"""
import asyncio

import pytest

from storefront.database import create_indexes


@pytest.fixture
def indexed_client(client, db):
    asyncio.run(create_indexes(db))
    return client


class TestPosts:

    def test_slug_is_derived_from_title(self, client):
        response = client.post("/api/posts", json={"title": "Promo Akhir Tahun 2026!"})

        assert response.status_code == 201
        assert response.json()["slug"] == "promo-akhir-tahun-2026"

    def test_explicit_slug_is_normalized(self, client):
        post = client.post("/api/posts", json={"title": "Anything", "slug": "My Custom Slug"}).json()
        assert post["slug"] == "my-custom-slug"

    def test_title_without_letters_or_digits(self, client):
        response = client.post("/api/posts", json={"title": "!!!"})

        assert response.status_code == 422
        assert response.json()["error"] == "ValidationError"

    def test_duplicate_slug(self, indexed_client):
        indexed_client.post("/api/posts", json={"title": "Hello"})

        response = indexed_client.post("/api/posts", json={"title": "hello"})

        assert response.status_code == 422
        assert "already in use" in response.json()["detail"]

    def test_update_and_delete(self, client):
        post = client.post("/api/posts", json={"title": "Draft"}).json()

        updated = client.put(f"/api/posts/{post['id']}", json={"published": True, "content": "Hi"}).json()
        assert updated["published"] is True
        assert updated["content"] == "Hi"

        assert client.delete(f"/api/posts/{post['id']}").status_code == 200
        assert client.get(f"/api/posts/{post['id']}").status_code == 404
        assert client.put(f"/api/posts/{post['id']}", json={"title": "Gone"}).status_code == 404

    def test_public_listing_shows_published_only(self, client):
        client.post("/api/posts", json={"title": "Hidden"})
        client.post("/api/posts", json={"title": "Visible", "published": True})

        public = client.get("/api/storefront/posts").json()

        assert [p["slug"] for p in public] == ["visible"]
        assert client.get("/api/storefront/posts/visible").status_code == 200
        assert client.get("/api/storefront/posts/hidden").status_code == 404
        assert len(client.get("/api/posts").json()) == 2
