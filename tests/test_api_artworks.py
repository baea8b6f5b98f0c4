# =============================================================================
# tests/test_api_artworks.py - Artwork Endpoint Tests
# =============================================================================
# End-to-end tests for /api/artworks/*:
# - Multipart upload and static serving of the stored image
# - Gallery listing with pagination
# - Like toggle, owner-only edit and delete
# =============================================================================

from uuid import uuid4

import pytest

from app.config import settings
from app.dependencies import get_storage_service
from app.main import app, upload_too_large
from core.services.storage_service import StorageService
from tests.fakes import bearer


@pytest.fixture
def alex_token(alex):
    return alex.token


@pytest.fixture
def bob_token(bob):
    return bob.token


def upload(client, token, png_bytes, title="Sunset", tags="sunset, sea", filename="sunset.png"):
    return client.post(
        "/api/artworks",
        headers=bearer(token),
        files={"image": (filename, png_bytes, "image/png")},
        data={"title": title, "tags": tags},
    )


class TestUploadEndpoint:
    """Tests for POST /api/artworks."""

    def test_upload(self, client, alex, alex_token, png_bytes):
        response = upload(client, alex_token, png_bytes)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Artwork uploaded"
        artwork = body["artwork"]
        assert artwork["title"] == "Sunset"
        assert artwork["tags"] == ["sunset", "sea"]
        assert artwork["likes_count"] == 0
        assert artwork["is_liked"] is False
        assert artwork["image_url"].startswith("/uploads/art-")
        assert artwork["artist"]["username"] == "alex"
        assert artwork["artist"]["isFollowing"] is False
        assert "createdAt" in artwork and "updatedAt" in artwork

    def test_uploaded_image_is_served(self, client, alex_token, png_bytes):
        image_url = upload(client, alex_token, png_bytes).json()["artwork"]["image_url"]

        response = client.get(image_url)

        assert response.status_code == 200
        assert response.content == png_bytes

    def test_requires_auth(self, client, png_bytes):
        response = client.post(
            "/api/artworks",
            files={"image": ("a.png", png_bytes, "image/png")},
            data={"title": "Sunset"},
        )

        assert response.status_code == 401

    def test_missing_image(self, client, alex_token):
        response = client.post("/api/artworks", headers=bearer(alex_token), data={"title": "Sunset"})

        assert response.status_code == 400
        assert response.json()["message"] == "Title and image required"

    def test_missing_title(self, client, alex_token, png_bytes):
        response = client.post(
            "/api/artworks",
            headers=bearer(alex_token),
            files={"image": ("a.png", png_bytes, "image/png")},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Title and image required"

    def test_not_an_image(self, client, alex_token):
        response = client.post(
            "/api/artworks",
            headers=bearer(alex_token),
            files={"image": ("notes.pdf", b"%PDF-1.4", "application/pdf")},
            data={"title": "Notes"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Only image files allowed"

    def test_too_large(self, client, alex_token, tmp_path):
        app.dependency_overrides[get_storage_service] = lambda: StorageService(
            tmp_path, 1024 * 1024, [".png"], ["image/png"]
        )

        response = client.post(
            "/api/artworks",
            headers=bearer(alex_token),
            files={"image": ("big.png", b"x" * (1024 * 1024 + 1), "image/png")},
            data={"title": "Big"},
        )

        assert response.status_code == 413
        assert response.json()["code"] == "FILE_TOO_LARGE"
        assert list(tmp_path.iterdir()) == []

    def test_declared_size_rejected_before_parsing(self, client, monkeypatch):
        """An oversized Content-Length is refused before auth or form parsing."""
        monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE_MB", 1)

        response = client.post(
            "/api/artworks",
            files={"image": ("huge.png", b"x" * (3 * 1024 * 1024), "image/png")},
            data={"title": "Huge"},
        )

        assert response.status_code == 413
        assert response.json() == {
            "message": "File too large (max: 1MB)",
            "code": "FILE_TOO_LARGE",
            "details": {"max_mb": 1},
        }

    @pytest.mark.parametrize(
        "content_length,expected",
        [
            (None, False),
            ("", False),
            ("abc", False),
            (str(1024 * 1024), False),
            (str(2 * 1024 * 1024), False),
            (str(2 * 1024 * 1024 + 1), True),
        ],
    )
    def test_upload_too_large(self, content_length, expected):
        assert upload_too_large(content_length, 1024 * 1024) is expected


class TestGalleryEndpoint:
    """Tests for GET /api/artworks."""

    def test_empty_gallery(self, client):
        response = client.get("/api/artworks")

        assert response.status_code == 200
        assert response.json() == {
            "artworks": [],
            "pagination": {"page": 1, "limit": 20, "total": 0},
        }

    def test_pagination(self, client, alex_token, png_bytes):
        for n in range(3):
            upload(client, alex_token, png_bytes, title=f"Art {n}")

        response = client.get("/api/artworks", params={"page": 2, "limit": 2})

        body = response.json()
        assert [a["title"] for a in body["artworks"]] == ["Art 0"]
        assert body["pagination"] == {"page": 2, "limit": 2, "total": 3}

    def test_invalid_limit(self, client):
        response = client.get("/api/artworks", params={"limit": 0})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_invalid_token_is_anonymous(self, client, alex_token, png_bytes):
        upload(client, alex_token, png_bytes)

        response = client.get("/api/artworks", headers=bearer("garbage"))

        assert response.status_code == 200
        assert response.json()["artworks"][0]["is_liked"] is False


class TestSingleArtworkEndpoints:
    """Tests for GET/PUT/DELETE /api/artworks/{id} and the like toggle."""

    @pytest.fixture
    def artwork(self, client, alex_token, png_bytes):
        return upload(client, alex_token, png_bytes).json()["artwork"]

    def test_like_flow(self, client, artwork, bob_token):
        """bob likes alex's Sunset: liked, count 1, then unlike restores."""
        like_url = f"/api/artworks/{artwork['id']}/like"

        assert client.post(like_url, headers=bearer(bob_token)).json() == {"liked": True}

        as_bob = client.get(f"/api/artworks/{artwork['id']}", headers=bearer(bob_token)).json()["artwork"]
        assert as_bob["likes_count"] == 1
        assert as_bob["is_liked"] is True

        anonymous = client.get(f"/api/artworks/{artwork['id']}").json()["artwork"]
        assert anonymous["likes_count"] == 1
        assert anonymous["is_liked"] is False

        assert client.post(like_url, headers=bearer(bob_token)).json() == {"liked": False}
        assert client.get(f"/api/artworks/{artwork['id']}").json()["artwork"]["likes_count"] == 0

    def test_like_unknown_artwork(self, client, bob_token):
        response = client.post(f"/api/artworks/{uuid4()}/like", headers=bearer(bob_token))

        assert response.status_code == 404
        assert response.json()["message"] == "Artwork not found"

    def test_get_unknown(self, client):
        response = client.get("/api/artworks/not-an-id")

        assert response.status_code == 404
        assert response.json()["message"] == "Artwork not found"

    def test_update_by_owner(self, client, artwork, alex_token):
        response = client.put(
            f"/api/artworks/{artwork['id']}",
            headers=bearer(alex_token),
            json={"title": "Sunset II", "tags": ["oil"]},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Artwork updated"
        assert body["artwork"]["title"] == "Sunset II"
        assert body["artwork"]["tags"] == ["oil"]

    def test_update_by_stranger(self, client, artwork, bob_token):
        response = client.put(
            f"/api/artworks/{artwork['id']}",
            headers=bearer(bob_token),
            json={"title": "Mine"},
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Not authorized"

    def test_delete_by_stranger(self, client, artwork, bob_token):
        response = client.delete(f"/api/artworks/{artwork['id']}", headers=bearer(bob_token))

        assert response.status_code == 404
        assert response.json()["message"] == "Not authorized"

    def test_delete_by_owner(self, client, artwork, alex, alex_token):
        response = client.delete(f"/api/artworks/{artwork['id']}", headers=bearer(alex_token))

        assert response.status_code == 200
        assert response.json() == {"message": "Artwork deleted"}

        assert client.get(f"/api/artworks/{artwork['id']}").status_code == 404
        assert client.get(artwork["image_url"]).status_code == 404
        listing = client.get(f"/api/artworks/user/{alex.user.id}").json()
        assert listing == {"artworks": []}

        again = client.delete(f"/api/artworks/{artwork['id']}", headers=bearer(alex_token))
        assert again.status_code == 404


class TestUserArtworksEndpoint:
    """Tests for GET /api/artworks/user/{user_id}."""

    def test_lists_newest_first(self, client, alex, alex_token, png_bytes):
        upload(client, alex_token, png_bytes, title="First")
        upload(client, alex_token, png_bytes, title="Second")

        response = client.get(f"/api/artworks/user/{alex.user.id}")

        assert [a["title"] for a in response.json()["artworks"]] == ["Second", "First"]

    def test_malformed_id(self, client):
        response = client.get("/api/artworks/user/not-an-id")

        assert response.status_code == 200
        assert response.json() == {"artworks": []}
