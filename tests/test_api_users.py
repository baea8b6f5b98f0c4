# =============================================================================
# tests/test_api_users.py - Profile and Follow Endpoint Tests
# =============================================================================

from uuid import uuid4

from tests.fakes import bearer


class TestFollowEndpoints:
    """Tests for POST /api/users/{id}/follow and the follower lists."""

    def test_follow_and_lists(self, client, alex, bob):
        response = client.post(f"/api/users/{bob.user.id}/follow", headers=bearer(alex.token))

        assert response.status_code == 200
        assert response.json() == {"following": True}

        following = client.get("/api/users/following", headers=bearer(alex.token)).json()
        followers = client.get("/api/users/followers", headers=bearer(bob.token)).json()

        assert [u["username"] for u in following["following"]] == ["bob"]
        assert [u["username"] for u in followers["followers"]] == ["alex"]
        assert set(followers["followers"][0]) == {"id", "username", "email", "avatar_url", "bio"}

    def test_unfollow(self, client, alex, bob):
        client.post(f"/api/users/{bob.user.id}/follow", headers=bearer(alex.token))

        response = client.post(f"/api/users/{bob.user.id}/follow", headers=bearer(alex.token))

        assert response.json() == {"following": False}
        assert client.get("/api/users/followers", headers=bearer(bob.token)).json() == {"followers": []}

    def test_self_follow(self, client, alex):
        response = client.post(f"/api/users/{alex.user.id}/follow", headers=bearer(alex.token))

        assert response.status_code == 400
        assert response.json()["message"] == "You cannot follow yourself"

    def test_invalid_id(self, client, alex):
        response = client.post("/api/users/not-an-id/follow", headers=bearer(alex.token))

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid user ID"

    def test_unknown_user(self, client, alex):
        response = client.post(f"/api/users/{uuid4()}/follow", headers=bearer(alex.token))

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    def test_requires_auth(self, client, bob):
        response = client.post(f"/api/users/{bob.user.id}/follow")

        assert response.status_code == 401

    def test_lists_require_auth(self, client):
        assert client.get("/api/users/followers").status_code == 401
        assert client.get("/api/users/following").status_code == 401


class TestProfileEndpoints:
    """Tests for GET /api/users/profile/{username} and PUT /api/users/profile."""

    def test_public_profile(self, client, alex):
        response = client.get("/api/users/profile/alex")

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["username"] == "alex"
        assert user["isFollowing"] is False
        assert user["artworkCount"] == 0
        assert user["createdAt"]

    def test_profile_is_following(self, client, alex, bob):
        client.post(f"/api/users/{alex.user.id}/follow", headers=bearer(bob.token))

        user = client.get("/api/users/profile/alex", headers=bearer(bob.token)).json()["user"]

        assert user["isFollowing"] is True
        assert user["followersCount"] == 1

    def test_unknown_profile(self, client):
        response = client.get("/api/users/profile/ghost")

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    def test_update_profile(self, client, alex):
        response = client.put(
            "/api/users/profile",
            headers=bearer(alex.token),
            json={"bio": "Painter", "avatar_url": "https://img/me.png"},
        )

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["bio"] == "Painter"
        assert user["avatar_url"] == "https://img/me.png"
        assert "totalLikes" in user

    def test_update_username_taken(self, client, alex, bob):
        response = client.put(
            "/api/users/profile",
            headers=bearer(alex.token),
            json={"username": "bob"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Username already taken"

    def test_update_requires_auth(self, client):
        response = client.put("/api/users/profile", json={"bio": "x"})

        assert response.status_code == 401
