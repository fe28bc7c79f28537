"""Tests for the bearer-token boundary."""

import os

import pytest
from bson import ObjectId
from jose import jwt

from app.auth.jwt import create_access_token, decode_access_token, token_subject


class TestTokens:
    def test_round_trip(self):
        user_id = str(ObjectId())

        payload = decode_access_token(create_access_token(user_id))

        assert payload["sub"] == user_id
        assert payload["exp"] > payload["iat"]

    def test_tampered_token(self):
        token = create_access_token("abc")

        with pytest.raises(ValueError):
            decode_access_token(token + "x")

    def test_wrong_secret(self, monkeypatch):
        token = create_access_token("abc")
        monkeypatch.setenv("JWT_SECRET", "another_secret")

        with pytest.raises(ValueError):
            decode_access_token(token)

    def test_legacy_id_claim(self):
        assert token_subject({"id": "legacy"}) == "legacy"
        assert token_subject({"sub": "new", "id": "legacy"}) == "new"
        assert token_subject({}) is None


class TestCurrentUser:
    def test_me(self, client, user, auth_headers):
        response = client.get("/api/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == user

    def test_missing_token(self, client):
        response = client.get("/api/me")

        assert response.status_code == 401
        assert response.json()["detail"] == "Missing access token"

    def test_invalid_token(self, client):
        response = client.get("/api/me", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid access token"

    def test_subject_not_an_object_id(self, client):
        token = create_access_token("not-an-object-id")

        response = client.get("/api/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid access token subject"

    def test_unknown_user(self, client):
        token = create_access_token(str(ObjectId()))

        response = client.get("/api/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["detail"] == "User not found"

    def test_legacy_token_accepted(self, client, user):
        secret = os.getenv("JWT_SECRET", "dev_secret_change_me")
        token = jwt.encode({"id": user["id"]}, secret, algorithm="HS256")

        response = client.get("/api/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
