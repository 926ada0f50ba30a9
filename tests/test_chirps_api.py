"""Tests for /api/chirps."""

import uuid

import pytest

from conftest import bearer
from models.schemas.chirp import clean_body


@pytest.mark.parametrize(
    "body, expected",
    [
        ("I had something interesting for breakfast", "I had something interesting for breakfast"),
        ("I hear Mastodon is better than Chirpy. sharbert I need to migrate",
         "I hear Mastodon is better than Chirpy. **** I need to migrate"),
        ("I really need a kerfuffle to go to bed sooner, Fornax !",
         "I really need a **** to go to bed sooner, **** !"),
        ("Sharbert! stays because of the punctuation", "Sharbert! stays because of the punctuation"),
    ],
)
def test_clean_body(body, expected):
    assert clean_body(body) == expected


def _post(client, token, body):
    return client.post("/api/chirps", json={"body": body}, headers=bearer(token))


def test_create_chirp(client, make_user):
    user = make_user()
    response = _post(client, user["token"], "What a kerfuffle")
    assert response.status_code == 201
    data = response.get_json()
    assert data["body"] == "What a ****"
    assert data["user_id"] == user["id"]


def test_create_chirp_requires_token(client):
    response = client.post("/api/chirps", json={"body": "hello"})
    assert response.status_code == 401


def test_chirp_length_limit(client, make_user):
    token = make_user()["token"]
    assert _post(client, token, "x" * 140).status_code == 201

    response = _post(client, token, "x" * 141)
    assert response.status_code == 400
    assert response.get_json()["details"]["body"] == ["Chirp is too long"]


def test_list_chirps_sorting_and_filter(client, make_user):
    alice = make_user("alice@b.com", "password1")
    bob = make_user("bob@b.com", "password2")
    first = _post(client, alice["token"], "first").get_json()
    second = _post(client, bob["token"], "second").get_json()
    third = _post(client, alice["token"], "third").get_json()

    ascending = client.get("/api/chirps").get_json()
    assert [c["id"] for c in ascending] == [first["id"], second["id"], third["id"]]

    descending = client.get("/api/chirps?sort=desc").get_json()
    assert [c["id"] for c in descending] == [third["id"], second["id"], first["id"]]

    by_alice = client.get(f"/api/chirps?author_id={alice['id']}").get_json()
    assert [c["body"] for c in by_alice] == ["first", "third"]


def test_list_chirps_bad_params(client):
    assert client.get("/api/chirps?author_id=nope").status_code == 400
    assert client.get("/api/chirps?sort=sideways").status_code == 400


def test_get_chirp(client, make_user):
    user = make_user()
    chirp = _post(client, user["token"], "hello").get_json()

    response = client.get(f"/api/chirps/{chirp['id']}")
    assert response.status_code == 200
    assert response.get_json()["body"] == "hello"

    assert client.get(f"/api/chirps/{uuid.uuid4()}").status_code == 404
    assert client.get("/api/chirps/not-a-uuid").status_code == 400


def test_delete_chirp(client, make_user):
    owner = make_user("owner@b.com", "password1")
    other = make_user("other@b.com", "password2")
    chirp = _post(client, owner["token"], "mine").get_json()
    url = f"/api/chirps/{chirp['id']}"

    assert client.delete(url).status_code == 401

    forbidden = client.delete(url, headers=bearer(other["token"]))
    assert forbidden.status_code == 403
    assert forbidden.get_json()["error"] == "FORBIDDEN"

    assert client.delete(url, headers=bearer(owner["token"])).status_code == 204
    assert client.get(url).status_code == 404
    assert client.delete(url, headers=bearer(owner["token"])).status_code == 404
