"""Account updates, channel profiles and subscriptions over HTTP."""

from __future__ import annotations

from tests.helpers.api_client import API, cookie_header, register_and_login


def test_update_me(client):
    me = register_and_login(client, "editor")

    resp = client.patch(
        f"{API}/users/me",
        json={"full_name": "Ed Itor", "avatar_url": "https://media.example.com/a/1.png"},
        headers=cookie_header(access_token=me["access"]),
    )

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["full_name"] == "Ed Itor"
    assert data["avatar_url"] == "https://media.example.com/a/1.png"


def test_update_me_email_conflict(client):
    register_and_login(client, "first")
    second = register_and_login(client, "second")

    resp = client.patch(
        f"{API}/users/me",
        json={"email": "first@example.com"},
        headers=cookie_header(access_token=second["access"]),
    )

    assert resp.status_code == 409


def test_subscribe_toggle_and_channel_profile(client):
    fan = register_and_login(client, "fan")
    star = register_and_login(client, "star")
    auth = cookie_header(access_token=fan["access"])

    on = client.post(f"{API}/subscriptions/{star['id']}", headers=auth)
    assert on.status_code == 200
    assert on.get_json()["data"] == {"channel_id": star["id"], "subscribed": True}

    profile = client.get(f"{API}/users/c/star", headers=auth).get_json()["data"]
    assert profile["subscribers_count"] == 1
    assert profile["is_subscribed"] is True

    anonymous = client.get(f"{API}/users/c/star").get_json()["data"]
    assert anonymous["is_subscribed"] is False

    subscribers = client.get(f"{API}/subscriptions/{star['id']}/subscribers").get_json()
    assert subscribers["meta"]["total"] == 1
    assert subscribers["data"][0]["user"]["username"] == "fan"

    mine = client.get(f"{API}/subscriptions/me", headers=auth).get_json()
    assert [s["user"]["username"] for s in mine["data"]] == ["star"]

    off = client.post(f"{API}/subscriptions/{star['id']}", headers=auth)
    assert off.get_json()["data"]["subscribed"] is False


def test_cannot_subscribe_to_self(client):
    me = register_and_login(client, "narcissus")

    resp = client.post(
        f"{API}/subscriptions/{me['id']}", headers=cookie_header(access_token=me["access"])
    )

    assert resp.status_code == 400


def test_unknown_channel(client):
    assert client.get(f"{API}/users/c/ghost").status_code == 404
    assert client.get(f"{API}/subscriptions/424242/subscribers").status_code == 404


def test_health(client):
    resp = client.get(f"{API}/health")

    assert resp.status_code == 200
    assert resp.get_json()["db"] == "ok"
