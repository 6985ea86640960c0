from app.modules.friends.service import FriendProfileService, get_active_user_ids
from tests.conftest import FakeSupabase

PROFILE_DATA = {
    "profile": {"username": "marco"},
    "stats": {"total_rated": 12, "total_wishlist": 3, "avg_rating": "4.25", "top_cuisine": "Thai"},
}


def test_get_profile_from_cache(client, fake_db):
    fake_db.rpcs["get_cached_friend_profile"] = {"profile": {"username": "marco"}}

    r = client.get("/api/v1/friends/profiles/friend-9")

    assert r.status_code == 200
    body = r.json()
    assert body["cache_status"] == "hit"
    assert body["profile"] == {"profile": {"username": "marco"}}
    assert body["load_time_ms"] >= 0
    assert fake_db.rpc_calls == [
        ("get_cached_friend_profile", {"target_user_id": "friend-9", "requesting_user_id": "user-1"})
    ]


def test_get_profile_force_rebuild(client, fake_db):
    fake_db.rpcs["build_friend_profile_cache"] = PROFILE_DATA

    r = client.get("/api/v1/friends/profiles/friend-9", params={"force_rebuild": True})

    assert r.status_code == 200
    assert r.json()["cache_status"] == "rebuilt"
    assert fake_db.rpc_calls == [("build_friend_profile_cache", {"target_user_id": "friend-9"})]


def test_get_profile_me_resolves_to_caller(client, fake_db):
    fake_db.rpcs["get_cached_friend_profile"] = {}

    client.get("/api/v1/friends/profiles/me")

    assert fake_db.rpc_calls[0][1]["target_user_id"] == "user-1"


def test_get_profile_rpc_failure(client, fake_db):
    fake_db.rpcs["get_cached_friend_profile"] = Exception("timeout")

    r = client.get("/api/v1/friends/profiles/friend-9")

    assert r.status_code == 500
    assert r.json()["detail"] == "Failed to fetch profile"


def test_profile_stats_hit(client, fake_db):
    fake_db.tables["friend_profile_cache"] = [{"user_id": "friend-9", "profile_data": PROFILE_DATA}]

    r = client.get("/api/v1/friends/profiles/friend-9/stats")

    assert r.status_code == 200
    assert r.json() == {
        "stats": {
            "ratedCount": 12,
            "wishlistCount": 3,
            "averageRating": 4.25,
            "topCuisine": "Thai",
            "username": "marco",
        },
        "cache_status": "hit",
    }
    assert fake_db.rpc_calls == []


def test_profile_stats_builds_missing_cache(client, fake_db):
    fake_db.rpcs["build_friend_profile_cache"] = {"stats": {"avg_rating": "not-a-number"}}

    r = client.get("/api/v1/friends/profiles/friend-9/stats")

    assert r.status_code == 200
    body = r.json()
    assert body["cache_status"] == "built"
    assert body["stats"] == {
        "ratedCount": 0,
        "wishlistCount": 0,
        "averageRating": 0,
        "topCuisine": "",
        "username": "Unknown User",
    }


def test_build_cache_route(client, fake_db):
    fake_db.rpcs["build_friend_profile_cache"] = PROFILE_DATA

    r = client.post("/api/v1/friends/profiles/friend-9/cache")

    assert r.status_code == 200
    assert r.json()["message"] == "Profile cache built successfully"
    assert r.json()["profile"] == PROFILE_DATA


def test_warm_profiles_route_runs_in_background(client, fake_db):
    fake_db.tables["restaurants"] = [{"user_id": "u1"}]
    fake_db.rpcs["build_friend_profile_cache"] = {}

    r = client.post("/api/v1/friends/profiles/warm")

    assert r.status_code == 202
    assert r.json() == {"success": True, "message": "Cache warming started in background"}
    # TestClient runs background tasks before returning
    assert ("build_friend_profile_cache", {"target_user_id": "u1"}) in fake_db.rpc_calls


def test_active_users_union_keeps_first_seen_order():
    db = FakeSupabase(tables={
        "restaurants": [{"user_id": "u2"}, {"user_id": "u1"}, {"user_id": "u2"}],
        "friends": [{"user1_id": "u1", "user2_id": "u3"}],
    })

    assert get_active_user_ids(db) == ["u2", "u1", "u3"]


def test_warm_all_caches_batches_and_survives_failures():
    users = [{"user_id": f"u{i}"} for i in range(23)]
    db = FakeSupabase(tables={"restaurants": users, "friends": []})

    def build(params):
        if params["target_user_id"] == "u5":
            raise Exception("deadlock")
        return {}

    db.rpcs["build_friend_profile_cache"] = build
    pauses = []

    warmed = FriendProfileService(db).warm_all_caches(sleep=pauses.append)

    assert warmed == 22
    assert len(db.rpc_calls) == 23
    # three batches of ten -> two pauses
    assert pauses == [0.1, 0.1]
