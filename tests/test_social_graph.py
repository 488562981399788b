import pytest

from conftest import auth, counters
from models.Follow import Follow
from services import social_graph
from utils.errors import ConflictError, NotFoundError, ValidationFailedError
from utils.pagination import MAX_PAGE


def edge_count(db, actor_id, target_id):
    return db.query(Follow).filter(Follow.user_id == actor_id, Follow.following_id == target_id).count()


def test_follow_increments_both_counters(client, db, make_user):
    make_user("alice")
    make_user("bob")

    resp = client.post("/api/users/bob/follow", headers=auth("alice"))

    assert resp.status_code == 201
    assert resp.json() == {"message": "Successfully followed user"}
    assert counters(db, "alice") == (0, 1)
    assert counters(db, "bob") == (1, 0)
    assert edge_count(db, "alice", "bob") == 1


def test_follow_requires_authentication(client, make_user):
    make_user("bob")
    resp = client.post("/api/users/bob/follow")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized"}


def test_follow_self_is_rejected(client, db, make_user):
    make_user("alice")
    resp = client.post("/api/users/alice/follow", headers=auth("alice"))
    assert resp.status_code == 400
    assert resp.json()["error"] == "Cannot follow yourself"
    assert counters(db, "alice") == (0, 0)


def test_follow_self_fails_even_for_unknown_user(db):
    with pytest.raises(ValidationFailedError):
        social_graph.follow_user(db, "ghost", "ghost")


def test_follow_unknown_user_is_not_found(client, make_user):
    make_user("alice")
    resp = client.post("/api/users/nobody/follow", headers=auth("alice"))
    assert resp.status_code == 404
    assert resp.json() == {"error": "User not found"}


def test_follow_twice_is_conflict(client, db, make_user):
    make_user("alice")
    make_user("bob")
    client.post("/api/users/bob/follow", headers=auth("alice"))

    resp = client.post("/api/users/bob/follow", headers=auth("alice"))

    assert resp.status_code == 409
    assert resp.json()["error"] == "Already following this user"
    assert counters(db, "bob") == (1, 0)
    assert edge_count(db, "alice", "bob") == 1


def test_concurrent_duplicate_follow_hits_constraint_and_rolls_back(db, make_user, monkeypatch):
    make_user("alice")
    make_user("bob")
    social_graph.follow_user(db, "alice", "bob")

    # second request raced past the existence check
    monkeypatch.setattr(social_graph, "find_follow", lambda *args: None)
    with pytest.raises(ConflictError):
        social_graph.follow_user(db, "alice", "bob")

    assert edge_count(db, "alice", "bob") == 1
    assert counters(db, "alice") == (0, 1)
    assert counters(db, "bob") == (1, 0)


def test_unfollow_restores_counters(client, db, make_user):
    make_user("alice")
    make_user("bob")
    client.post("/api/users/bob/follow", headers=auth("alice"))

    resp = client.delete("/api/users/bob/follow", headers=auth("alice"))

    assert resp.status_code == 200
    assert resp.json() == {"message": "Successfully unfollowed user"}
    assert counters(db, "alice") == (0, 0)
    assert counters(db, "bob") == (0, 0)
    assert edge_count(db, "alice", "bob") == 0


def test_unfollow_without_edge_is_not_found(client, db, make_user):
    make_user("alice")
    make_user("bob")
    make_user("carol")
    client.post("/api/users/bob/follow", headers=auth("carol"))

    resp = client.delete("/api/users/bob/follow", headers=auth("alice"))

    assert resp.status_code == 404
    assert resp.json()["error"] == "Not following this user"
    assert counters(db, "alice") == (0, 0)
    assert counters(db, "bob") == (1, 0)


def test_unfollow_service_raises_not_found(db, make_user):
    make_user("alice")
    make_user("bob")
    with pytest.raises(NotFoundError):
        social_graph.unfollow_user(db, "alice", "bob")


def test_followers_pagination(client, make_user):
    make_user("target")
    for name in ("f1", "f2", "f3"):
        make_user(name)
        client.post("/api/users/target/follow", headers=auth(name))

    resp = client.get("/api/users/target/followers?page=2&limit=1", headers=auth("f1"))

    assert resp.status_code == 200
    body = resp.json()
    assert len(body["followers"]) == 1
    # newest relationship first: f3, f2, f1
    assert body["followers"][0]["id"] == "f2"
    assert body["pagination"] == {
        "page": 2,
        "limit": 1,
        "total": 3,
        "totalPages": 3,
        "hasNext": True,
        "hasPrev": True,
    }


def test_followers_rows_carry_summary_fields(client, make_user):
    make_user("target")
    make_user("fan", name="Fan", image="https://img.example.com/fan.png")
    client.post("/api/users/target/follow", headers=auth("fan"))

    body = client.get("/api/users/target/followers", headers=auth("fan")).json()

    row = body["followers"][0]
    assert row["name"] == "Fan"
    assert row["email"] == "fan@example.com"
    assert row["image"] == "https://img.example.com/fan.png"
    assert row["followingCount"] == 1
    assert "followedAt" in row
    assert body["pagination"]["page"] == 1
    assert body["pagination"]["limit"] == 20


def test_following_list_orders_newest_first(client, make_user):
    make_user("alice")
    for name in ("bob", "carol", "dave"):
        make_user(name)
        client.post(f"/api/users/{name}/follow", headers=auth("alice"))

    body = client.get("/api/users/alice/following", headers=auth("alice")).json()

    assert [row["id"] for row in body["following"]] == ["dave", "carol", "bob"]
    assert body["pagination"]["total"] == 3
    assert body["pagination"]["hasNext"] is False
    assert body["pagination"]["hasPrev"] is False


def test_relationship_list_for_unknown_user_is_not_found(client, make_user):
    make_user("alice")
    resp = client.get("/api/users/nobody/followers", headers=auth("alice"))
    assert resp.status_code == 404


@pytest.mark.parametrize("query", ["page=0", "limit=0", "limit=-5", "page=abc", "page=4611686018427387904"])
def test_relationship_list_rejects_bad_pagination(client, make_user, query):
    make_user("alice")
    resp = client.get(f"/api/users/alice/followers?{query}", headers=auth("alice"))
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_relationship_list_caps_limit_at_100(client, make_user):
    make_user("alice")
    body = client.get("/api/users/alice/following?limit=5000", headers=auth("alice")).json()
    assert body["pagination"]["limit"] == 100


def test_relationship_list_accepts_last_addressable_page(client, make_user):
    make_user("alice")
    resp = client.get(f"/api/users/alice/followers?page={MAX_PAGE}&limit=100", headers=auth("alice"))
    assert resp.status_code == 200
    assert resp.json()["followers"] == []
