import io

from sqlalchemy.exc import OperationalError

from halalgains.extensions import db
from halalgains.models import ClientProfile, CoachReview, Conversation
from halalgains.services import coaches as coach_service
from halalgains.services.coaches import (
    assign_coach_to_client, matches_filters, active_filter_count, rating_summary
)


def add_review(coach, client, rating):
    db.session.add(CoachReview(coach_id=coach.id, client_id=client.id, rating=rating))
    db.session.commit()


def test_rating_summary_rounds_average(make_coach, make_client):
    coach = make_coach()
    for rating in (5, 4, 4):
        add_review(coach, make_client(), rating)
    assert rating_summary(coach.id) == (4.3, 3)


def test_price_filter_lets_unpriced_coaches_through(make_coach):
    unpriced = make_coach(hourly_rate=None)
    pricey = make_coach(hourly_rate=800)
    filters = {"min_price": 0, "max_price": 500}
    assert matches_filters(unpriced, None, filters)
    assert not matches_filters(pricey, None, filters)


def test_availability_both_matches_single_modes(make_coach):
    both = make_coach(availability_type="both")
    online = make_coach(availability_type="online_only")

    assert matches_filters(both, None, {"availability_type": "in_person"})
    assert matches_filters(both, None, {"availability_type": "online_only"})
    assert matches_filters(both, None, {"availability_type": "both"})
    assert not matches_filters(online, None, {"availability_type": "both"})
    assert not matches_filters(online, None, {"availability_type": "in_person"})


def test_min_rating_excludes_unrated(make_coach):
    coach = make_coach()
    assert matches_filters(coach, None, {"min_rating": 0})
    assert not matches_filters(coach, None, {"min_rating": 4})
    assert matches_filters(coach, 4.5, {"min_rating": 4})


def test_active_filter_count():
    assert active_filter_count({"min_price": 0, "max_price": 500}) == 0
    assert active_filter_count({"search": "ali", "min_price": 0, "max_price": 500}) == 0
    assert active_filter_count({"max_price": 800}) == 0
    assert active_filter_count({"max_price": 300}) == 1
    assert active_filter_count({"search": "ali", "gender": "male", "min_price": 50, "max_price": 500,
                                "min_rating": 3}) == 3


def test_browse_coaches_search_and_filters(client, make_coach, make_client, auth_headers):
    ali = make_coach("Ali Hassan", bio="Boxing and Ramadan conditioning", location="Manchester",
                     gender="male", specialisations=["ramadan_fitness"], hourly_rate=40)
    make_coach("Sara Khan", bio="Strength", location="London", gender="female", hourly_rate=60)
    user = make_client()
    add_review(ali, user, 5)

    resp = client.get("/api/coaches?search=ramadan", headers=auth_headers(user))
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["count"] == 1
    assert body["coaches"][0]["full_name"] == "Ali Hassan"
    assert body["coaches"][0]["average_rating"] == 5.0
    assert body["active_filters"] == 0

    resp = client.get("/api/coaches?location=lond&gender=female", headers=auth_headers(user))
    assert [c["full_name"] for c in resp.get_json()["coaches"]] == ["Sara Khan"]

    resp = client.get("/api/coaches?specialisation=unknown", headers=auth_headers(user))
    assert resp.status_code == 400


def test_coach_detail_includes_reviews(client, make_coach, make_client, auth_headers):
    coach = make_coach("Ali Hassan")
    reviewer = make_client("Omar Farouk")
    add_review(coach, reviewer, 4)

    resp = client.get(f"/api/coaches/{coach.id}", headers=auth_headers(reviewer))
    body = resp.get_json()
    assert body["review_count"] == 1
    assert body["reviews"][0]["client_name"] == "Omar Farouk"

    assert client.get("/api/coaches/999", headers=auth_headers(reviewer)).status_code == 404


def test_review_once_per_client(client, make_coach, make_client, auth_headers):
    coach = make_coach()
    user = make_client()
    url = f"/api/coaches/{coach.id}/reviews"

    resp = client.post(url, json={"rating": 5, "review_text": "Great"}, headers=auth_headers(user))
    assert resp.status_code == 201
    resp = client.post(url, json={"rating": 3}, headers=auth_headers(user))
    assert resp.status_code == 409
    resp = client.post(url, json={"rating": 6}, headers=auth_headers(user))
    assert resp.status_code == 400


def test_assign_coach_to_client(make_coach, make_client):
    coach = make_coach()
    user = make_client()

    assert assign_coach_to_client(user.id, user.id) == {"success": False, "error": "Coach profile not found"}
    assert assign_coach_to_client(coach.user_id, 999) == {"success": False, "error": "Client profile not found"}

    result = assign_coach_to_client(coach.user_id, user.id)
    assert result == {"success": True, "coach_id": coach.id}
    assert ClientProfile.query.filter_by(user_id=user.id).one().coach_id == coach.id


def test_assign_endpoint_and_my_coach(client, make_coach, make_client, auth_headers):
    coach = make_coach("Ali Hassan")
    user = make_client()

    resp = client.get("/api/coaches/me/coach", headers=auth_headers(user))
    assert resp.get_json() == {"coach": None}

    resp = client.post("/api/coaches/assign", json={"client_user_id": user.id}, headers=auth_headers(user))
    assert resp.status_code == 403

    resp = client.post("/api/coaches/assign", json={"client_user_id": 999}, headers=auth_headers(coach))
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Client profile not found"

    resp = client.post("/api/coaches/assign", json={"client_user_id": user.id}, headers=auth_headers(coach))
    assert resp.get_json() == {"success": True, "coach_id": coach.id}

    resp = client.get("/api/coaches/me/coach", headers=auth_headers(user))
    assert resp.get_json()["coach"]["full_name"] == "Ali Hassan"


def test_coach_clients_merges_conversations_and_assignments(client, make_coach, make_client, auth_headers):
    coach = make_coach()
    assigned = make_client("Assigned", coach=coach)
    chatting = make_client("Chatting")
    db.session.add(Conversation(client_id=chatting.id, coach_id=coach.id))
    db.session.add(Conversation(client_id=assigned.id, coach_id=coach.id))
    db.session.commit()

    resp = client.get("/api/coaches/me/clients", headers=auth_headers(coach))
    clients = resp.get_json()["clients"]
    assert sorted(c["full_name"] for c in clients) == ["Assigned", "Chatting"]
    assert {c["full_name"]: c["assigned"] for c in clients} == {"Assigned": True, "Chatting": False}


def test_update_profile_and_upload_photo(client, make_coach, auth_headers):
    coach = make_coach()
    headers = auth_headers(coach)

    resp = client.put("/api/coaches/me", json={"bio": "Ten years coaching", "hourly_rate": 45}, headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()["coach"]["hourly_rate"] == 45

    resp = client.post(
        "/api/coaches/me/photos",
        data={"file": (io.BytesIO(b"fake image"), "me.png")},
        headers=headers,
        content_type="multipart/form-data",
    )
    assert resp.status_code == 201
    url = resp.get_json()["url"]
    assert url.startswith("/uploads/coach-photos/")
    assert resp.get_json()["profile_photos"] == [url]
    assert client.get(url).data == b"fake image"

    resp = client.post(
        "/api/coaches/me/photos",
        data={"file": (io.BytesIO(b"#!/bin/sh"), "run.sh")},
        headers=headers,
        content_type="multipart/form-data",
    )
    assert resp.status_code == 400


def test_unpriced_coach_passes_price_filter(make_coach):
    free = make_coach(hourly_rate=0)
    assert matches_filters(free, None, {"min_price": 50, "max_price": 100})
    assert not matches_filters(make_coach(hourly_rate=30), None, {"min_price": 50, "max_price": 100})


class _NoExistingReview:
    def filter_by(self, **kwargs):
        return self

    def first(self):
        return None


def test_concurrent_duplicate_review_is_conflict(monkeypatch, make_coach, make_client):
    coach = make_coach()
    user = make_client()
    add_review(coach, user, 5)

    # the existence check misses a review committed by another request
    monkeypatch.setattr(CoachReview, "query", _NoExistingReview())
    payload, status = coach_service.add_review(coach, user, 3)
    assert status == 409
    assert db.session.query(CoachReview).count() == 1


def test_database_errors_return_json(monkeypatch, client, make_client, auth_headers):
    user = make_client()

    def broken(filters):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(coach_service, "browse_coaches", broken)
    resp = client.get("/api/coaches", headers=auth_headers(user))
    assert resp.status_code == 500
    assert resp.get_json() == {"msg": "Internal server error"}
