import pytest

from halalgains.extensions import db
from halalgains.models import WorkoutPlan, WorkoutWeek, WorkoutDay, WorkoutExercise


@pytest.fixture
def coach_and_client(make_coach, make_client):
    coach = make_coach("Ali Hassan")
    return coach, make_client("Omar Farouk", coach=coach)


def create_plan(client, coach, auth_headers, **fields):
    payload = {"name": "Ramadan Shred", "duration": "4 weeks", "goal": "weight_loss"}
    payload.update(fields)
    return client.post("/api/workout-plans", json=payload, headers=auth_headers(coach))


def test_coach_creates_plan_tree(client, coach_and_client, auth_headers):
    coach, user = coach_and_client
    headers = auth_headers(coach)
    plan = create_plan(client, coach, auth_headers, client_id=user.id).get_json()["workout_plan"]

    week1 = client.post(f"/api/workout-plans/{plan['id']}/weeks", json={}, headers=headers).get_json()["week"]
    week2 = client.post(f"/api/workout-plans/{plan['id']}/weeks", json={}, headers=headers).get_json()["week"]
    assert (week1["week_number"], week2["week_number"]) == (1, 2)

    dup = client.post(f"/api/workout-plans/{plan['id']}/weeks", json={"week_number": 2}, headers=headers)
    assert dup.status_code == 409

    day = client.post(
        f"/api/workout-weeks/{week1['id']}/days",
        json={"day_of_week": 1, "workout_type": "boxing", "prayer_time_notes": "After Asr"},
        headers=headers,
    ).get_json()["day"]
    assert day["day_name"] == "Monday"

    clash = client.post(f"/api/workout-weeks/{week1['id']}/days", json={"day_of_week": 1}, headers=headers)
    assert clash.status_code == 409
    bad = client.post(f"/api/workout-weeks/{week1['id']}/days", json={"day_of_week": 7}, headers=headers)
    assert bad.status_code == 400

    orders = []
    for name in ("Jab drills", "Skipping", "Plank"):
        resp = client.post(
            f"/api/workout-days/{day['id']}/exercises", json={"exercise_name": name, "sets": 3}, headers=headers
        )
        orders.append(resp.get_json()["exercise"]["exercise_order"])
    assert orders == [0, 1, 2]

    tree = client.get(f"/api/workout-plans/{plan['id']}", headers=auth_headers(user)).get_json()
    assert [w["week_number"] for w in tree["weeks"]] == [1, 2]
    assert [e["exercise_name"] for e in tree["weeks"][0]["days"][0]["exercises"]] == [
        "Jab drills", "Skipping", "Plank",
    ]
    assert tree["client_name"] == "Omar Farouk"
    assert tree["coach"]["full_name"] == "Ali Hassan"


def test_plan_client_must_belong_to_coach(client, coach_and_client, make_client, auth_headers):
    coach, _ = coach_and_client
    stranger = make_client("Stranger")
    resp = create_plan(client, coach, auth_headers, client_id=stranger.id)
    assert resp.status_code == 400


def test_listing_for_coach_and_client(client, coach_and_client, make_coach, auth_headers):
    coach, user = coach_and_client
    create_plan(client, coach, auth_headers, name="Older", client_id=user.id)
    create_plan(client, coach, auth_headers, name="Newer", client_id=user.id)
    create_plan(client, coach, auth_headers, name="Template")
    other = make_coach("Other Coach")
    create_plan(client, other, auth_headers, name="Not mine")

    coach_plans = client.get("/api/workout-plans", headers=auth_headers(coach)).get_json()["workout_plans"]
    assert [p["name"] for p in coach_plans] == ["Template", "Newer", "Older"]

    client_plans = client.get("/api/workout-plans", headers=auth_headers(user)).get_json()["workout_plans"]
    assert [p["name"] for p in client_plans] == ["Newer", "Older"]
    assert client_plans[0]["total_weeks"] == 0
    assert client_plans[0]["completed_weeks"] == 0


def test_only_owner_edits(client, coach_and_client, make_coach, auth_headers):
    coach, user = coach_and_client
    plan_id = create_plan(client, coach, auth_headers).get_json()["workout_plan"]["id"]
    other = make_coach("Other Coach")

    assert client.put(f"/api/workout-plans/{plan_id}", json={"name": "x"}, headers=auth_headers(other)).status_code == 403
    assert client.get(f"/api/workout-plans/{plan_id}", headers=auth_headers(user)).status_code == 403

    resp = client.put(
        f"/api/workout-plans/{plan_id}", json={"difficulty": "advanced"}, headers=auth_headers(coach)
    )
    assert resp.status_code == 200
    assert resp.get_json()["workout_plan"]["difficulty"] == "advanced"
    assert resp.get_json()["workout_plan"]["name"] == "Ramadan Shred"


def test_delete_cascades(client, coach_and_client, auth_headers):
    coach, _ = coach_and_client
    headers = auth_headers(coach)
    plan_id = create_plan(client, coach, auth_headers).get_json()["workout_plan"]["id"]
    week_id = client.post(f"/api/workout-plans/{plan_id}/weeks", json={}, headers=headers).get_json()["week"]["id"]
    day_id = client.post(
        f"/api/workout-weeks/{week_id}/days", json={"day_of_week": 0}, headers=headers
    ).get_json()["day"]["id"]
    client.post(f"/api/workout-days/{day_id}/exercises", json={"exercise_name": "Squat"}, headers=headers)

    assert client.delete(f"/api/workout-plans/{plan_id}", headers=headers).status_code == 200
    assert db.session.query(WorkoutPlan).count() == 0
    assert db.session.query(WorkoutWeek).count() == 0
    assert db.session.query(WorkoutDay).count() == 0
    assert db.session.query(WorkoutExercise).count() == 0
