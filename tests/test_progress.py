from datetime import date

import pytest

from halalgains.extensions import db
from halalgains.models import (
    WorkoutPlan, WorkoutWeek, WorkoutDay, WorkoutExercise, WorkoutDayCompletion, WorkoutWeekCompletion
)
from halalgains.services.progress import sunday_based_weekday, completion_percentage, today_workout


@pytest.fixture
def plan(make_coach, make_client):
    coach = make_coach()
    user = make_client("Omar Farouk", coach=coach)
    plan = WorkoutPlan(coach_id=coach.id, client_id=user.id, name="Strength Base")
    week = WorkoutWeek(week_number=1)
    plan.weeks.append(week)
    for day_of_week in (0, 2):
        day = WorkoutDay(day_of_week=day_of_week, workout_type="strength")
        for order, name in enumerate(("Squat", "Press", "Row")):
            day.exercises.append(WorkoutExercise(exercise_name=name, sets=3, reps=8, exercise_order=order))
        week.days.append(day)
    db.session.add(plan)
    db.session.commit()
    return plan


def test_sunday_based_weekday():
    assert sunday_based_weekday(date(2024, 3, 17)) == 0  # Sunday
    assert sunday_based_weekday(date(2024, 3, 18)) == 1
    assert sunday_based_weekday(date(2024, 3, 23)) == 6


def test_completion_percentage_without_data():
    assert completion_percentage(None, 3) == 0
    assert completion_percentage(WorkoutDayCompletion(), 0) == 0


def test_toggle_exercise_creates_then_flips(client, plan, auth_headers):
    user = plan.client
    exercise = plan.weeks[0].days[0].exercises[0]
    url = f"/api/workout-exercises/{exercise.id}/toggle"

    first = client.post(url, headers=auth_headers(user)).get_json()
    assert first["completed"] is True
    second = client.post(url, headers=auth_headers(user)).get_json()
    assert second["completed"] is False
    assert first["day_completion_id"] == second["day_completion_id"]
    assert WorkoutDayCompletion.query.count() == 1


def test_toggle_rejects_other_clients(client, plan, make_client, auth_headers):
    exercise = plan.weeks[0].days[0].exercises[0]
    stranger = make_client("Stranger")
    resp = client.post(f"/api/workout-exercises/{exercise.id}/toggle", headers=auth_headers(stranger))
    assert resp.status_code == 404


def test_progress_percentage(client, plan, auth_headers):
    user = plan.client
    day = plan.weeks[0].days[0]
    client.post(f"/api/workout-exercises/{day.exercises[0].id}/toggle", headers=auth_headers(user))
    client.post(f"/api/workout-exercises/{day.exercises[1].id}/toggle", headers=auth_headers(user))

    body = client.get(f"/api/progress/workout-plans/{plan.id}", headers=auth_headers(user)).get_json()
    days = body["weeks"][0]["days"]
    assert days[0]["completion_percentage"] == 67
    assert days[1]["completion_percentage"] == 0
    assert days[1]["completion"] is None


def test_log_day_replaces_entries_and_records_week(client, plan, auth_headers):
    user = plan.client
    first_day, second_day = plan.weeks[0].days
    squat = first_day.exercises[0]

    payload = {
        "notes": "Felt strong",
        "rating": 4,
        "exercises": [{"workout_exercise_id": squat.id, "completed": True, "actual_sets": 3, "weight_used_kg": 60}],
    }
    resp = client.post(f"/api/workout-days/{first_day.id}/log", json=payload, headers=auth_headers(user))
    assert resp.status_code == 201
    assert resp.get_json()["week_completed"] is False

    payload["exercises"][0]["weight_used_kg"] = 62.5
    resp = client.post(f"/api/workout-days/{first_day.id}/log", json=payload, headers=auth_headers(user))
    assert resp.status_code == 200
    entries = resp.get_json()["completion"]["exercise_completions"]
    assert len(entries) == 1
    assert entries[0]["weight_used_kg"] == 62.5

    resp = client.post(
        f"/api/workout-days/{second_day.id}/log", json={"rating": 5}, headers=auth_headers(user)
    )
    assert resp.get_json()["week_completed"] is True
    assert WorkoutWeekCompletion.query.count() == 1

    # logging again does not record the week twice
    client.post(f"/api/workout-days/{second_day.id}/log", json={"rating": 3}, headers=auth_headers(user))
    assert WorkoutWeekCompletion.query.count() == 1

    listing = client.get("/api/workout-plans", headers=auth_headers(user)).get_json()["workout_plans"][0]
    assert listing["completed_weeks"] == 1
    assert listing["total_weeks"] == 1


def test_log_rejects_foreign_exercise(client, plan, auth_headers):
    first_day, second_day = plan.weeks[0].days
    payload = {"exercises": [{"workout_exercise_id": second_day.exercises[0].id, "completed": True}]}
    resp = client.post(f"/api/workout-days/{first_day.id}/log", json=payload, headers=auth_headers(plan.client))
    assert resp.status_code == 400


def test_log_rejects_repeated_exercise(client, plan, auth_headers):
    day = plan.weeks[0].days[0]
    squat = day.exercises[0].id
    payload = {"exercises": [
        {"workout_exercise_id": squat, "completed": True},
        {"workout_exercise_id": squat, "completed": False},
    ]}
    resp = client.post(f"/api/workout-days/{day.id}/log", json=payload, headers=auth_headers(plan.client))
    assert resp.status_code == 400
    assert WorkoutDayCompletion.query.count() == 0


def test_today_workout_uses_first_week(plan):
    sunday = date(2024, 3, 17)
    payload = today_workout(plan.client, today=sunday)
    assert payload["client_name"] == "Omar Farouk"
    assert payload["week"]["week_number"] == 1
    assert payload["today"]["day_of_week"] == 0
    assert [e["exercise_name"] for e in payload["today"]["exercises"]] == ["Squat", "Press", "Row"]

    monday = date(2024, 3, 18)
    assert today_workout(plan.client, today=monday)["today"] is None


def test_dashboard_without_plan(client, make_client, auth_headers):
    user = make_client("New Client")
    body = client.get("/api/dashboard", headers=auth_headers(user)).get_json()
    assert body["workout_plan"] is None
    assert body["today"] is None
