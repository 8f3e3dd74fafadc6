from halalgains.extensions import db
from halalgains.models import User, FitnessAssessment, UserAllergy
from halalgains.services.accounts import lbs_to_kg, feet_to_cm, cm_to_feet


def signup_payload(**overrides):
    payload = {
        "email": "Amina@Example.com ",
        "password": "secret1",
        "full_name": " Amina Yusuf ",
        "age": 29,
        "gender": "female",
        "location": "Leeds",
        "fitness_goal": "lose_weight",
        "fitness_level": "healthy",
        "current_weight": 72,
        "target_weight": 65,
        "height": 165,
        "post_pregnancy": True,
        "fasting_habit": "mondays_thursdays",
        "dietary_restriction": "allergies",
        "allergies": ["Peanuts", "peanuts", "Shellfish"],
    }
    payload.update(overrides)
    return payload


def test_unit_conversions():
    assert lbs_to_kg(154) == 69.9
    assert feet_to_cm(5, 10) == 177.8
    assert cm_to_feet(177.8) == (5, 10)


def test_signup_creates_all_rows(client):
    resp = client.post("/api/auth/signup", json=signup_payload())
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["access_token"]
    assert body["profile"]["full_name"] == "Amina Yusuf"
    assert body["profile"]["post_pregnancy_recovery"] is True

    user = User.query.filter_by(email="amina@example.com").one()
    assert user.role == "client"
    assert user.islamic_lifestyle.fasting_habit == "mondays_thursdays"
    assert sorted(a.allergy_name for a in user.allergies) == ["Peanuts", "Shellfish"]
    assert user.fitness_assessment.height_cm == 165


def test_signup_imperial_units_are_converted(client):
    resp = client.post("/api/auth/signup", json=signup_payload(
        use_imperial=True, current_weight=154, target_weight=140,
        height=None, height_feet=5, height_inches=10,
    ))
    assert resp.status_code == 201

    assessment = FitnessAssessment.query.one()
    assert assessment.current_weight_kg == 69.9
    assert assessment.target_weight_kg == 63.5
    assert assessment.height_cm == 177.8


def test_signup_post_pregnancy_ignored_for_men(client):
    resp = client.post("/api/auth/signup", json=signup_payload(gender="male"))
    assert resp.status_code == 201
    assert resp.get_json()["profile"]["post_pregnancy_recovery"] is False
    assert FitnessAssessment.query.one().post_pregnancy is False


def test_signup_rejects_short_password_and_bad_age(client):
    resp = client.post("/api/auth/signup", json=signup_payload(password="12345", age=12))
    assert resp.status_code == 400
    errors = resp.get_json()["errors"]
    assert "password" in errors
    assert "age" in errors
    assert User.query.count() == 0


def test_signup_duplicate_email(client):
    assert client.post("/api/auth/signup", json=signup_payload()).status_code == 201
    resp = client.post("/api/auth/signup", json=signup_payload())
    assert resp.status_code == 409
    assert User.query.count() == 1
    assert UserAllergy.query.count() == 2


def test_login_and_me(client):
    client.post("/api/auth/signup", json=signup_payload())

    bad = client.post("/api/auth/login", json={"email": "amina@example.com", "password": "nope"})
    assert bad.status_code == 401

    resp = client.post("/api/auth/login", json={"email": "AMINA@example.com", "password": "secret1"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["user"]["role"] == "client"
    assert body["user"]["name"] == "Amina Yusuf"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    profile = me.get_json()["profile"]
    assert profile["islamic_lifestyle"]["dietary_restriction"] == "allergies"
    assert set(profile["allergies"]) == {"Peanuts", "Shellfish"}


def test_me_requires_token(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert "msg" in resp.get_json()


def test_create_coach_command(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["create-coach", "coach@example.com", "secret123", "Yusuf Ali"])
    assert "created" in result.output

    user = User.query.filter_by(email="coach@example.com").one()
    assert user.is_coach
    assert user.coach_profile.full_name == "Yusuf Ali"

    again = runner.invoke(args=["create-coach", "coach@example.com", "secret123", "Yusuf Ali"])
    assert "already exists" in again.output
    assert db.session.query(User).count() == 1
