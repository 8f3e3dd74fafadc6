import pytest

from halalgains import create_app
from halalgains.extensions import db
from halalgains.models import User, ClientProfile, CoachProfile
from halalgains.services.accounts import create_coach, issue_token


@pytest.fixture
def app(tmp_path):
    app = create_app("testing", overrides={"UPLOAD_FOLDER": str(tmp_path / "uploads")})
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_coach(app):
    counter = {"n": 0}

    def _make(full_name="Coach Test", **fields):
        counter["n"] += 1
        profile = create_coach(f"coach{counter['n']}@example.com", "secret123", full_name)
        for key, value in fields.items():
            setattr(profile, key, value)
        db.session.commit()
        return profile

    return _make


@pytest.fixture
def make_client(app):
    counter = {"n": 0}

    def _make(full_name="Client Test", coach=None, **fields):
        counter["n"] += 1
        user = User(email=f"client{counter['n']}@example.com", role="client")
        user.set_password("secret123")
        db.session.add(user)
        db.session.flush()
        profile = ClientProfile(
            user_id=user.id,
            full_name=full_name,
            gender=fields.pop("gender", "male"),
            coach_id=coach.id if coach else None,
            **fields,
        )
        db.session.add(profile)
        db.session.commit()
        return user

    return _make


@pytest.fixture
def auth_headers(app):
    def _headers(user):
        if isinstance(user, CoachProfile):
            user = user.user
        return {"Authorization": f"Bearer {issue_token(user)}"}

    return _headers
