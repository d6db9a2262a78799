"""Shared fixtures for Whirkplace tests."""

import os
from datetime import date, datetime

from cryptography.fernet import Fernet

# Environment must be in place before the package is imported
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["FERNET_SECRET"] = Fernet.generate_key().decode()
os.environ["CHECKIN_TIMEZONE"] = "America/Chicago"
os.environ["CHECKIN_LOOKBACK_WEEKS"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ.pop("FIREBASE_ADMIN_JSON", None)

import pytest
from fastapi.testclient import TestClient

from whirkplace.models import Checkin, Question, ReviewStatus, User, UserRole
from whirkplace.models.database import Base, SessionLocal, engine
from whirkplace.utils.jwt_utils import create_access_token
from whirkplace.utils.week_utils import canonical_week_of, due_date, review_due_date


# Wednesday; its reporting week closes on Friday Oct 24 2025
TODAY = date(2025, 10, 22)
NOW = datetime(2025, 10, 22, 15, 0)


@pytest.fixture
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    from whirkplace.main import app

    return TestClient(app)


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role=UserRole.member, manager=None, name=None, created_at=datetime(2025, 1, 1), **kwargs):
        counter["n"] += 1
        user = User(
            name=name or f"user{counter['n']}",
            email=f"user{counter['n']}@example.com",
            role=role,
            manager_id=manager.id if manager else None,
            created_at=created_at,
            **kwargs,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def manager(make_user):
    return make_user(role=UserRole.manager, name="Mona Manager")


@pytest.fixture
def member(make_user, manager):
    return make_user(manager=manager, name="Mel Member")


@pytest.fixture
def questions(db, manager):
    items = [
        Question(text="What went well this week?", order=1, created_by=manager.id),
        Question(text="What got in your way?", order=2, created_by=manager.id),
    ]
    db.add_all(items)
    db.commit()
    for q in items:
        db.refresh(q)
    return items


@pytest.fixture
def answers(questions):
    return {str(q.id): f"Answer to {q.text}" for q in questions}


@pytest.fixture
def make_checkin(db):
    def _make(user, week_of=TODAY, **kwargs):
        friday = canonical_week_of(week_of)
        values = dict(
            user_id=user.id,
            week_of=friday,
            overall_mood=4,
            responses={"1": "Shipped the release"},
            question_snapshots={"1": "What went well this week?"},
            due_date=due_date(friday),
            review_due_date=review_due_date(friday),
            submitted_at=NOW,
            submitted_on_time=True,
            review_status=ReviewStatus.PENDING,
            response_comments={},
            response_flags={},
        )
        values.update(kwargs)
        checkin = Checkin(**values)
        db.add(checkin)
        db.commit()
        db.refresh(checkin)
        return checkin

    return _make


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}
