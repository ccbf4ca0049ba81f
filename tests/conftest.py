import os
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["CHATBOT_REPLY_DELAY"] = "0"

from datetime import datetime, timedelta
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from neuralearn.core.auth import create_token, hash_password
from neuralearn.core.database import enable_sqlite_foreign_keys, get_db
from neuralearn.main import app
from neuralearn.models.orm import Base, Question, Quiz, Role, User

PASSWORD = "password123"

@pytest.fixture
def engine():
    eng = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool, future=True)
    enable_sqlite_foreign_keys(eng)
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()

@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)

@pytest.fixture
def db(session_factory):
    s = session_factory()
    yield s
    s.close()

@pytest.fixture
def client(session_factory):
    def override_get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()

@pytest.fixture
def users(db):
    rows = {
        "instructor": User(email="instructor@demo.com", name="Dr. Sarah Johnson", role=Role.INSTRUCTOR, password_hash=hash_password(PASSWORD)),
        "other_instructor": User(email="other@demo.com", name="Other Instructor", role=Role.INSTRUCTOR, password_hash=hash_password(PASSWORD)),
        "admin": User(email="admin@demo.com", name="Admin User", role=Role.ADMIN, password_hash=hash_password(PASSWORD)),
        "student": User(email="student@demo.com", name="John Doe", role=Role.STUDENT, password_hash=hash_password(PASSWORD)),
    }
    db.add_all(rows.values()); db.commit()
    return {k: {"id": u.id, "email": u.email, "name": u.name, "role": u.role.value} for k, u in rows.items()}

def bearer(user: dict) -> dict:
    return {"Authorization": f"Bearer {create_token(user['id'], user['role'], user['name'])}"}

@pytest.fixture
def headers(users):
    return {k: bearer(u) for k, u in users.items()}

@pytest.fixture
def make_quiz(db, users):
    base = datetime(2025, 1, 1)
    counter = {"n": 0}

    def _make(title="Stored Quiz", published=True, owner="instructor", n_questions=2, created_at=None):
        counter["n"] += 1
        quiz = Quiz(
            title=title, topic="Data Structures", instructor_id=users[owner]["id"], is_published=published,
            created_at=created_at or base + timedelta(minutes=counter["n"]),
            questions=[Question(question=f"Question {i}?", options=["A", "B"], correct_answer=0, topic="Arrays")
                       for i in range(n_questions)],
        )
        db.add(quiz); db.commit()
        return quiz.id
    return _make

def quiz_payload(**overrides) -> dict:
    payload = {
        "title": "Stacks and Queues",
        "topic": "Data Structures",
        "questions": [
            {"question": "Which structure is LIFO?", "options": ["Queue", "Stack"], "correctAnswer": 1, "topic": "Stack"},
            {"question": "Which structure is FIFO?", "options": ["Queue", "Stack", "Tree"], "correctAnswer": 0,
             "topic": "Queue", "explanation": "Queues serve in arrival order.", "difficulty": "EASY"},
        ],
    }
    payload.update(overrides)
    return payload
