from sqlalchemy import func, select
from neuralearn.models.orm import Attempt, Question, Quiz
from conftest import quiz_payload

def test_list_requires_authentication(client):
    r = client.get("/api/quiz")
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized"}

def test_invalid_token_is_rejected(client):
    r = client.get("/api/quiz", headers={"Authorization": "Bearer not-a-token"})
    assert r.status_code == 401

def test_list_returns_published_newest_first(client, headers, make_quiz):
    older = make_quiz("Older Quiz")
    make_quiz("Draft Quiz", published=False)
    newer = make_quiz("Newer Quiz", n_questions=3)
    r = client.get("/api/quiz", headers=headers["student"])
    assert r.status_code == 200
    body = r.json()
    assert [q["id"] for q in body] == [newer, older]
    first = body[0]
    assert first["isPublished"] is True
    assert first["instructor"] == {"id": first["instructorId"], "name": "Dr. Sarah Johnson"}
    assert first["_count"] == {"questions": 3, "attempts": 0}

def test_fetch_one_includes_questions_instructor_and_attempts(client, db, users, headers, make_quiz):
    quiz_id = make_quiz(published=False)
    db.add(Attempt(user_id=users["student"]["id"], quiz_id=quiz_id, score=1, total_questions=2)); db.commit()
    r = client.get(f"/api/quiz?id={quiz_id}", headers=headers["student"])
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == quiz_id
    assert len(body["questions"]) == 2
    assert body["questions"][0]["correctAnswer"] == 0
    assert body["instructor"]["email"] == "instructor@demo.com"
    assert body["_count"] == {"attempts": 1}

def test_fetch_missing_quiz_is_404(client, headers):
    r = client.get("/api/quiz?id=nope", headers=headers["student"])
    assert r.status_code == 404
    assert r.json()["error"] == "Quiz not found"

def test_create_applies_defaults(client, users, headers):
    r = client.post("/api/quiz", json=quiz_payload(), headers=headers["instructor"])
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "Quiz created successfully"
    quiz = body["quiz"]
    assert quiz["difficulty"] == "MEDIUM"
    assert quiz["duration"] == 30
    assert quiz["description"] is None
    assert quiz["isPublished"] is False
    assert quiz["instructorId"] == users["instructor"]["id"]
    assert len(quiz["questions"]) == 2
    first, second = sorted(quiz["questions"], key=lambda q: q["correctAnswer"], reverse=True)
    assert first["difficulty"] == "MEDIUM" and first["explanation"] is None
    assert second["difficulty"] == "EASY" and second["explanation"] == "Queues serve in arrival order."

def test_create_keeps_given_settings(client, headers):
    r = client.post("/api/quiz", json=quiz_payload(difficulty="HARD", duration=45, description="Timed"),
                    headers=headers["admin"])
    assert r.status_code == 201
    quiz = r.json()["quiz"]
    assert (quiz["difficulty"], quiz["duration"], quiz["description"]) == ("HARD", 45, "Timed")

def test_create_rejects_out_of_range_answer(client, db, headers):
    payload = {"title": "Go", "topic": "DS",
               "questions": [{"question": "Q1", "options": ["A", "B"], "correctAnswer": 2, "topic": "DS"}]}
    r = client.post("/api/quiz", json=payload, headers=headers["instructor"])
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid input data"
    # "Go" trips the title rule first
    assert r.json()["details"] == "Title must be at least 3 characters"

    payload["title"] = "Going further"
    payload["questions"][0]["question"] = "Question one"
    r = client.post("/api/quiz", json=payload, headers=headers["instructor"])
    assert r.status_code == 400
    assert "Question 1" in r.json()["details"]
    assert db.scalar(select(func.count(Quiz.id))) == 0

def test_create_with_huge_numbers_is_400(client, db, headers):
    r = client.post("/api/quiz", json=quiz_payload(questions=[{"question": "What is O(1)?", "options": ["A", "B"],
                                                               "correctAnswer": 10**400, "topic": "DS"}]),
                    headers=headers["instructor"])
    assert r.status_code == 400
    assert r.json()["details"] == "Question 1: Invalid correct answer index"
    r = client.post("/api/quiz", json=quiz_payload(duration=10**400), headers=headers["instructor"])
    assert r.status_code == 400
    assert r.json()["details"] == "Duration must be a positive number of minutes"
    assert db.scalar(select(func.count(Quiz.id))) == 0

def test_create_without_questions_persists_nothing(client, db, headers):
    for payload in (quiz_payload(questions=[]), {"title": "Trees", "topic": "DS"}):
        r = client.post("/api/quiz", json=payload, headers=headers["instructor"])
        assert r.status_code == 400
        assert r.json()["details"] == "Quiz must have at least one question"
    assert db.scalar(select(func.count(Quiz.id))) == 0
    assert db.scalar(select(func.count(Question.id))) == 0

def test_create_requires_staff_role(client, headers):
    r = client.post("/api/quiz", json=quiz_payload(), headers=headers["student"])
    assert r.status_code == 403
    assert r.json()["error"] == "Unauthorized. Only instructors can create quizzes."
    assert client.post("/api/quiz", json=quiz_payload()).status_code == 403

def test_create_with_malformed_json_is_400(client, headers):
    r = client.post("/api/quiz", content=b"{not json", headers={**headers["instructor"], "Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid input data"

def test_delete_by_owner_removes_quiz_and_questions(client, db, users, headers, make_quiz):
    quiz_id = make_quiz()
    db.add(Attempt(user_id=users["student"]["id"], quiz_id=quiz_id)); db.commit()
    r = client.delete(f"/api/quiz?id={quiz_id}", headers=headers["instructor"])
    assert r.status_code == 200
    assert r.json() == {"message": "Quiz deleted successfully"}
    db.expire_all()
    assert db.get(Quiz, quiz_id) is None
    assert db.scalar(select(func.count(Question.id))) == 0
    assert db.scalar(select(func.count(Attempt.id))) == 0

def test_delete_by_non_owner_is_forbidden(client, db, headers, make_quiz):
    quiz_id = make_quiz()
    r = client.delete(f"/api/quiz?id={quiz_id}", headers=headers["other_instructor"])
    assert r.status_code == 403
    db.expire_all()
    assert db.get(Quiz, quiz_id) is not None
    assert db.scalar(select(func.count(Question.id))) == 2

def test_admin_can_delete_any_quiz(client, headers, make_quiz):
    quiz_id = make_quiz()
    assert client.delete(f"/api/quiz?id={quiz_id}", headers=headers["admin"]).status_code == 200

def test_delete_missing_quiz_is_404(client, headers):
    assert client.delete("/api/quiz?id=missing", headers=headers["instructor"]).status_code == 404

def test_delete_requires_id(client, headers):
    r = client.delete("/api/quiz", headers=headers["instructor"])
    assert r.status_code == 400
    assert r.json()["error"] == "Quiz ID required"

def test_delete_requires_staff_role(client, headers, make_quiz):
    quiz_id = make_quiz()
    assert client.delete(f"/api/quiz?id={quiz_id}", headers=headers["student"]).status_code == 403
    assert client.delete(f"/api/quiz?id={quiz_id}").status_code == 403
