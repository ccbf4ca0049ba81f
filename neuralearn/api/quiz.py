import logging
from datetime import datetime
from typing import Any, List, Optional
from fastapi import APIRouter, Body, Depends, Query
from pydantic import Field
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from neuralearn.api.common import CamelModel
from neuralearn.core.auth import TokenData, get_current_user, require_roles
from neuralearn.core.database import get_db
from neuralearn.core.errors import APIError
from neuralearn.models.orm import Attempt, Difficulty, Question, Quiz, Role
from neuralearn.services.validation import QuizValidationError, validate_quiz_data

logger = logging.getLogger(__name__)
router = APIRouter()

STAFF = (Role.INSTRUCTOR.value, Role.ADMIN.value)
DEFAULT_DURATION = 30

class InstructorSummary(CamelModel):
    id: str; name: str

class InstructorDetail(InstructorSummary):
    email: str

class QuestionOut(CamelModel):
    id: str
    question: str
    options: List[Any]
    correct_answer: int
    explanation: Optional[str] = None
    topic: str
    difficulty: Difficulty
    quiz_id: str

class QuizOut(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    topic: str
    difficulty: Difficulty
    duration: int
    is_published: bool
    instructor_id: str
    created_at: datetime
    updated_at: datetime

class ListCounts(CamelModel):
    questions: int; attempts: int

class AttemptCount(CamelModel):
    attempts: int

class QuizSummary(QuizOut):
    instructor: InstructorSummary
    counts: ListCounts = Field(alias="_count")

class QuizDetail(QuizOut):
    questions: List[QuestionOut]
    instructor: InstructorDetail
    counts: AttemptCount = Field(alias="_count")

class QuizWithQuestions(QuizOut):
    questions: List[QuestionOut]

def _fields(quiz: Quiz) -> dict:
    return QuizOut.model_validate(quiz).model_dump()

def _server_error(db: Session, action: str) -> APIError:
    db.rollback()
    logger.exception(f"Error {action}")
    return APIError(500, "Internal server error")

def list_published(db: Session) -> List[QuizSummary]:
    n_questions = select(func.count(Question.id)).where(Question.quiz_id == Quiz.id).correlate(Quiz).scalar_subquery()
    n_attempts = select(func.count(Attempt.id)).where(Attempt.quiz_id == Quiz.id).correlate(Quiz).scalar_subquery()
    stmt = (select(Quiz, n_questions, n_attempts)
            .options(selectinload(Quiz.instructor))
            .where(Quiz.is_published.is_(True))
            .order_by(Quiz.created_at.desc()))
    rows = db.execute(stmt).all()
    return [QuizSummary(**_fields(q), instructor=InstructorSummary.model_validate(q.instructor),
                        counts=ListCounts(questions=nq, attempts=na)) for q, nq, na in rows]

def fetch_one(db: Session, quiz_id: str) -> Optional[QuizDetail]:
    quiz = db.scalar(select(Quiz).options(selectinload(Quiz.questions), selectinload(Quiz.instructor)).where(Quiz.id == quiz_id))
    if not quiz:
        return None
    attempts = db.scalar(select(func.count(Attempt.id)).where(Attempt.quiz_id == quiz.id)) or 0
    return QuizDetail(**_fields(quiz), questions=[QuestionOut.model_validate(q) for q in quiz.questions],
                      instructor=InstructorDetail.model_validate(quiz.instructor), counts=AttemptCount(attempts=attempts))

@router.get("")
def get_quizzes(quiz_id: Optional[str] = Query(None, alias="id"), user: TokenData = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        if quiz_id:
            quiz = fetch_one(db, quiz_id)
        else:
            return list_published(db)
    except SQLAlchemyError:
        raise _server_error(db, "fetching quizzes")
    if not quiz:
        raise APIError(404, "Quiz not found")
    return quiz

def build_quiz(body: dict, instructor_id: str) -> Quiz:
    return Quiz(
        title=body["title"],
        description=body.get("description") or None,
        topic=body["topic"],
        difficulty=body.get("difficulty") or Difficulty.MEDIUM,
        duration=int(body.get("duration") or DEFAULT_DURATION),
        instructor_id=instructor_id,
        questions=[
            Question(
                question=q["question"],
                options=q["options"],
                correct_answer=int(q["correctAnswer"]),
                explanation=q.get("explanation") or None,
                topic=q["topic"],
                difficulty=q.get("difficulty") or Difficulty.MEDIUM,
            )
            for q in body["questions"]
        ],
    )

@router.post("", status_code=201)
def create_quiz(payload: Any = Body(None),
                user: TokenData = Depends(require_roles(*STAFF, detail="Unauthorized. Only instructors can create quizzes.")),
                db: Session = Depends(get_db)):
    try:
        validate_quiz_data(payload)
    except QuizValidationError as e:
        raise APIError(400, "Invalid input data", str(e))
    quiz = build_quiz(payload, user.sub)
    try:
        # quiz and its questions go in as one commit
        db.add(quiz); db.commit(); db.refresh(quiz)
    except SQLAlchemyError:
        raise _server_error(db, "creating quiz")
    logger.info(f"Quiz {quiz.id} created by {user.sub} with {len(quiz.questions)} questions")
    return {"message": "Quiz created successfully", "quiz": QuizWithQuestions.model_validate(quiz)}

@router.delete("")
def delete_quiz(quiz_id: Optional[str] = Query(None, alias="id"), user: TokenData = Depends(require_roles(*STAFF)), db: Session = Depends(get_db)):
    if not quiz_id:
        raise APIError(400, "Quiz ID required")
    try:
        quiz = db.get(Quiz, quiz_id)
    except SQLAlchemyError:
        raise _server_error(db, "deleting quiz")
    if not quiz:
        raise APIError(404, "Quiz not found")
    if quiz.instructor_id != user.sub and not user.has_role(Role.ADMIN.value):
        raise APIError(403, "Unauthorized")
    try:
        db.delete(quiz); db.commit()
    except SQLAlchemyError:
        raise _server_error(db, "deleting quiz")
    logger.info(f"Quiz {quiz_id} deleted by {user.sub}")
    return {"message": "Quiz deleted successfully"}
