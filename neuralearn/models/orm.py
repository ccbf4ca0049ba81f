import enum
import uuid
from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy import String, Text, Boolean, Integer, ForeignKey, JSON, DateTime, Index, Enum as SQLEnum
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase): pass


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Role(str, enum.Enum):
    STUDENT = "STUDENT"
    INSTRUCTOR = "INSTRUCTOR"
    ADMIN = "ADMIN"


class Difficulty(str, enum.Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


def _enum(cls):
    return SQLEnum(cls, native_enum=False, length=16, validate_strings=True)


class User(Base):
    __tablename__ = "users"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    password_hash: Mapped[str] = mapped_column(String(255))
    role: Mapped[Role] = mapped_column(_enum(Role), default=Role.STUDENT)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)

    quizzes: Mapped[List["Quiz"]] = relationship(back_populates="instructor")


# ========== Content catalogue ==========

class Subject(Base):
    __tablename__ = "subjects"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    icon: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)

    topics: Mapped[List["Topic"]] = relationship(
        back_populates="subject", cascade="all, delete-orphan", order_by="Topic.name"
    )


class Topic(Base):
    __tablename__ = "topics"
    __table_args__ = (Index("idx_topics_subject", "subject_id"),)
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    difficulty: Mapped[Difficulty] = mapped_column(_enum(Difficulty), default=Difficulty.MEDIUM)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    subject_id: Mapped[str] = mapped_column(String(32), ForeignKey("subjects.id", ondelete="CASCADE"))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)

    subject: Mapped[Subject] = relationship(back_populates="topics")


# ========== Assessment ==========

class Quiz(Base):
    __tablename__ = "quizzes"
    __table_args__ = (
        Index("idx_quizzes_instructor", "instructor_id"),
        Index("idx_quizzes_published_created", "is_published", "created_at"),
    )
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # free-text label, not a FK to topics
    topic: Mapped[str] = mapped_column(String(255))
    difficulty: Mapped[Difficulty] = mapped_column(_enum(Difficulty), default=Difficulty.MEDIUM)
    duration: Mapped[int] = mapped_column(Integer, default=30)
    is_published: Mapped[bool] = mapped_column(Boolean, default=False)
    instructor_id: Mapped[str] = mapped_column(String(32), ForeignKey("users.id"))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow)

    instructor: Mapped[User] = relationship(back_populates="quizzes")
    questions: Mapped[List["Question"]] = relationship(
        back_populates="quiz", cascade="all, delete-orphan", passive_deletes=True
    )
    attempts: Mapped[List["Attempt"]] = relationship(
        back_populates="quiz", cascade="all, delete-orphan", passive_deletes=True
    )


class Question(Base):
    __tablename__ = "questions"
    __table_args__ = (Index("idx_questions_quiz", "quiz_id"),)
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    question: Mapped[str] = mapped_column(Text)
    options: Mapped[list] = mapped_column(JSON)
    correct_answer: Mapped[int] = mapped_column(Integer)
    explanation: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    topic: Mapped[str] = mapped_column(String(255))
    difficulty: Mapped[Difficulty] = mapped_column(_enum(Difficulty), default=Difficulty.MEDIUM)
    quiz_id: Mapped[str] = mapped_column(String(32), ForeignKey("quizzes.id", ondelete="CASCADE"))

    quiz: Mapped[Quiz] = relationship(back_populates="questions")


class Attempt(Base):
    __tablename__ = "attempts"
    __table_args__ = (Index("idx_attempts_quiz", "quiz_id"), Index("idx_attempts_user", "user_id"))
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(32), ForeignKey("users.id", ondelete="CASCADE"))
    quiz_id: Mapped[str] = mapped_column(String(32), ForeignKey("quizzes.id", ondelete="CASCADE"))
    score: Mapped[int] = mapped_column(Integer, default=0)
    total_questions: Mapped[int] = mapped_column(Integer, default=0)
    completed_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)

    quiz: Mapped[Quiz] = relationship(back_populates="attempts")


class KnowledgeBase(Base):
    __tablename__ = "knowledge_base"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    topic: Mapped[str] = mapped_column(String(255))
    subtopic: Mapped[str] = mapped_column(String(255))
    content: Mapped[str] = mapped_column(Text)
    difficulty: Mapped[Difficulty] = mapped_column(_enum(Difficulty), default=Difficulty.MEDIUM)
    resources: Mapped[list] = mapped_column(JSON, default=list)
    tags: Mapped[list] = mapped_column(JSON, default=list)
