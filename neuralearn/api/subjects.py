import logging
from datetime import datetime
from typing import Any, List, Optional
from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from neuralearn.api.common import CamelModel, body_flag, flag
from neuralearn.core.database import get_db
from neuralearn.core.errors import APIError
from neuralearn.models.orm import Difficulty, Subject

logger = logging.getLogger(__name__)
router = APIRouter()

class SubjectOut(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    is_active: bool
    created_at: datetime

class NestedTopic(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    difficulty: Difficulty
    is_active: bool
    subject_id: str
    created_at: datetime

class SubjectWithTopics(SubjectOut):
    topics: List[NestedTopic]

@router.get("")
def list_subjects(include_topics: Optional[str] = Query(None, alias="includeTopics"),
                  active: Optional[str] = Query(None), db: Session = Depends(get_db)):
    stmt = select(Subject).order_by(Subject.name.asc())
    if flag(active):
        stmt = stmt.where(Subject.is_active.is_(True))
    if flag(include_topics):
        stmt = stmt.options(selectinload(Subject.topics))
    try:
        subjects = db.scalars(stmt).all()
        if not flag(include_topics):
            return [SubjectOut.model_validate(s) for s in subjects]
        return [SubjectWithTopics(**SubjectOut.model_validate(s).model_dump(),
                                  topics=[NestedTopic.model_validate(t) for t in s.topics if t.is_active])
                for s in subjects]
    except SQLAlchemyError:
        logger.exception("Error fetching subjects")
        raise APIError(500, "Failed to fetch subjects")

@router.post("", status_code=201)
def create_subject(body: Any = Body(None), db: Session = Depends(get_db)):
    body = body if isinstance(body, dict) else {}
    try:
        subject = Subject(name=body.get("name"), description=body.get("description"), icon=body.get("icon"),
                          is_active=body_flag(body.get("isActive")))
        db.add(subject); db.commit(); db.refresh(subject)
    except (SQLAlchemyError, ValueError):
        db.rollback()
        logger.exception("Error creating subject")
        raise APIError(500, "Failed to create subject")
    logger.info(f"Subject {subject.id} created")
    return SubjectOut.model_validate(subject)
