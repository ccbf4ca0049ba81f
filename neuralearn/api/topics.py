import logging
from datetime import datetime
from typing import Any, Optional
from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from neuralearn.api.common import CamelModel, body_flag, flag
from neuralearn.api.subjects import SubjectOut
from neuralearn.core.database import get_db
from neuralearn.core.errors import APIError
from neuralearn.models.orm import Difficulty, Topic

logger = logging.getLogger(__name__)
router = APIRouter()

class SubjectBrief(CamelModel):
    id: str; name: str; icon: Optional[str] = None

class TopicOut(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    difficulty: Difficulty
    is_active: bool
    subject_id: str
    created_at: datetime

class TopicListItem(TopicOut):
    subject: SubjectBrief

class TopicCreated(TopicOut):
    subject: SubjectOut

@router.get("")
def list_topics(subject_id: Optional[str] = Query(None, alias="subjectId"),
                active: Optional[str] = Query(None), db: Session = Depends(get_db)):
    stmt = select(Topic).options(selectinload(Topic.subject)).order_by(Topic.name.asc())
    if subject_id:
        stmt = stmt.where(Topic.subject_id == subject_id)
    if flag(active):
        stmt = stmt.where(Topic.is_active.is_(True))
    try:
        return [TopicListItem.model_validate(t) for t in db.scalars(stmt).all()]
    except SQLAlchemyError:
        logger.exception("Error fetching topics")
        raise APIError(500, "Failed to fetch topics")

@router.post("", status_code=201)
def create_topic(body: Any = Body(None), db: Session = Depends(get_db)):
    body = body if isinstance(body, dict) else {}
    try:
        topic = Topic(name=body.get("name"), description=body.get("description"),
                      difficulty=body.get("difficulty") or Difficulty.MEDIUM,
                      is_active=body_flag(body.get("isActive")),
                      subject_id=body.get("subjectId"))
        db.add(topic); db.commit(); db.refresh(topic)
        created = TopicCreated.model_validate(topic)
    except (SQLAlchemyError, LookupError, ValueError):
        db.rollback()
        logger.exception("Error creating topic")
        raise APIError(500, "Failed to create topic")
    logger.info(f"Topic {topic.id} created under subject {topic.subject_id}")
    return created
