import logging
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session
from neuralearn.core.auth import TokenData, create_token, get_current_user, verify_password
from neuralearn.core.database import get_db
from neuralearn.core.errors import APIError
from neuralearn.models.orm import Role, User

logger = logging.getLogger(__name__)
router = APIRouter()

class Login(BaseModel):
    email: str
    password: str

class Me(BaseModel):
    id: str; email: str; name: str; role: Role

@router.post("/login")
def login(payload: Login, db: Session = Depends(get_db)):
    user = db.scalar(select(User).where(User.email == payload.email.strip().lower()))
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info(f"Failed login for {payload.email}")
        raise APIError(401, "Invalid credentials")
    token = create_token(user.id, user.role.value, user.name)
    return {"access_token": token, "token_type": "bearer", "role": user.role.value}

@router.get("/me", response_model=Me)
def me(user: TokenData = Depends(get_current_user), db: Session = Depends(get_db)):
    row = db.get(User, user.sub)
    if not row:
        raise APIError(401, "Unauthorized")
    return Me(id=row.id, email=row.email, name=row.name, role=row.role)
