from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from typing import Optional
import bcrypt
import jwt
from datetime import datetime, timedelta, timezone
from neuralearn.core.config import APP_SECRET, ACCESS_TOKEN_EXPIRE_MINUTES, BCRYPT_ROUNDS

class TokenData(BaseModel):
    sub: str
    role: str
    name: str = ""

    def has_role(self, *roles: str) -> bool:
        return self.role in roles

# auto_error off so a missing header is reported by the guards below, not by HTTPBearer
bearer = HTTPBearer(auto_error=False)

def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")

def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False

def create_token(user_id: str, role: str, name: str = "", ttl_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES) -> str:
    now = datetime.now(timezone.utc)
    payload = {"sub": user_id, "role": role, "name": name, "iat": int(now.timestamp()), "exp": int((now + timedelta(minutes=ttl_minutes)).timestamp())}
    return jwt.encode(payload, APP_SECRET, algorithm="HS256")

def decode_token(token: str) -> Optional[TokenData]:
    try:
        payload = jwt.decode(token, APP_SECRET, algorithms=["HS256"])
        return TokenData(sub=payload["sub"], role=payload.get("role", ""), name=payload.get("name", ""))
    except (jwt.PyJWTError, KeyError):
        return None

def get_optional_user(creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> Optional[TokenData]:
    if creds is None:
        return None
    return decode_token(creds.credentials)

def get_current_user(user: Optional[TokenData] = Depends(get_optional_user)) -> TokenData:
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user

def require_roles(*required: str, detail: str = "Unauthorized"):
    def checker(user: Optional[TokenData] = Depends(get_optional_user)) -> TokenData:
        if user is None or not user.has_role(*required):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
        return user
    return checker
