import json
import logging
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from pydantic import BaseModel
from neuralearn.core.auth import TokenData, decode_token, require_roles
from neuralearn.core.config import CHATBOT_REPLY_DELAY
from neuralearn.core.errors import APIError
from neuralearn.models.orm import Role
from neuralearn.services.chatbot import ChatSession, respond

logger = logging.getLogger(__name__)
router = APIRouter()
ws_router = APIRouter()

class ChatIn(BaseModel):
    message: str

class ChatOut(BaseModel):
    reply: str

@router.post("", response_model=ChatOut)
def ask(payload: ChatIn, user: TokenData = Depends(require_roles(Role.STUDENT.value))):
    if not payload.message.strip():
        raise APIError(400, "Invalid input data", "Message must not be empty")
    return ChatOut(reply=respond(payload.message))

@ws_router.websocket("/ws/chatbot")
async def chat_socket(websocket: WebSocket):
    user = decode_token(websocket.query_params.get("token", ""))
    if user is None or not user.has_role(Role.STUDENT.value):
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    await websocket.accept()
    session = ChatSession(delay=CHATBOT_REPLY_DELAY)
    await websocket.send_text(json.dumps(session.messages[0].to_dict()))
    try:
        while True:
            text = await websocket.receive_text()
            reply = await session.ask(text)
            if reply is not None:
                await websocket.send_text(json.dumps(reply.to_dict()))
    except WebSocketDisconnect:
        logger.info(f"Chat session for {user.sub} closed after {len(session.messages)} messages")
