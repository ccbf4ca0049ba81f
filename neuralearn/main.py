import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from neuralearn.core.config import CORS_ORIGINS, LOG_LEVEL
from neuralearn.core.database import init_db
from neuralearn.core.errors import register_exception_handlers
from neuralearn.api.auth import router as auth_router
from neuralearn.api.quiz import router as quiz_router
from neuralearn.api.subjects import router as subjects_router
from neuralearn.api.topics import router as topics_router
from neuralearn.api.chatbot import router as chatbot_router, ws_router as chatbot_ws_router

logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO), format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting NeuraLearn API...")
    init_db()
    yield
    logger.info("Shutdown complete")

app = FastAPI(title="NeuraLearn API", version="1.0.0", lifespan=lifespan)
app.add_middleware(CORSMiddleware, allow_origins=CORS_ORIGINS, allow_credentials=True, allow_methods=["*"], allow_headers=["*"])
register_exception_handlers(app)
app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
app.include_router(quiz_router, prefix="/api/quiz", tags=["quiz"])
app.include_router(subjects_router, prefix="/api/subjects", tags=["subjects"])
app.include_router(topics_router, prefix="/api/topics", tags=["topics"])
app.include_router(chatbot_router, prefix="/api/chatbot", tags=["chatbot"])
app.include_router(chatbot_ws_router, tags=["chatbot"])

@app.get("/health")
def health(): return {"status": "ok"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("neuralearn.main:app", host="0.0.0.0", port=8000, log_level=LOG_LEVEL.lower())
