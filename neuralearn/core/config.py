import os
from dotenv import load_dotenv
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./neuralearn.db")
APP_SECRET = os.getenv("APP_SECRET", "dev-secret-change-me")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "120"))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CHATBOT_REPLY_DELAY = float(os.getenv("CHATBOT_REPLY_DELAY", "1.0"))
LOCAL_STORAGE_PATH = os.getenv("LOCAL_STORAGE_PATH", "./.neuralearn_storage.json")
