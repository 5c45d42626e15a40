import os
from datetime import timedelta

from dotenv import load_dotenv

# Load .env from project root so local development MONGO_URI is picked up
load_dotenv()


def _split(value):
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", "change-this-jwt-secret")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.environ.get("JWT_EXPIRES_HOURS", "12")))

    MONGO_URI = os.environ.get(
        "MONGO_URI",
        os.environ.get("MONGODB_URI", "mongodb://localhost:27017/taskmanager"),
    )
    MONGO_DB_NAME = os.environ.get("MONGO_DB_NAME", "taskmanager")
    MONGO_SERVER_SELECTION_TIMEOUT_MS = int(os.environ.get("MONGO_SERVER_SELECTION_TIMEOUT_MS", "2000"))

    # Vite dev server by default
    CORS_ORIGINS = _split(os.environ.get("CORS_ORIGINS", "http://127.0.0.1:5173"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    PASSWORD_MIN_LENGTH = int(os.environ.get("PASSWORD_MIN_LENGTH", "6"))

    ENV = os.environ.get("FLASK_ENV", "development")
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"
    JSON_SORT_KEYS = False
