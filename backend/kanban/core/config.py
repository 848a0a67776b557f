import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[2]

load_dotenv(ROOT / ".env")


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_env: str
    database_url: str
    jwt_secret_key: str
    jwt_algorithm: str
    jwt_access_expire_minutes: int
    cors_origins: str
    upload_dir: str
    base_url: str
    max_upload_bytes: int
    max_upload_files: int
    log_level: str

    def parsed_cors_origins(self) -> list[str]:
        return [item.strip() for item in self.cors_origins.split(",") if item.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings(
        app_name=os.getenv("APP_NAME", "Kanban Board API"),
        app_env=os.getenv("APP_ENV", "dev"),
        database_url=os.getenv("DATABASE_URL", f"sqlite:///{ROOT / 'kanban.db'}"),
        jwt_secret_key=os.getenv("JWT_SECRET_KEY", "change_me_in_env"),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        jwt_access_expire_minutes=int(os.getenv("JWT_ACCESS_EXPIRE_MINUTES", str(60 * 24 * 7))),
        cors_origins=os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173"),
        upload_dir=os.getenv("UPLOAD_DIR", str(ROOT / "uploads")),
        base_url=os.getenv("BASE_URL", "").rstrip("/"),
        max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024))),
        max_upload_files=int(os.getenv("MAX_UPLOAD_FILES", "5")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
