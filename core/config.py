import os

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATA_DIR: str = "data"
    DATABASE_NAME: str = "homeforge.db"

    MEDIA_URL_PATH: str = "/uploads"
    MAX_UPLOAD_MB: int = 20
    MAX_FILES_PER_UPLOAD: int = 10

    SESSION_COOKIE_NAME: str = "homeforge_session"
    SESSION_DAYS: int = 30
    COOKIE_SECURE: bool = False

    AUTH_RATE_LIMIT: int = 20
    AUTH_RATE_WINDOW_MINUTES: int = 15

    CORS_ORIGINS: list[str] = ["*"]
    # Peers allowed to set X-Forwarded-For; comma separated, "*" trusts everyone
    FORWARDED_ALLOW_IPS: str = "127.0.0.1"
    LOG_LEVEL: str = "INFO"

    @property
    def SQLALCHEMY_DATABASE_URI(self):
        return f"sqlite:///{os.path.join(self.DATA_DIR, self.DATABASE_NAME)}"

    @property
    def UPLOADS_DIR(self):
        return os.path.join(self.DATA_DIR, "uploads")

    @property
    def MAX_UPLOAD_BYTES(self):
        return self.MAX_UPLOAD_MB * 1024 * 1024

    class Config:
        env_file = ".env"

settings = Settings()
