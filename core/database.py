import os

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from core.config import settings
# Use the same Base as models to ensure one metadata registry
from models.base import Base

os.makedirs(settings.DATA_DIR, exist_ok=True)

engine = create_engine(
    settings.SQLALCHEMY_DATABASE_URI,
    connect_args={"check_same_thread": False},
    future=True
)


@event.listens_for(engine, "connect")
def _sqlite_pragmas(dbapi_connection, connection_record):
    # ON DELETE CASCADE / SET NULL only fire with foreign keys enabled
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
