import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware
from fastapi.staticfiles import StaticFiles
from core.database import Base, engine, SessionLocal
from core.errors import register_error_handlers
from core.logging_setup import setup_logging
from crud.space_crud import seed_default_spaces
from routers import auth_router, space_router, project_router, design_board_router, stats_router
from models import user, session, space, project, design_board, activity  # noqa: F401
from core.config import settings

setup_logging()
logger = logging.getLogger(__name__)


def init_db():
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        seed_default_spaces(db)


init_db()

app = FastAPI(title="HomeForge API")

# Respect X-Forwarded-* only from the reverse proxy; the auth rate limit keys on the client address
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=settings.FORWARDED_ALLOW_IPS)

# Session cookies need credentialed CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(auth_router.router)
app.include_router(space_router.router)
app.include_router(project_router.router)
app.include_router(design_board_router.router)
app.include_router(stats_router.router)

# Uploaded photos
os.makedirs(settings.UPLOADS_DIR, exist_ok=True)
app.mount(
    settings.MEDIA_URL_PATH,
    StaticFiles(directory=settings.UPLOADS_DIR),
    name="uploads",
)


@app.get("/api/health")
def health():
    return {"status": "ok"}


logger.info("HomeForge API ready; data directory %s", os.path.abspath(settings.DATA_DIR))
