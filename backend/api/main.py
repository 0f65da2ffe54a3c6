"""
FastAPI application entry point.

Run with: uvicorn api.main:app --reload
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.errors import install_error_handlers
from api.routes import books
from settings import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create app
app = FastAPI(
    title="Bookstore Inventory API",
    description="In-memory book catalog with cover image uploads",
    version="0.1.0",
)

# CORS middleware for the catalog UI
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)

# Mount static files for uploaded covers
uploads_path = books.storage.ensure_root()
app.mount(settings.UPLOADS_URL_PREFIX, StaticFiles(directory=str(uploads_path)), name="uploads")

# Include routers
app.include_router(books.router, prefix="/books", tags=["books"])


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "Bookstore Inventory API"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
