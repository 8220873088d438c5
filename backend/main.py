# main.py
import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from api import api_router
from core.config import settings
from services.upload_service import UPLOAD_MOUNT

logging.basicConfig(level=settings.LOG_LEVEL.upper())

app = FastAPI(title="Rail QR Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)

# 上傳檔案直接以靜態路徑提供
Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount(f"/{UPLOAD_MOUNT}", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")
