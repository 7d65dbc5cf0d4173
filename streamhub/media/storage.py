# streamhub/media/storage.py
"""
Media host local: guarda lo subido bajo MEDIA_DIR y devuelve la
referencia pública (MEDIA_URL/<subdir>/<nombre>). La DB solo guarda esa
referencia, nunca los bytes. Sin transcodificar: el archivo va tal cual.
"""
import os
import uuid
import shutil
import logging

from fastapi import UploadFile

from streamhub.core.config import Settings

log = logging.getLogger("uvicorn")

VIDEO_EXTS = {".mp4", ".m4v", ".mov", ".3gp", ".3gpp", ".webm", ".mkv", ".avi"}
IMAGE_EXTS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}

VIDEOS_SUBDIR = "videos"
THUMBNAILS_SUBDIR = "thumbnails"
AVATARS_SUBDIR = "avatars"


def ensure_media_dirs(settings: Settings) -> None:
    for sub in (VIDEOS_SUBDIR, THUMBNAILS_SUBDIR, AVATARS_SUBDIR):
        os.makedirs(os.path.join(settings.MEDIA_DIR, sub), exist_ok=True)


def is_video(upload: UploadFile) -> bool:
    ct = (upload.content_type or "").lower()
    ext = os.path.splitext(upload.filename or "")[1].lower()
    return ct.startswith("video/") or ext in VIDEO_EXTS


def is_image(upload: UploadFile) -> bool:
    ct = (upload.content_type or "").lower()
    ext = os.path.splitext(upload.filename or "")[1].lower()
    return ct.startswith("image/") or ext in IMAGE_EXTS


def _public_url(settings: Settings, rel: str) -> str:
    return f"{settings.MEDIA_URL.rstrip('/')}/{rel}"


def save_upload(file: UploadFile, settings: Settings, subdir: str) -> str:
    """
    Copia el archivo a MEDIA_DIR/<subdir>/<uuid><ext>.
    Devuelve la URL pública (p. ej. '/media/videos/abc.mp4').
    """
    os.makedirs(os.path.join(settings.MEDIA_DIR, subdir), exist_ok=True)
    ext = os.path.splitext(file.filename or "")[1].lower() or ".bin"
    rel = f"{subdir}/{uuid.uuid4().hex}{ext}"
    abs_path = os.path.join(settings.MEDIA_DIR, rel)
    with open(abs_path, "wb") as out:
        shutil.copyfileobj(file.file, out)
    return _public_url(settings, rel)


def delete_media(url: str | None, settings: Settings) -> None:
    """
    Borra el archivo físico detrás de una referencia nuestra.
    Referencias externas (placeholders, CDN) se ignoran. No falla si ya no está.
    """
    if not url:
        return
    prefix = settings.MEDIA_URL.rstrip("/") + "/"
    if not url.startswith(prefix):
        return
    rel = url[len(prefix):]
    abs_path = os.path.join(settings.MEDIA_DIR, rel)
    try:
        os.remove(abs_path)
    except FileNotFoundError:
        pass
    except OSError as e:
        log.warning(f"⚠️ No se pudo borrar {abs_path}: {e!r}")
