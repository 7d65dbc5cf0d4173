# run_dev.py
"""
Arranque local de StreamHub con uvicorn.

Variables (.env o entorno): HOST, PORT, RELOAD, LOG_LEVEL, APP_MODULE,
además de las de `Settings` (DATABASE_URL, SECRET_KEY, MEDIA_DIR...).
"""
import os
import socket

from dotenv import load_dotenv

TRUTHY = {"1", "true", "yes", "on"}


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in TRUTHY


def _reachable_ip() -> str:
    # la IP con la que salimos a la red (para probar desde el celu)
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as probe:
        try:
            probe.connect(("10.255.255.255", 1))
            return probe.getsockname()[0]
        except OSError:
            return "127.0.0.1"


def main():
    import uvicorn

    load_dotenv(".env")

    app_module = os.getenv("APP_MODULE", "streamhub.main:app")
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    reload_on = _flag("RELOAD", "1")

    print(f"🎬 StreamHub → {app_module}")
    print(f"   docs: http://127.0.0.1:{port}/docs")
    print(f"   red:  http://{_reachable_ip()}:{port}/api/health")
    print(f"   media: {os.path.abspath(os.getenv('MEDIA_DIR', './media'))}")

    uvicorn.run(
        app_module,
        host=host,
        port=port,
        reload=reload_on,
        reload_dirs=["streamhub"],
        # los uploads no deben reiniciar el server
        reload_excludes=["media", "*.db"],
        log_level=os.getenv("LOG_LEVEL", "info"),
        lifespan="on",
    )


if __name__ == "__main__":
    main()
