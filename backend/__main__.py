"""
Run the workout session API with `python -m backend`.

Auto-reload is only enabled in the development environment.
"""
import uvicorn

from backend.settings import get_settings

DEFAULT_PORT = 8001

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "backend.main:app",
        host="0.0.0.0",
        port=DEFAULT_PORT,
        reload=settings.is_development,
        log_level="debug" if settings.is_development else "info",
    )
