"""Run the development server: python -m kindred"""
import uvicorn

from kindred.core.config import settings


def main():
    uvicorn.run(
        "kindred.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
