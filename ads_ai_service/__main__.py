import uvicorn

from .config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "ads_ai_service.main:app",
        host=settings.AI_SERVICE_HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.RELOAD,
    )


if __name__ == "__main__":
    main()
