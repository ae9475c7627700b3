import uvicorn

from .core.config import settings


def main():
    logging_level = settings.LOG_LEVEL.lower()
    uvicorn.run("besu_bridge.main:app", host=settings.HOST, port=settings.PORT, log_level=logging_level)


if __name__ == "__main__":
    main()
