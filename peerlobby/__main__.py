import uvicorn

from peerlobby.core import settings, setup_logging


def main() -> None:
    setup_logging(settings.LOG_LEVEL)
    # uvicorn handles SIGINT/SIGTERM and runs the app's shutdown hook
    uvicorn.run(
        "peerlobby.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
        proxy_headers=True,
    )


if __name__ == "__main__":
    main()
