"""
Server entrypoint: `python -m notes_api`.

uvicorn stops accepting connections on SIGTERM/SIGINT, waits up to
SHUTDOWN_TIMEOUT seconds for in-flight requests, then runs the lifespan
shutdown (engine disposal).
"""

import uvicorn

from notes_api.config import settings


def main() -> None:
    uvicorn.run(
        "notes_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        access_log=False,  # RequestLoggingMiddleware writes the access log
        timeout_graceful_shutdown=settings.shutdown_timeout,
    )


if __name__ == "__main__":
    main()
