from __future__ import annotations

import uvicorn

from mimetype_api.core.logging import configure_logging, get_logger
from mimetype_api.core.settings import get_settings

logger = get_logger("server")


def main() -> None:
    configure_logging()
    settings = get_settings()
    logger.info(
        "server.start",
        extra={
            "component": "server",
            "host": settings.API_HOST,
            "port": settings.API_PORT,
            "max_file_size": settings.MAX_FILE_SIZE,
            "fetch_timeout_ms": settings.FETCH_TIMEOUT,
        },
    )
    uvicorn.run("mimetype_api.main:app", host=settings.API_HOST, port=settings.API_PORT, log_config=None)


if __name__ == "__main__":
    main()
