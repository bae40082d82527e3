"""Run the API with uvicorn: ``python -m app``."""
import logging

import uvicorn

from app.config import settings
from app.main import app

logger = logging.getLogger("app")


def main() -> None:
    logger.info("Server is live @ http://%s:%d", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
