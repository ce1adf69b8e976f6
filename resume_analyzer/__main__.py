import logging

import uvicorn

from resume_analyzer.core.config import load_settings

logger = logging.getLogger(__name__)


def main() -> None:
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(message)s")
    logger.info("Server running on http://localhost:%s", settings.port)
    uvicorn.run(
        "resume_analyzer.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
