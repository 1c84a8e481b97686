import logging

import uvicorn

from app.settings import settings

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.info(f"Starting HTTP server on {settings.listen_addr}")
    uvicorn.run(
        "app.main:app",
        host=settings.LISTEN_HOST,
        port=settings.LISTEN_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
