"""Serve the API with uvicorn: ``python -m product_api``."""

import logging

import uvicorn

from product_api.core.config import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    logger.info(f"Listening on {settings.port}")
    uvicorn.run(
        "product_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
